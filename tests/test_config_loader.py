from pathlib import Path

import pytest

from transeos import config as config_module
from transeos.config import (
    DEFAULT_CONTRACT,
    ConfigurationError,
    TokenConfig,
    load_token_config,
    set_default_config_path,
)


def test_load_token_config_prefers_environment_over_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
        token:
          contract: filetoken
          currencies:
            TBTC: 8
        """
    )

    config = load_token_config(config_path=config_path, env={"TRANSEOS_CONTRACT": "envtoken"})

    assert isinstance(config, TokenConfig)
    assert config.contract == "envtoken"
    assert config.currencies == {"TBTC": 8}
    assert config.decimals_for("TBTC") == 8
    assert config.decimals_for("TETH") is None


def test_load_token_config_reads_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / ".transeos.yaml"
    monkeypatch.setattr("transeos.config.DEFAULT_CONFIG_PATH", config_path)
    config_path.write_text(
        """
        token:
          contract: yamltoken
          currencies:
            TETH: 6
            TBTC: 8
        """
    )

    config = load_token_config(env={})

    assert config.contract == "yamltoken"
    assert config.currencies == {"TETH": 6, "TBTC": 8}


def test_defaults_when_no_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("transeos.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")

    config = load_token_config(env={})

    assert config.contract == DEFAULT_CONTRACT
    assert config.currencies == {}


def test_explicit_missing_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_token_config(config_path=tmp_path / "missing.yaml", env={})


def test_config_path_from_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "env.yaml"
    config_path.write_text("token:\n  contract: envfile\n")

    config = load_token_config(env={"TRANSEOS_CONFIG": str(config_path)})

    assert config.contract == "envfile"


def test_set_default_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "_CONFIG_PATH_OVERRIDE", None)
    config_path = tmp_path / "override.yaml"
    config_path.write_text("token:\n  contract: overridden\n")

    set_default_config_path(config_path)

    assert load_token_config(env={}).contract == "overridden"


def test_overrides_win_and_merge_currencies(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("token:\n  contract: filetoken\n  currencies:\n    TBTC: 8\n    TETH: 6\n")

    config = load_token_config(
        config_path=config_path,
        env={"TRANSEOS_CONTRACT": "envtoken"},
        overrides={"contract": "clitoken", "currencies": {"TETH": 4}},
    )

    assert config.contract == "clitoken"
    assert config.currencies == {"TBTC": 8, "TETH": 4}


@pytest.mark.parametrize(
    "body, fragment",
    [
        ("token:\n  contract: Bad\n", "Invalid contract account"),
        ("token:\n  currencies:\n    tbtc: 8\n", "Invalid currency symbol"),
        ("token:\n  currencies:\n    TBTC: eight\n", "must be an integer"),
        ("token:\n  currencies:\n    TBTC: 300\n", "between 0 and 255"),
        ("token:\n  currencies: [TBTC]\n", "map symbols to decimals"),
        ("token: [1, 2]\n", "'token' to be a mapping"),
        ("- just a list\n", "YAML object"),
    ],
)
def test_invalid_configuration(tmp_path: Path, body: str, fragment: str) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(body)

    with pytest.raises(ConfigurationError, match=fragment):
        load_token_config(config_path=config_path, env={})
