from __future__ import annotations

import json
from pathlib import Path

import pytest

from transeos import cli


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("transeos.config.DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")
    monkeypatch.setattr("transeos.config._CONFIG_PATH_OVERRIDE", None)
    monkeypatch.delenv("TRANSEOS_CONFIG", raising=False)
    monkeypatch.delenv("TRANSEOS_CONTRACT", raising=False)


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> str:
    cli.main(list(argv))
    return capsys.readouterr().out.strip()


def test_name_encode_and_decode(capsys) -> None:
    assert _run(capsys, "name-encode", "eosio") == "6138663577826885632"
    assert _run(capsys, "name-encode", "eosio", "--hex") == "0x5530ea0000000000"
    assert _run(capsys, "name-decode", "0x5530ea0000000000") == "eosio"


def test_symbol_encode_and_decode(capsys) -> None:
    assert _run(capsys, "symbol-encode", "EOS", "--hex") == "0x0000000000534f45"
    assert _run(capsys, "symbol-encode", "EOS", "--precision", "4") == str(0x534F4504)
    assert _run(capsys, "symbol-decode", str(0x534F45)) == "EOS"
    assert _run(capsys, "symbol-decode", "0x534f4504", "--with-precision") == "4,EOS"


def test_format_quantity(capsys) -> None:
    assert _run(capsys, "format-quantity", "1.239999", "--decimals", "2", "--symbol", "TBTC") == "1.23 TBTC"


def test_format_quantity_uses_configured_precision(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("token:\n  currencies:\n    TBTC: 8\n")

    output = _run(capsys, "--config", str(config_path), "format-quantity", "2", "--symbol", "TBTC")

    assert output == "2.00000000 TBTC"


def test_allowance_key(capsys) -> None:
    from transeos.actions import allowance_key

    assert _run(capsys, "allowance-key", "carol", "TBTC") == str(allowance_key("carol", "TBTC"))


def test_build_action_prints_json(capsys) -> None:
    output = _run(
        capsys,
        "--contract",
        "basictoken",
        "build-action",
        "transfer",
        "--from",
        "alice",
        "--to",
        "bob",
        "--quantity",
        "12.5",
        "--decimals",
        "4",
        "--symbol",
        "TBTC",
        "--memo",
        "invoice 7",
    )

    assert json.loads(output) == {
        "account": "basictoken",
        "name": "transfer",
        "data": {"from": "alice", "to": "bob", "quantity": "12.5000 TBTC", "memo": "invoice 7"},
    }


@pytest.mark.parametrize(
    "argv, fragment",
    [
        (["name-encode", "Alice"], "not allowed in account names"),
        (["name-encode", ""], "empty name"),
        (["name-decode", "not-a-number"], "invalid integer"),
        (["symbol-encode", "eos"], "upper-case letters"),
        (["format-quantity", "abc", "--decimals", "2", "--symbol", "TBTC"], "not a base-10 number"),
        (["format-quantity", "1", "--symbol", "TBTC"], "--decimals is required"),
        (["build-action", "approve", "--owner", "alice", "--spender", "alice",
          "--quantity", "1", "--decimals", "2", "--symbol", "TBTC"], "cannot allow self"),
    ],
)
def test_errors_exit_with_status_one(argv, fragment, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)

    assert excinfo.value.code == 1
    assert fragment in capsys.readouterr().err
