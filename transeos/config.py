"""Shared configuration loader for transeos."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .errors import InvalidName, InvalidSymbol
from .names import encode_name
from .symbols import SYMBOL_PRECISION_MAX, encode_symbol_code


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".transeos.yaml"
DEFAULT_CONTRACT = "basictoken"
_CONFIG_PATH_OVERRIDE: Path | None = None


@dataclass
class TokenConfig:
    """Contract account and known currency precisions."""

    contract: str = DEFAULT_CONTRACT
    currencies: Dict[str, int] = field(default_factory=dict)

    def decimals_for(self, symbol: str) -> int | None:
        return self.currencies.get(symbol)


def set_default_config_path(path: str | Path | None) -> None:
    """Remember a user-supplied config path for future loads."""

    global _CONFIG_PATH_OVERRIDE
    _CONFIG_PATH_OVERRIDE = Path(path).expanduser() if path else None


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with a 'token' section")
    return loaded


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def _coerce_contract(raw: Any, *, source: str) -> str:
    if not isinstance(raw, str) or not raw:
        raise ConfigurationError(f"Contract account in {source} must be a non-empty string")
    try:
        encode_name(raw)
    except InvalidName as exc:
        raise ConfigurationError(f"Invalid contract account in {source}: {exc}") from exc
    return raw


def _coerce_currencies(raw: Any, *, source: str) -> Dict[str, int]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Expected 'currencies' in {source} to map symbols to decimals")

    currencies: Dict[str, int] = {}
    for symbol, decimals in raw.items():
        try:
            encode_symbol_code(symbol)
        except (InvalidSymbol, TypeError) as exc:
            raise ConfigurationError(f"Invalid currency symbol in {source}: {exc}") from exc
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise ConfigurationError(f"Decimals for {symbol} in {source} must be an integer: {decimals!r}")
        if not 0 <= decimals <= SYMBOL_PRECISION_MAX:
            raise ConfigurationError(
                f"Decimals for {symbol} in {source} must be between 0 and {SYMBOL_PRECISION_MAX}"
            )
        currencies[symbol] = decimals
    return currencies


def load_token_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> TokenConfig:
    """Load token configuration from environment variables and optional YAML.

    Precedence is ``overrides`` > environment > file > defaults. Currency tables
    from the file and from ``overrides["currencies"]`` are merged, with the
    overrides winning per symbol.
    """

    env_map = os.environ if env is None else env
    env_path = env_map.get("TRANSEOS_CONFIG")
    explicit_path = (
        config_path is not None or _CONFIG_PATH_OVERRIDE is not None or bool(env_path)
    )
    if config_path is not None:
        path = Path(config_path).expanduser()
    elif _CONFIG_PATH_OVERRIDE is not None:
        path = _CONFIG_PATH_OVERRIDE
    elif env_path:
        path = Path(env_path).expanduser()
    else:
        path = DEFAULT_CONFIG_PATH

    file_config = _load_config_file(path, required=explicit_path)
    token_section = file_config.get("token", {})
    if token_section is None:
        token_section = {}
    if not isinstance(token_section, dict):
        raise ConfigurationError(f"Expected 'token' to be a mapping in {path}")

    override_map = dict(overrides or {})

    resolved_contract = _first_value(
        override_map.get("contract"),
        env_map.get("TRANSEOS_CONTRACT") or None,
        token_section.get("contract"),
        default=DEFAULT_CONTRACT,
    )
    if override_map.get("contract") is not None:
        source = "overrides"
    elif env_map.get("TRANSEOS_CONTRACT"):
        source = "environment"
    else:
        source = str(path)
    contract = _coerce_contract(resolved_contract, source=source)

    currencies = _coerce_currencies(token_section.get("currencies"), source=f"{path} token.currencies")
    currencies.update(_coerce_currencies(override_map.get("currencies"), source="overrides"))

    return TokenConfig(contract=contract, currencies=currencies)
