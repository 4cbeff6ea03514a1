"""Command-line interface for the transeos encoding and action helpers.

The CLI is a thin façade over the name/symbol codecs, the quantity formatter
and the action builders, so operators can check the exact values a wallet will
sign without writing Python.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .actions import ACTION_NAMES, ActionBuilder, allowance_key
from .config import ConfigurationError, TokenConfig, load_token_config
from .errors import TransEOSError
from .names import decode_name, encode_name
from .quantity import format_quantity
from .symbols import decode_symbol, decode_symbol_code, encode_symbol, encode_symbol_code

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    """Raised when CLI arguments are invalid."""


def _parse_uint(raw: str) -> int:
    try:
        return int(raw, 0)
    except ValueError as exc:
        raise CLIError(f"invalid integer value: {raw}") from exc


def _format_int(value: int, as_hex: bool) -> str:
    return f"{value:#018x}" if as_hex else str(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BasicToken name, symbol and quantity tools")
    parser.add_argument("--config", default=None, help="Path to a transeos YAML config file")
    parser.add_argument("--contract", default=None, help="Contract account (overrides config)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    name_encode_parser = subparsers.add_parser(
        "name-encode", help="pack an account name into its 64-bit value"
    )
    name_encode_parser.add_argument("name", help="Account name (up to 13 characters of .1-5a-z)")
    name_encode_parser.add_argument("--hex", action="store_true", help="Print the value in hex")

    name_decode_parser = subparsers.add_parser(
        "name-decode", help="unpack a 64-bit value into an account name"
    )
    name_decode_parser.add_argument("value", help="Integer value (decimal or 0x-prefixed hex)")

    symbol_encode_parser = subparsers.add_parser(
        "symbol-encode", help="pack a symbol code (optionally with precision)"
    )
    symbol_encode_parser.add_argument("code", help="Symbol code, up to 7 upper-case letters")
    symbol_encode_parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Also pack the currency precision into the low byte",
    )
    symbol_encode_parser.add_argument("--hex", action="store_true", help="Print the value in hex")

    symbol_decode_parser = subparsers.add_parser(
        "symbol-decode", help="unpack a symbol code value"
    )
    symbol_decode_parser.add_argument("value", help="Integer value (decimal or 0x-prefixed hex)")
    symbol_decode_parser.add_argument(
        "--with-precision",
        action="store_true",
        help="Treat the low byte as the currency precision",
    )

    format_parser = subparsers.add_parser(
        "format-quantity", help="render an amount as a protocol asset string"
    )
    format_parser.add_argument("value", help="Amount, e.g. 1.5 or 12345678901234.5678")
    format_parser.add_argument("--symbol", required=True, help="Currency symbol code")
    format_parser.add_argument(
        "--decimals",
        type=int,
        default=None,
        help="Decimal places (defaults to the configured precision for the symbol)",
    )

    key_parser = subparsers.add_parser(
        "allowance-key", help="compute the allowed-table key for a spender and symbol"
    )
    key_parser.add_argument("spender", help="Spender account name")
    key_parser.add_argument("symbol", help="Currency symbol code")

    action_parser = subparsers.add_parser(
        "build-action", help="print the JSON for a contract action"
    )
    action_parser.add_argument("action", choices=ACTION_NAMES, help="Contract action to build")
    action_parser.add_argument("--issuer", default=None, help="Issuer account (create)")
    action_parser.add_argument("--from", dest="sender", default=None, help="Source account")
    action_parser.add_argument("--to", default=None, help="Destination account")
    action_parser.add_argument("--owner", default=None, help="Owner account (approve)")
    action_parser.add_argument("--spender", default=None, help="Spender account")
    action_parser.add_argument(
        "--quantity", required=True, help="Amount (maximum supply for create)"
    )
    action_parser.add_argument("--symbol", required=True, help="Currency symbol code")
    action_parser.add_argument("--decimals", type=int, default=None, help="Decimal places")
    action_parser.add_argument("--memo", default=None, help="Optional memo")
    return parser


def _load_config(args: argparse.Namespace) -> TokenConfig:
    overrides: dict[str, Any] = {}
    if args.contract:
        overrides["contract"] = args.contract
    return load_token_config(config_path=args.config, overrides=overrides)


def cmd_name_encode(args: argparse.Namespace) -> None:
    value = encode_name(args.name)
    if value is None:
        raise CLIError("the empty name has no encoded value")
    print(_format_int(value, args.hex))


def cmd_name_decode(args: argparse.Namespace) -> None:
    print(decode_name(_parse_uint(args.value)))


def cmd_symbol_encode(args: argparse.Namespace) -> None:
    if args.precision is None:
        value = encode_symbol_code(args.code)
    else:
        value = encode_symbol(args.precision, args.code)
    print(_format_int(value, args.hex))


def cmd_symbol_decode(args: argparse.Namespace) -> None:
    value = _parse_uint(args.value)
    if args.with_precision:
        precision, code = decode_symbol(value)
        print(f"{precision},{code}")
    else:
        print(decode_symbol_code(value))


def cmd_format_quantity(args: argparse.Namespace) -> None:
    decimals = args.decimals
    if decimals is None:
        decimals = _load_config(args).decimals_for(args.symbol)
        if decimals is None:
            raise CLIError(f"--decimals is required; {args.symbol} is not a configured currency")
    print(format_quantity(args.value, decimals, args.symbol))


def cmd_allowance_key(args: argparse.Namespace) -> None:
    print(allowance_key(args.spender, args.symbol))


def _action_kwargs(args: argparse.Namespace) -> dict[str, Any]:
    common = {"symbol": args.symbol, "decimals": args.decimals}
    if args.action == "create":
        return {**common, "issuer": args.issuer, "max_supply": args.quantity}
    if args.action == "issue":
        return {**common, "to": args.to, "quantity": args.quantity, "memo": args.memo}
    if args.action == "transfer":
        return {
            **common,
            "sender": args.sender,
            "to": args.to,
            "quantity": args.quantity,
            "memo": args.memo,
        }
    if args.action == "transferfrom":
        return {
            **common,
            "sender": args.sender,
            "to": args.to,
            "spender": args.spender,
            "quantity": args.quantity,
            "memo": args.memo,
        }
    return {**common, "owner": args.owner, "spender": args.spender, "quantity": args.quantity}


def cmd_build_action(args: argparse.Namespace) -> None:
    builder = ActionBuilder.from_config(_load_config(args))
    action = builder.build(args.action, **_action_kwargs(args))
    print(json.dumps(action.to_dict(), indent=2))


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    try:
        if args.command == "name-encode":
            cmd_name_encode(args)
        elif args.command == "name-decode":
            cmd_name_decode(args)
        elif args.command == "symbol-encode":
            cmd_symbol_encode(args)
        elif args.command == "symbol-decode":
            cmd_symbol_decode(args)
        elif args.command == "format-quantity":
            cmd_format_quantity(args)
        elif args.command == "allowance-key":
            cmd_allowance_key(args)
        elif args.command == "build-action":
            cmd_build_action(args)
        else:  # pragma: no cover - argparse enforces choices
            raise CLIError(f"Unknown command: {args.command}")
    except (CLIError, ConfigurationError, TransEOSError) as exc:
        parser.exit(1, f"error: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
