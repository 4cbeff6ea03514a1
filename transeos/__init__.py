"""Name, symbol and quantity encoding for BasicToken contract clients."""

from .actions import (
    Action,
    ActionBuilder,
    allowance_key,
    build_approve,
    build_create,
    build_issue,
    build_transfer,
    build_transferfrom,
)
from .config import ConfigurationError, TokenConfig, load_token_config
from .errors import (
    ActionError,
    InvalidName,
    InvalidNameCharacter,
    InvalidNameLength,
    InvalidNameValue,
    InvalidQuantity,
    InvalidSymbol,
    InvalidSymbolCharacter,
    InvalidSymbolLength,
    InvalidSymbolPrecision,
    InvalidThirteenthCharacter,
    TransEOSError,
)
from .names import char_to_value, decode_name, encode_name
from .quantity import Quantity, QuantityFormat, format_quantity, parse_quantity
from .symbols import decode_symbol, decode_symbol_code, encode_symbol, encode_symbol_code

__all__ = [
    "Action",
    "ActionBuilder",
    "allowance_key",
    "build_approve",
    "build_create",
    "build_issue",
    "build_transfer",
    "build_transferfrom",
    "ConfigurationError",
    "TokenConfig",
    "load_token_config",
    "ActionError",
    "InvalidName",
    "InvalidNameCharacter",
    "InvalidNameLength",
    "InvalidNameValue",
    "InvalidQuantity",
    "InvalidSymbol",
    "InvalidSymbolCharacter",
    "InvalidSymbolLength",
    "InvalidSymbolPrecision",
    "InvalidThirteenthCharacter",
    "TransEOSError",
    "char_to_value",
    "decode_name",
    "encode_name",
    "Quantity",
    "QuantityFormat",
    "format_quantity",
    "parse_quantity",
    "decode_symbol",
    "decode_symbol_code",
    "encode_symbol",
    "encode_symbol_code",
]
