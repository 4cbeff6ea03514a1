"""Currency symbol codec.

A symbol code is up to seven upper-case ASCII letters packed into a 64-bit word,
one byte per character. Characters are folded in from the last to the first, so
the first character lands in the least significant byte: ``"EOS"`` packs to
``0x534F45``.

The ledger's full symbol word additionally carries the currency precision in its
low byte (``code << 8 | precision``); :func:`encode_symbol` and
:func:`decode_symbol` handle that form.
"""

from __future__ import annotations

from typing import Tuple

from .errors import InvalidSymbolCharacter, InvalidSymbolLength, InvalidSymbolPrecision

SYMBOL_CODE_MAX_LENGTH = 7
SYMBOL_PRECISION_MAX = 0xFF
UINT64_MAX = (1 << 64) - 1


def _check_word(value: int, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an integer, not {type(value).__name__}")
    if not 0 <= value <= UINT64_MAX:
        raise InvalidSymbolLength(f"{what} {value} is not a 64-bit unsigned integer", value)


def encode_symbol_code(code: str) -> int:
    """Pack a symbol code such as ``"TBTC"`` into its integer form.

    Raises :class:`InvalidSymbolLength` for codes longer than seven characters
    and :class:`InvalidSymbolCharacter` for anything outside ``A-Z``.
    """

    if not isinstance(code, str):
        raise TypeError(f"symbol code must be a string, not {type(code).__name__}")
    if len(code) > SYMBOL_CODE_MAX_LENGTH:
        raise InvalidSymbolLength(
            f"symbol code {code!r} is {len(code)} characters long; at most "
            f"{SYMBOL_CODE_MAX_LENGTH} are allowed",
            code,
        )

    packed = 0
    for char in reversed(code):
        codepoint = ord(char)
        if not 65 <= codepoint <= 90:
            raise InvalidSymbolCharacter(
                f"symbol code {code!r} may only contain upper-case letters A-Z (got {char!r})",
                code,
            )
        packed = (packed << 8) | codepoint
    return packed


def decode_symbol_code(value: int) -> str:
    """Unpack an integer symbol code back into its letters.

    Bytes are read from the least significant end until the first zero byte;
    any populated byte above that is rejected.
    """

    _check_word(value, "symbol code value")
    letters = []
    remaining = value
    while remaining:
        codepoint = remaining & 0xFF
        if not 65 <= codepoint <= 90:
            raise InvalidSymbolCharacter(
                f"symbol code value {value:#x} contains byte {codepoint:#04x}, which is not A-Z",
                value,
            )
        letters.append(chr(codepoint))
        remaining >>= 8
    if len(letters) > SYMBOL_CODE_MAX_LENGTH:
        raise InvalidSymbolLength(
            f"symbol code value {value:#x} holds {len(letters)} characters; at most "
            f"{SYMBOL_CODE_MAX_LENGTH} are allowed",
            value,
        )
    return "".join(letters)


def encode_symbol(precision: int, code: str) -> int:
    """Return the ledger symbol word for ``code`` with ``precision`` decimals."""

    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidSymbolPrecision(
            f"symbol precision must be an integer, not {type(precision).__name__}", precision
        )
    if not 0 <= precision <= SYMBOL_PRECISION_MAX:
        raise InvalidSymbolPrecision(
            f"symbol precision {precision} must be between 0 and {SYMBOL_PRECISION_MAX}",
            precision,
        )
    return (encode_symbol_code(code) << 8) | precision


def decode_symbol(value: int) -> Tuple[int, str]:
    """Split a ledger symbol word into ``(precision, code)``."""

    _check_word(value, "symbol value")
    return value & SYMBOL_PRECISION_MAX, decode_symbol_code(value >> 8)
