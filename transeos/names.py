"""Account name codec.

Ledger account names are strings of up to 13 characters drawn from a 32-symbol
alphabet. They are stored as a single unsigned 64-bit word: the first 12
characters take 5 bits each, most significant first, and an optional 13th
character fills the remaining low nibble, so it is limited to the first 16
alphabet symbols (``.`` through ``j``).

The empty string has no packed form. :func:`encode_name` returns ``None`` for
it, which keeps "unset" distinguishable from ``"."`` (which packs to ``0``).
"""

from __future__ import annotations

from typing import Dict

from .errors import (
    InvalidNameCharacter,
    InvalidNameLength,
    InvalidNameValue,
    InvalidThirteenthCharacter,
)

NAME_ALPHABET = ".12345abcdefghijklmnopqrstuvwxyz"
NAME_VALUES: Dict[str, int] = {char: index for index, char in enumerate(NAME_ALPHABET)}

NAME_MAX_LENGTH = 13
NAME_PACKED_CHARS = 12
BITS_PER_CHAR = 5
THIRTEENTH_CHAR_MAX = 0x0F
UINT64_MAX = (1 << 64) - 1


def char_to_value(char: str, position: int | None = None) -> int:
    """Return the 5-bit alphabet value for ``char``.

    ``.`` maps to 0, ``1``-``5`` to 1-5 and ``a``-``z`` to 6-31. Any other
    character raises :class:`InvalidNameCharacter`.
    """

    try:
        return NAME_VALUES[char]
    except KeyError:
        raise InvalidNameCharacter(
            f"character {char!r} is not allowed in account names (allowed: .1-5a-z)",
            char,
            position,
        ) from None


def encode_name(name: str) -> int | None:
    """Pack ``name`` into its 64-bit ledger representation.

    Returns ``None`` for the empty name. Raises :class:`InvalidNameLength` for
    names longer than 13 characters, :class:`InvalidNameCharacter` for
    characters outside the alphabet and :class:`InvalidThirteenthCharacter`
    when a 13th character maps above 15.
    """

    if not isinstance(name, str):
        raise TypeError(f"account name must be a string, not {type(name).__name__}")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidNameLength(
            f"account name {name!r} is {len(name)} characters long; at most "
            f"{NAME_MAX_LENGTH} are allowed",
            name,
        )
    if not name:
        return None

    # Every character is checked before any bits are packed.
    values = [char_to_value(char, index) for index, char in enumerate(name)]

    packed = 0
    head = values[:NAME_PACKED_CHARS]
    for value in head:
        packed = (packed << BITS_PER_CHAR) | value
    packed <<= 4 + BITS_PER_CHAR * (NAME_PACKED_CHARS - len(head))

    if len(values) == NAME_MAX_LENGTH:
        last = values[NAME_PACKED_CHARS]
        if last > THIRTEENTH_CHAR_MAX:
            raise InvalidThirteenthCharacter(
                f"thirteenth character {name[NAME_PACKED_CHARS]!r} of {name!r} must be one "
                f"of {NAME_ALPHABET[:THIRTEENTH_CHAR_MAX + 1]!r}",
                name,
            )
        packed |= last

    return packed


def decode_name(value: int) -> str:
    """Unpack a 64-bit name value back into its string form.

    Trailing ``.`` characters are padding and are stripped, so
    ``decode_name(encode_name("abc.."))`` returns ``"abc"`` and
    ``decode_name(0)`` returns ``""``.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"name value must be an integer, not {type(value).__name__}")
    if not 0 <= value <= UINT64_MAX:
        raise InvalidNameValue(f"name value {value} is not a 64-bit unsigned integer", value)

    chars = [NAME_ALPHABET[value & THIRTEENTH_CHAR_MAX]]
    remaining = value >> 4
    for _ in range(NAME_PACKED_CHARS):
        chars.append(NAME_ALPHABET[remaining & 0x1F])
        remaining >>= BITS_PER_CHAR
    return "".join(reversed(chars)).rstrip(".")
