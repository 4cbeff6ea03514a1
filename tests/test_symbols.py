from __future__ import annotations

import pytest

from transeos.errors import (
    InvalidSymbol,
    InvalidSymbolCharacter,
    InvalidSymbolLength,
    InvalidSymbolPrecision,
)
from transeos.symbols import decode_symbol, decode_symbol_code, encode_symbol, encode_symbol_code


def test_encode_packs_first_character_into_low_byte() -> None:
    value = encode_symbol_code("EOS")

    assert value == 0x534F45
    assert value & 0xFF == ord("E")
    assert (value >> 8) & 0xFF == ord("O")
    assert value >> 16 == ord("S")


def test_encode_known_codes() -> None:
    assert encode_symbol_code("") == 0
    assert encode_symbol_code("A") == 0x41
    assert encode_symbol_code("TBTC") == 0x43544254
    assert encode_symbol_code("ABCDEFG") == 0x47464544434241


def test_too_long_fails_before_character_checks() -> None:
    with pytest.raises(InvalidSymbolLength):
        encode_symbol_code("ABCDEFGH")
    with pytest.raises(InvalidSymbolLength):
        encode_symbol_code("abcdefgh1")


@pytest.mark.parametrize("code", ["eos", "Eos", "EO1", "E S", "TB_C", "ÉOS"])
def test_rejects_non_uppercase_letters(code: str) -> None:
    with pytest.raises(InvalidSymbolCharacter) as excinfo:
        encode_symbol_code(code)
    assert excinfo.value.value == code


def test_symbol_errors_are_value_errors() -> None:
    with pytest.raises(InvalidSymbol):
        encode_symbol_code("eos")
    with pytest.raises(ValueError):
        encode_symbol_code("ABCDEFGH")


@pytest.mark.parametrize("code", ["", "A", "EOS", "TBTC", "ABCDEFG"])
def test_decode_inverts_encode(code: str) -> None:
    assert decode_symbol_code(encode_symbol_code(code)) == code


def test_decode_rejects_non_letter_bytes() -> None:
    with pytest.raises(InvalidSymbolCharacter):
        decode_symbol_code(0x61)
    with pytest.raises(InvalidSymbolCharacter):
        decode_symbol_code(0x4100)


def test_decode_rejects_eight_letters() -> None:
    with pytest.raises(InvalidSymbolLength):
        decode_symbol_code(0x4141414141414141)


def test_symbol_word_carries_precision() -> None:
    value = encode_symbol(4, "EOS")

    assert value == 0x534F4504
    assert decode_symbol(value) == (4, "EOS")
    assert decode_symbol(encode_symbol(0, "TBTC")) == (0, "TBTC")


@pytest.mark.parametrize("precision", [-1, 256, True])
def test_symbol_precision_must_fit_one_byte(precision: int) -> None:
    with pytest.raises(InvalidSymbolPrecision):
        encode_symbol(precision, "EOS")
