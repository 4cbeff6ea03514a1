"""Fixed-precision quantity formatting.

Contract actions take amounts as asset strings such as ``"1.2300 TBTC"``: the
value always shows exactly as many fractional digits as the currency's
precision. Values are parsed into :class:`decimal.Decimal` and truncated toward
zero, so ``1.239999`` at two decimals is ``1.23``. Binary floats are never used
for the arithmetic.

The rounding mode and decimal-place count live in a :class:`QuantityFormat`
value and a per-call :class:`decimal.Context`; the thread's global decimal
context is never read or modified.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
)
from typing import Union

from .errors import InvalidQuantity
from .symbols import encode_symbol_code

RawValue = Union[str, int, float, Decimal]

#: Largest amount (in smallest units) the ledger accepts in an asset.
ASSET_MAX_AMOUNT = (1 << 62) - 1

_ROUNDING_MODES = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    }
)

# Integer-digit ceiling for parsed values; far above any ledger amount.
_MAX_INTEGER_DIGITS = 1024

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_ASSET_RE = re.compile(r"(?P<amount>[+-]?\d+(?:\.(?P<fraction>\d+))?) (?P<symbol>\S*)")


def parse_decimal(raw_value: RawValue) -> Decimal:
    """Convert ``raw_value`` into a finite :class:`~decimal.Decimal`.

    Strings must be plain base-10 numbers (sign, digits, optional fraction and
    exponent; surrounding whitespace is ignored). Floats are converted through
    their shortest ``repr`` so ``0.1`` becomes ``Decimal("0.1")``.
    """

    if isinstance(raw_value, bool):
        raise InvalidQuantity("quantity must be a number, not a bool", raw_value)
    if isinstance(raw_value, Decimal):
        value = raw_value
    elif isinstance(raw_value, int):
        value = Decimal(raw_value)
    elif isinstance(raw_value, float):
        value = Decimal(repr(raw_value))
    elif isinstance(raw_value, str):
        text = raw_value.strip()
        if not _NUMBER_RE.fullmatch(text):
            raise InvalidQuantity(f"quantity {raw_value!r} is not a base-10 number", raw_value)
        value = Decimal(text)
    else:
        raise InvalidQuantity(
            f"quantity must be a string or number, not {type(raw_value).__name__}", raw_value
        )

    if not value.is_finite():
        raise InvalidQuantity(f"quantity {raw_value!r} is not a finite number", raw_value)
    if value and value.adjusted() >= _MAX_INTEGER_DIGITS:
        raise InvalidQuantity(f"quantity {raw_value!r} is too large", raw_value)
    return value


@dataclass(frozen=True)
class QuantityFormat:
    """Decimal-place count and rounding mode applied to a single quantity."""

    decimals: int
    rounding: str = ROUND_DOWN

    def __post_init__(self) -> None:
        if self.decimals is None:
            raise InvalidQuantity("decimals must be provided", self.decimals)
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int):
            raise InvalidQuantity(
                f"decimals must be an integer, not {type(self.decimals).__name__}", self.decimals
            )
        if self.decimals < 0:
            raise InvalidQuantity(f"decimals must be non-negative (got {self.decimals})", self.decimals)
        if self.rounding not in _ROUNDING_MODES:
            raise InvalidQuantity(f"unknown rounding mode {self.rounding!r}", self.rounding)

    @property
    def quantum(self) -> Decimal:
        return Decimal((0, (1,), -self.decimals))

    def context_for(self, value: Decimal) -> Context:
        """Return a context with enough precision to hold ``value`` exactly."""

        integer_digits = max(value.adjusted() + 1, 1)
        return Context(prec=max(28, integer_digits + self.decimals + 1), rounding=self.rounding)

    def quantize(self, raw_value: RawValue) -> Decimal:
        """Parse ``raw_value`` and fix it to exactly ``decimals`` fractional digits."""

        value = parse_decimal(raw_value)
        fixed = value.quantize(self.quantum, rounding=self.rounding, context=self.context_for(value))
        if fixed.is_zero():
            return fixed.copy_abs()
        return fixed

    def format_value(self, raw_value: RawValue) -> str:
        """Return the bare decimal string, without a symbol."""

        return f"{self.quantize(raw_value):f}"

    def format(self, raw_value: RawValue, symbol: str) -> str:
        """Return the asset string ``"<value> <symbol>"``."""

        encode_symbol_code(symbol)
        return f"{self.format_value(raw_value)} {symbol}"


def format_quantity(raw_value: RawValue, decimals: int, symbol: str) -> str:
    """Render ``raw_value`` as an asset string with ``decimals`` fractional digits.

    Excess precision is truncated, never rounded up::

        >>> format_quantity("1.239999", 2, "TBTC")
        '1.23 TBTC'
        >>> format_quantity("5", 4, "TBTC")
        '5.0000 TBTC'
        >>> format_quantity("0", 0, "TBTC")
        '0 TBTC'

    Raises :class:`~transeos.errors.InvalidQuantity` for unparsable values or a
    missing/negative ``decimals``; symbol errors from
    :func:`~transeos.symbols.encode_symbol_code` propagate unchanged.
    """

    return QuantityFormat(decimals).format(raw_value, symbol)


@dataclass(frozen=True)
class Quantity:
    """A token amount with its precision and symbol."""

    value: Decimal
    decimals: int
    symbol: str

    @classmethod
    def from_raw(cls, raw_value: RawValue, decimals: int, symbol: str) -> "Quantity":
        fmt = QuantityFormat(decimals)
        encode_symbol_code(symbol)
        return cls(value=fmt.quantize(raw_value), decimals=decimals, symbol=symbol)

    def __str__(self) -> str:
        return format_quantity(self.value, self.decimals, self.symbol)

    @property
    def amount(self) -> int:
        """Integer amount in the currency's smallest unit."""

        digits = QuantityFormat(self.decimals).format_value(self.value)
        return int(digits.replace(".", ""))

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_valid(self) -> bool:
        """Return ``True`` when the amount fits the ledger's 62-bit asset bound."""

        return -ASSET_MAX_AMOUNT <= self.amount <= ASSET_MAX_AMOUNT


def parse_quantity(text: str) -> Quantity:
    """Parse an asset string such as ``"1.2300 TBTC"`` into a :class:`Quantity`.

    The number of fractional digits in ``text`` becomes the precision.
    """

    if not isinstance(text, str):
        raise InvalidQuantity(f"asset must be a string, not {type(text).__name__}", text)
    match = _ASSET_RE.fullmatch(text.strip())
    if match is None:
        raise InvalidQuantity(f"asset {text!r} is not of the form '<amount> <SYMBOL>'", text)
    decimals = len(match.group("fraction") or "")
    return Quantity.from_raw(match.group("amount"), decimals, match.group("symbol"))
