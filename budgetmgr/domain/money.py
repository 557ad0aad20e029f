"""Fixed-point money type.

Amounts are stored as an integer count of minor units (pence, cents) together
with the number of digits after the decimal point, so arithmetic never goes
through binary floating point.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from budgetmgr.domain.errors import ValidationError

DEFAULT_PRECISION = 2

# One explicit precision per supported currency
CURRENCY_PRECISION: dict[str, int] = {
    "GBP": 2,
    "EUR": 2,
    "USD": 2,
    "RUB": 2,
    "CHF": 2,
    "PLN": 2,
    "JPY": 0,
    "KRW": 0,
    "BHD": 3,
    "KWD": 3,
    "BTC": 8,
}


def currency_precision(code: str) -> int:
    """Get number of fractional digits for a currency.

    Args:
        code: ISO currency code (case-insensitive).

    Returns:
        Number of digits after the decimal point.

    Raises:
        ValidationError: If the currency is unknown.
    """
    try:
        return CURRENCY_PRECISION[code.upper()]
    except KeyError:
        raise ValidationError(f"invalid currency {code!r}") from None


@total_ordering
@dataclass(frozen=True, eq=False)
class Money:
    """Immutable monetary value in minor units."""

    amount: int
    prec: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        if self.prec < 0:
            raise ValueError("precision can't be negative")

    # Constructors

    @classmethod
    def from_int(cls, n: int, prec: int = DEFAULT_PRECISION) -> "Money":
        """Create Money from whole major units."""
        return cls(n * 10**prec, prec)

    @classmethod
    def from_decimal(cls, value: Decimal, prec: int = DEFAULT_PRECISION) -> "Money":
        """Create Money from a Decimal, rounding extra digits half away from zero."""
        scaled = (value * (Decimal(10) ** prec)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return cls(int(scaled), prec)

    @classmethod
    def from_float(cls, f: float, prec: int = DEFAULT_PRECISION) -> "Money":
        """Create Money from a float.

        The float goes through its shortest decimal representation first, so
        17.83 becomes exactly 1783 minor units and not 1782.
        """
        if not math.isfinite(f):
            raise ValidationError(f"invalid money value {f!r}")
        return cls.from_decimal(Decimal(repr(f)), prec)

    @classmethod
    def from_string(cls, s: str, prec: int = DEFAULT_PRECISION) -> "Money":
        """Parse decimal text like '12.50', '-3' or '1,234.56'.

        Raises:
            ValidationError: If the text is not a finite decimal number.
        """
        text = s.strip().replace(",", "").replace("_", "")
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"invalid money value {s!r}") from None
        if not value.is_finite():
            raise ValidationError(f"invalid money value {s!r}")
        return cls.from_decimal(value, prec)

    @classmethod
    def from_json(cls, value: "int | float | str", prec: int = DEFAULT_PRECISION) -> "Money":
        """Decode a JSON number or decimal string."""
        if isinstance(value, bool):
            raise ValidationError(f"invalid money value {value!r}")
        if isinstance(value, int):
            return cls.from_int(value, prec)
        if isinstance(value, float):
            return cls.from_float(value, prec)
        if isinstance(value, str):
            return cls.from_string(value, prec)
        raise ValidationError(f"invalid money value {value!r}")

    # Conversions

    def to_int(self) -> int:
        """Whole major units, truncated toward zero."""
        return _div_trunc(self.amount, 10**self.prec)

    def to_float(self) -> float:
        """Approximate value as a float, for display and charts."""
        return self.amount / 10**self.prec

    def to_decimal(self) -> Decimal:
        """Exact value as a Decimal."""
        return Decimal(self.amount).scaleb(-self.prec)

    def to_json(self) -> str:
        """Encode as a decimal string with prec digits."""
        return str(self)

    def with_prec(self, prec: int) -> "Money":
        """Rescale to a higher (or equal) precision without losing digits."""
        if prec < self.prec:
            raise ValueError(f"can't lower precision from {self.prec} to {prec} without rounding")
        return Money(self.amount * 10 ** (prec - self.prec), prec)

    def to_minor_units(self, prec: int) -> int:
        """Amount in minor units of a currency with prec digits.

        Raises:
            ValidationError: If the value has more significant digits after
                the decimal point than prec allows.
        """
        if prec >= self.prec:
            return self.with_prec(prec).amount
        factor = 10 ** (self.prec - prec)
        if self.amount % factor:
            raise ValidationError(f"amount {self} has more than {prec} digits after the decimal point")
        return self.amount // factor

    # Arithmetic

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        a, b = _align(self, other)
        return Money(a.amount + b.amount, a.prec)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        a, b = _align(self, other)
        return Money(a.amount - b.amount, a.prec)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.prec)

    def __abs__(self) -> "Money":
        return Money(abs(self.amount), self.prec)

    def div(self, n: int) -> "Money":
        """Divide by a positive count, truncating toward zero.

        Raises:
            ValueError: If n <= 0.
        """
        if n <= 0:
            raise ValueError(f"money can only be divided by a positive number, got {n}")
        return Money(_div_trunc(self.amount, n), self.prec)

    def round(self) -> "Money":
        """Round to whole major units, half away from zero."""
        unit = 10**self.prec
        whole, rest = divmod(abs(self.amount), unit)
        if rest * 2 >= unit:
            whole += 1
        return Money(_sign(self.amount) * whole * unit, self.prec)

    def ceil(self) -> "Money":
        unit = 10**self.prec
        return Money(-(-self.amount // unit) * unit, self.prec)

    def floor(self) -> "Money":
        unit = 10**self.prec
        return Money((self.amount // unit) * unit, self.prec)

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = _align(self, other)
        return a.amount == b.amount

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        a, b = _align(self, other)
        return a.amount < b.amount

    def __hash__(self) -> int:
        # Equal values must hash equally across precisions
        return hash(self.to_decimal().normalize())

    def __bool__(self) -> bool:
        return self.amount != 0

    # Formatting

    def __str__(self) -> str:
        sign = "-" if self.amount < 0 else ""
        whole, frac = divmod(abs(self.amount), 10**self.prec)
        if self.prec == 0:
            return f"{sign}{whole}"
        return f"{sign}{whole}.{frac:0{self.prec}d}"

    def __repr__(self) -> str:
        return f"Money('{self}')"

    def format(self, symbol: str = "") -> str:
        """Human-readable amount with thousands separators, e.g. '-£1,234.50'."""
        sign = "-" if self.amount < 0 else ""
        whole, frac = divmod(abs(self.amount), 10**self.prec)
        if self.prec == 0:
            return f"{sign}{symbol}{whole:,}"
        return f"{sign}{symbol}{whole:,}.{frac:0{self.prec}d}"


def total(values: Iterable[Money], prec: int = DEFAULT_PRECISION) -> Money:
    """Sum Money values in the given order.

    The result keeps the precision of the values; prec is only used for an
    empty sum.
    """
    result: Money | None = None
    for value in values:
        result = value if result is None else result + value
    if result is None:
        return Money(0, prec)
    return result


def _align(a: Money, b: Money) -> tuple[Money, Money]:
    if a.prec == b.prec:
        return a, b
    prec = max(a.prec, b.prec)
    return a.with_prec(prec), b.with_prec(prec)


def _div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _sign(n: int) -> int:
    return -1 if n < 0 else 1
