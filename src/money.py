import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from errors import InvalidAmountError, NegativeValueError, RangeOverflowError, RangeUnderflowError

# Amounts are parsed through float, which holds integers exactly up to 2**53.
# 10**14 leaves room for the sum of two maximal values to stay exact as well.
MAX_UNITS = 100_000_000_000_000

ONE_UNIT_AS_AMOUNT = 0.0001


@dataclass(frozen=True, order=True)
class MoneyValue:
    """
    Non-negative money amount stored as an integer count of 0.0001 currency units.
    Arithmetic never wraps: results outside [0, MAX_UNITS] raise instead.
    """

    units: int = 0

    def __post_init__(self):
        if self.units < 0:
            raise NegativeValueError(f"negative money value: {self.units} units")
        if self.units > MAX_UNITS:
            raise RangeOverflowError(f"money value too big: {self.units} units")

    @classmethod
    def parse(cls, value: Union[str, float, int, Decimal]) -> "MoneyValue":
        """
        Interpret a decimal amount, rounding to the nearest unit (ties away from zero).

        Raises:
            InvalidAmountError: value is not a finite number
            NegativeValueError: value rounds below zero
            RangeOverflowError: value rounds above MAX_UNITS
        """
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise InvalidAmountError(f"not a number: {value!r}") from None

        if not math.isfinite(amount):
            raise InvalidAmountError(f"not a finite amount: {value!r}")

        # Decimal(float) is exact, rounding happens on the true quotient
        units = Decimal(amount / ONE_UNIT_AS_AMOUNT).to_integral_value(rounding=ROUND_HALF_UP)

        if units < 0:
            raise NegativeValueError(f"negative money value: {value!r}")
        if units > MAX_UNITS:
            raise RangeOverflowError(f"money value too big: {value!r}")
        return cls(int(units))

    def add(self, other: "MoneyValue") -> "MoneyValue":
        total = self.units + other.units
        if total > MAX_UNITS:
            raise RangeOverflowError("addition overflow")
        return MoneyValue(total)

    def subtract(self, other: "MoneyValue") -> "MoneyValue":
        if self.units < other.units:
            raise RangeUnderflowError("subtraction underflow")
        return MoneyValue(self.units - other.units)

    def less_than(self, other: "MoneyValue") -> bool:
        return self.units < other.units

    def to_decimal(self) -> float:
        return self.units * ONE_UNIT_AS_AMOUNT

    def __float__(self) -> float:
        return self.to_decimal()

    def __repr__(self) -> str:
        return f"MoneyValue({self.to_decimal():.4f})"


MoneyValue.ZERO = MoneyValue(0)
MoneyValue.MAX = MoneyValue(MAX_UNITS)
