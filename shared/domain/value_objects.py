"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency
- DateRange: Represents a rental period (pickup to return instant)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('NGN', 'USD', 'EUR', 'GBP')
CENT = Decimal('0.01')
ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a monetary amount with currency. The amount is always a
    Decimal quantized to two places, never a float.
    """
    amount: Decimal
    currency: str = 'NGN'

    def __post_init__(self):
        if isinstance(self.amount, float):
            raise TypeError("Money amount must not be a float")
        amount = Decimal(self.amount).quantize(CENT, rounding=ROUND_HALF_UP)
        object.__setattr__(self, 'amount', amount)
        if amount < 0:
            raise ValueError("Amount cannot be negative")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def from_minor_units(cls, minor_units: int, currency: str = 'NGN') -> 'Money':
        """Build money from gateway minor units (kobo, cents)."""
        return cls(Decimal(int(minor_units)) / 100, currency)

    @property
    def minor_units(self) -> int:
        return int(self.amount * 100)

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money objects"""
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> 'Money':
        """Multiply money by a whole or decimal factor"""
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by int or Decimal")
        return Money(self.amount * factor, self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Rental period value object

    Both bounds are inclusive: a rental returned at instant X and another
    picked up at instant X are considered to collide.
    """
    start_date: datetime
    end_date: datetime

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Overlap formula: start1 <= end2 AND start2 <= end1

        Examples:
            - DateRange(1, 5) overlaps with DateRange(3, 7) -> True
            - DateRange(1, 5) overlaps with DateRange(5, 9) -> True (shared boundary)
            - DateRange(1, 9) overlaps with DateRange(3, 5) -> True (encloses)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return (self.start_date <= other.end_date and
                other.start_date <= self.end_date)

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date

    @property
    def billable_days(self) -> int:
        """Whole days charged: partial days round up, never less than one."""
        days, remainder = divmod(self.duration, ONE_DAY)
        if remainder:
            days += 1
        return max(days, 1)

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date!r}, {self.end_date!r})"
