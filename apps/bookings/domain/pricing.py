"""
Pricing Calculator

The amount owed for a rental is the daily rate times the number of
started days. Everything is Decimal, quantized to two places.
"""

from datetime import datetime
from decimal import Decimal

from shared.domain.value_objects import DateRange, Money


def billable_days(start_date: datetime, end_date: datetime) -> int:
    """
    Number of days charged for a rental

    Partial days round up and the minimum is one day:
        24h -> 1, 25h -> 2, 30min -> 1

    Raises ValueError if end_date is not after start_date.
    """
    return DateRange(start_date, end_date).billable_days


def calculate_amount(start_date: datetime, end_date: datetime, daily_rate) -> Decimal:
    """Total amount for the period at ``daily_rate`` (Decimal, 2 places)."""
    return quote(start_date, end_date, daily_rate).amount


def quote(start_date: datetime, end_date: datetime, daily_rate, currency: str = 'NGN') -> Money:
    if isinstance(daily_rate, float):
        raise TypeError("daily_rate must be a Decimal, not a float")
    rate = Money(Decimal(daily_rate), currency)
    return rate * billable_days(start_date, end_date)
