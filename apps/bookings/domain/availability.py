"""
Availability rules

A car is unavailable for a requested period if any of its confirmed or
active bookings overlaps it. Overlap is inclusive on both ends, so a
return and a pickup at the same instant collide.
"""

from datetime import datetime
from typing import Iterable, Optional, Protocol

from shared.domain.value_objects import DateRange

BLOCKING_STATUSES = ('confirmed', 'active')


class BookedPeriod(Protocol):
    pk: int
    status: str
    start_date: datetime
    end_date: datetime


def overlaps(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    """Symmetric, inclusive overlap of [s1, e1] and [s2, e2]."""
    return DateRange(s1, e1).overlaps_with(DateRange(s2, e2))


def conflicting(
    bookings: Iterable[BookedPeriod],
    start_date: datetime,
    end_date: datetime,
    exclude_booking_id: Optional[int] = None,
) -> list:
    """Bookings among ``bookings`` that block the requested period."""
    return [
        booking
        for booking in bookings
        if booking.status in BLOCKING_STATUSES
        and booking.pk != exclude_booking_id
        and overlaps(booking.start_date, booking.end_date, start_date, end_date)
    ]
