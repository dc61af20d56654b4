"""
Booking Domain Events

Events that represent things that have happened to a booking.
These are published after successful transaction commits.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new pending booking was created

    Triggers:
    - Audit log entry
    """
    booking_id: int = 0
    car_id: int = 0
    renter_id: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    total_amount: Decimal = field(default_factory=Decimal)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=self.booking_id,
            car_id=self.car_id,
            renter_id=self.renter_id,
            start_date=self.start_date.isoformat() if self.start_date else None,
            end_date=self.end_date.isoformat() if self.end_date else None,
            total_amount=str(self.total_amount),
        )
        return data


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: Booking moved along the state machine

    Triggers:
    - Audit log entry
    """
    booking_id: int = 0
    old_status: str = ''
    new_status: str = ''
    actor_id: int = 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            booking_id=self.booking_id,
            old_status=self.old_status,
            new_status=self.new_status,
            actor_id=self.actor_id,
        )
        return data


@dataclass
class BookingDeleted(DomainEvent):
    """Event: A pending or cancelled booking was removed"""
    booking_id: int = 0
    status: str = ''
    actor_id: int = 0

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(booking_id=self.booking_id, status=self.status, actor_id=self.actor_id)
        return data
