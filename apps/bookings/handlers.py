"""Event handlers for the booking domain."""

from __future__ import annotations

import structlog

from shared.application.message_bus import message_bus
from shared.domain.base import DomainEvent

from .domain.events import BookingCreated, BookingDeleted, BookingStatusChanged

audit_logger = structlog.get_logger("bookings.audit")


def log_booking_event(event: DomainEvent) -> None:
    audit_logger.info("booking.audit", **event.to_dict())


def register_handlers() -> None:
    for event_type in (BookingCreated, BookingStatusChanged, BookingDeleted):
        message_bus.register_event_handler(event_type, log_booking_event)
