"""
Unit of Work Pattern

Wraps a database transaction and makes sure domain events are
published only after the transaction commits.
"""

from typing import List

import structlog
from django.db import transaction

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)


class DjangoUnitOfWork:
    """
    Django implementation of Unit of Work

    Everything executed inside the ``with`` block is a single atomic
    unit: either every write commits or none does. Events added with
    ``add_event`` are handed to the message bus via
    ``transaction.on_commit`` and are discarded on rollback.

    Usage:
        with DjangoUnitOfWork() as uow:
            car = Car.objects.select_for_update().get(pk=car_id)
            booking = Booking.objects.create(...)
            uow.add_event(BookingCreated(...))
        # Events are published after commit
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._events.append(event)

    def commit(self):
        """
        Schedule event publishing for after the commit

        The database commit itself happens when the atomic block exits.
        """
        events = self._events.copy()
        self._events.clear()

        if events:
            logger.debug("uow.commit", events=len(events))
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        """Discard collected events"""
        if self._events:
            logger.warning("uow.rollback", discarded_events=len(self._events))
        self._events.clear()

    def _publish_events(self, events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        message_bus.publish_events(events)
