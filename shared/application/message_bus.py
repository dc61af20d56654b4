"""
Message Bus

Routes domain events to the handlers interested in them.
"""

from typing import Callable, Dict, List, Type

import structlog

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)


class MessageBus:
    """
    Event bus

    Events: Multiple handlers per event (1:N)
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[Callable]] = {}

    def register_event_handler(
        self,
        event_type: Type[DomainEvent],
        handler: Callable[[DomainEvent], None]
    ):
        """
        Register an event handler

        Registering the same handler twice for one event type is a no-op,
        so app ``ready()`` hooks may run more than once.
        """
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug("message_bus.handler_registered", event_type=event_type.__name__)

    def publish_events(self, events: List[DomainEvent]):
        """
        Publish domain events

        All registered handlers for each event type are called.
        Errors in handlers are logged but don't stop other handlers,
        the data they describe is already committed.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.debug("message_bus.no_handlers", event_type=event_type.__name__)
                continue

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "message_bus.handler_failed",
                        event_type=event_type.__name__,
                        event_id=str(event.event_id),
                        handler=getattr(handler, "__name__", repr(handler)),
                    )


# Global message bus instance
message_bus = MessageBus()
