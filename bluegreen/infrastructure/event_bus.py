"""
Event Bus Infrastructure

Architectural Intent:
- In-memory event bus for rotation lifecycle events
- Handlers subscribed to a base event class also receive its subclasses
- Handlers run in subscription order, one at a time; a failing handler
  propagates to the publisher
"""

import logging
from collections import defaultdict
from typing import Awaitable, Callable, Iterable
from bluegreen.domain.events.event_base import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def subscribe_many(self, event_types: Iterable[type], handler: Handler) -> None:
        for event_type in event_types:
            self.subscribe(event_type, handler)

    def handlers_for(self, event_type: type) -> list[Handler]:
        handlers: list[Handler] = []
        for klass in event_type.__mro__:
            for handler in self._handlers.get(klass, ()):
                if handler not in handlers:
                    handlers.append(handler)
        return handlers

    async def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            handlers = self.handlers_for(type(event))
            logger.debug(
                "Publishing %s for %s to %d handlers",
                event.event_type,
                event.aggregate_id or "-",
                len(handlers),
            )
            for handler in handlers:
                await handler(event)
