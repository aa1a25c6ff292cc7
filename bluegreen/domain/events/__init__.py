"""
Domain Events Package

Architectural Intent:
- Contains domain events and event bus infrastructure
- Events are the primary mechanism for cross-boundary communication
"""

from bluegreen.domain.events.event_base import DomainEvent
from bluegreen.domain.events.rotation_events import (
    RotationStartedEvent,
    RotationSucceededEvent,
    RotationRolledBackEvent,
    RotationIndeterminateEvent,
)

__all__ = [
    "DomainEvent",
    "RotationStartedEvent",
    "RotationSucceededEvent",
    "RotationRolledBackEvent",
    "RotationIndeterminateEvent",
]
