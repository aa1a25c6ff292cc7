"""
Rotation Events

Architectural Intent:
- Lifecycle events for one blue-green rotation
- aggregate_id is the base application name
- Published by the BlueGreenPush use case once the outcome is known
"""

from dataclasses import dataclass
from bluegreen.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class RotationStartedEvent(DomainEvent):
    slot_state: str = ""
    step_count: int = 0
    fresh_deploy: bool = False


@dataclass(frozen=True)
class RotationSucceededEvent(DomainEvent):
    step_count: int = 0


@dataclass(frozen=True)
class RotationRolledBackEvent(DomainEvent):
    error_message: str = ""
    compensations_run: int = 0
    committed: bool = False


@dataclass(frozen=True)
class RotationIndeterminateEvent(DomainEvent):
    error_message: str = ""
    rollback_error_message: str = ""
