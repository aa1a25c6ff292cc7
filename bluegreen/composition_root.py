"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the bluegreen application
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Factory function creates and wires all dependencies from BlueGreenConfig
"""

from dataclasses import dataclass
from typing import Optional
from bluegreen.application.use_cases.blue_green_push import BlueGreenPush
from bluegreen.application.use_cases.inspect_slots import InspectSlots
from bluegreen.domain.events.rotation_events import (
    RotationIndeterminateEvent,
    RotationRolledBackEvent,
    RotationStartedEvent,
    RotationSucceededEvent,
)
from bluegreen.domain.services.rotation_planner import RotationPlanner
from bluegreen.infrastructure.adapters.cf_adapter import CloudFoundryAdapter
from bluegreen.infrastructure.config import BlueGreenConfig
from bluegreen.infrastructure.event_bus import EventBus
from bluegreen.infrastructure.logging import log_event


@dataclass
class BlueGreenContainer:
    """DI container holding all wired dependencies."""

    platform: CloudFoundryAdapter
    event_bus: EventBus
    planner: RotationPlanner
    blue_green_push: BlueGreenPush
    inspect_slots: InspectSlots


def create_container(config: Optional[BlueGreenConfig] = None) -> BlueGreenContainer:
    """Create and wire all dependencies."""
    config = config or BlueGreenConfig()

    platform = CloudFoundryAdapter(
        binary=config.cf.binary,
        cf_home=config.cf.home,
        remote_host=config.cf.remote_host,
        remote_user=config.cf.remote_user,
        remote_port=config.cf.remote_port,
        timeout=config.cf.timeout,
    )
    event_bus = EventBus()
    event_bus.subscribe_many(
        (
            RotationStartedEvent,
            RotationSucceededEvent,
            RotationRolledBackEvent,
            RotationIndeterminateEvent,
        ),
        log_event,
    )

    planner = RotationPlanner(platform)
    blue_green_push = BlueGreenPush(platform, planner, event_bus)
    inspect_slots = InspectSlots(platform)

    return BlueGreenContainer(
        platform=platform,
        event_bus=event_bus,
        planner=planner,
        blue_green_push=blue_green_push,
        inspect_slots=inspect_slots,
    )
