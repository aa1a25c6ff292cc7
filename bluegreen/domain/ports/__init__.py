"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from bluegreen.domain.ports.action_port import ActionPort
from bluegreen.domain.ports.platform_port import PlatformPort
from bluegreen.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "ActionPort",
    "PlatformPort",
    "EventBusPort",
]
