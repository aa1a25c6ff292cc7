"""
Inspect Slots Use Case

Architectural Intent:
- Probes the live, previous and two-back slots of an application once
- Any probe failure aborts as ProbeError before planning or mutation
"""

import logging
from bluegreen.domain.errors import BlueGreenError, ProbeError
from bluegreen.domain.ports.platform_port import PlatformPort
from bluegreen.domain.value_objects.app_name import AppName
from bluegreen.domain.value_objects.slot_state import SlotState

logger = logging.getLogger(__name__)


class InspectSlots:
    def __init__(self, platform: PlatformPort):
        self.platform = platform

    async def execute(self, app: AppName) -> SlotState:
        state = SlotState(
            live_exists=await self._exists(app.live),
            previous_exists=await self._exists(app.previous),
            two_back_exists=await self._exists(app.two_back),
        )
        logger.info("Slots for %s: %s", app, state)
        return state

    async def _exists(self, name: str) -> bool:
        try:
            return await self.platform.exists(name)
        except ProbeError:
            raise
        except BlueGreenError as e:
            raise ProbeError(f"Could not check whether {name} exists: {e}") from e
