"""
Blue-Green Push Use Case

Architectural Intent:
- The single caller-facing entry point for a zero-downtime redeploy
- Validates input, probes slots once, plans, then hands the Step List to
  the ActionSequencer
- Returns an ExecutionOutcome; never exits the process

Flow:
1. Validate request (ConfigurationError, no platform calls yet)
2. Probe live/-g1/-g2 existence (ProbeError aborts before mutation)
3. Plan the Step List and execute it with compensation
4. On success, show the application listing once
"""

import logging
from typing import Optional
from bluegreen.application.dtos.rotation_dtos import BlueGreenPushRequest
from bluegreen.application.orchestration.action_sequencer import (
    ActionSequencer,
    ROLLBACK_FAILURE_MESSAGE,
)
from bluegreen.application.use_cases.inspect_slots import InspectSlots
from bluegreen.domain.entities.step import StepList
from bluegreen.domain.errors import BlueGreenError
from bluegreen.domain.events.event_base import DomainEvent
from bluegreen.domain.events.rotation_events import (
    RotationIndeterminateEvent,
    RotationRolledBackEvent,
    RotationStartedEvent,
    RotationSucceededEvent,
)
from bluegreen.domain.ports.event_bus_port import EventBusPort
from bluegreen.domain.ports.platform_port import PlatformPort
from bluegreen.domain.services.rotation_planner import RotationPlanner
from bluegreen.domain.value_objects.execution_outcome import (
    ExecutionOutcome,
    OutcomeStatus,
)

logger = logging.getLogger(__name__)


class BlueGreenPush:
    def __init__(
        self,
        platform: PlatformPort,
        planner: Optional[RotationPlanner] = None,
        event_bus: Optional[EventBusPort] = None,
        rollback_failure_message: str = ROLLBACK_FAILURE_MESSAGE,
    ):
        self.platform = platform
        self.planner = planner or RotationPlanner(platform)
        self.inspect_slots = InspectSlots(platform)
        self.event_bus = event_bus
        self.rollback_failure_message = rollback_failure_message

    async def plan(
        self,
        app_name: str,
        manifest_path: Optional[str],
        app_path: Optional[str] = None,
    ) -> StepList:
        request = BlueGreenPushRequest(app_name, manifest_path, app_path)
        slots = await self.inspect_slots.execute(request.app)
        return self.planner.plan(
            request.app, request.manifest_path, request.app_path, slots
        )

    async def execute(
        self,
        app_name: str,
        manifest_path: Optional[str],
        app_path: Optional[str] = None,
    ) -> ExecutionOutcome:
        request = BlueGreenPushRequest(app_name, manifest_path, app_path)
        app = request.app
        slots = await self.inspect_slots.execute(app)
        steps = self.planner.plan(app, request.manifest_path, request.app_path, slots)

        logger.info(
            "Pushing %s (%s) with %d steps",
            app,
            slots,
            len(steps),
            extra={"app": str(app)},
        )
        await self._publish(
            RotationStartedEvent(
                aggregate_id=str(app),
                slot_state=str(slots),
                step_count=len(steps),
                fresh_deploy=slots.is_fresh_deploy,
            )
        )

        sequencer = ActionSequencer(steps, self.rollback_failure_message)
        outcome = await sequencer.execute()

        if outcome.status == OutcomeStatus.SUCCESS:
            await self._publish(
                RotationSucceededEvent(aggregate_id=str(app), step_count=len(steps))
            )
            await self._list_applications()
        elif outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK:
            await self._publish(
                RotationRolledBackEvent(
                    aggregate_id=str(app),
                    error_message=str(outcome.error),
                    compensations_run=len(outcome.compensations),
                    committed=outcome.committed,
                )
            )
        else:
            await self._publish(
                RotationIndeterminateEvent(
                    aggregate_id=str(app),
                    error_message=str(outcome.error),
                    rollback_error_message=str(outcome.rollback_error),
                )
            )
        return outcome

    async def _list_applications(self) -> None:
        try:
            await self.platform.list_applications()
        except BlueGreenError as e:
            logger.warning("Could not list applications: %s", e)

    async def _publish(self, event: DomainEvent) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish([event])
