"""
Rotation Planner Service

Architectural Intent:
- Decides, from probed slot occupancy, which Step List a run executes
- Pure planning: no platform calls are made here, only bound actions
- Identical inputs always yield equal Step Lists

Plans:
- Live slot absent: push under the live name. Nothing to roll back to.
- Live slot present: evict two-back, demote previous, demote live, push,
  cut over. Only demote-live carries a compensation; it fires when the push
  fails and restores the original app under its original name.
- The push commits the run. A cutover failure leaves the new version live
  and is reported without touching it.
"""

from __future__ import annotations
from typing import Optional
from bluegreen.domain.entities.step import (
    CompositeAction,
    PlatformAction,
    Step,
    StepKind,
    StepList,
)
from bluegreen.domain.ports.platform_port import PlatformPort
from bluegreen.domain.value_objects.app_name import AppName
from bluegreen.domain.value_objects.slot_state import SlotState


class RotationPlanner:
    def __init__(self, platform: PlatformPort):
        self.platform = platform

    def plan(
        self,
        app: AppName,
        manifest_path: str,
        app_path: Optional[str],
        slots: SlotState,
    ) -> StepList:
        if slots.is_fresh_deploy:
            return (self._push_step(app, manifest_path, app_path),)

        steps: list[Step] = []
        if slots.two_back_exists:
            steps.append(
                Step(
                    StepKind.EVICT_TWO_BACK,
                    PlatformAction(
                        f"delete {app.two_back}",
                        self.platform.delete,
                        (app.two_back,),
                    ),
                )
            )
        if slots.previous_exists:
            steps.append(
                Step(
                    StepKind.DEMOTE_PREVIOUS,
                    PlatformAction(
                        f"rename {app.previous} to {app.two_back}",
                        self.platform.rename,
                        (app.previous, app.two_back),
                    ),
                )
            )
        steps.append(self._demote_live_step(app))
        steps.append(self._push_step(app, manifest_path, app_path))
        steps.append(self._cutover_step(app))
        return tuple(steps)

    def _push_step(
        self, app: AppName, manifest_path: str, app_path: Optional[str]
    ) -> Step:
        return Step(
            StepKind.PUSH,
            PlatformAction(
                f"push {app.live} with manifest {manifest_path}",
                self.platform.push,
                (app.live, manifest_path, app_path),
            ),
            commits=True,
        )

    def _demote_live_step(self, app: AppName) -> Step:
        # The delete clears a broken push squatting on the live name so the
        # rename back can succeed.
        restore = CompositeAction(
            f"delete {app.live}, rename {app.previous} back to {app.live}",
            (
                PlatformAction(f"delete {app.live}", self.platform.delete, (app.live,)),
                PlatformAction(
                    f"rename {app.previous} to {app.live}",
                    self.platform.rename,
                    (app.previous, app.live),
                ),
            ),
        )
        return Step(
            StepKind.DEMOTE_LIVE,
            PlatformAction(
                f"rename {app.live} to {app.previous}",
                self.platform.rename,
                (app.live, app.previous),
            ),
            compensate=restore,
        )

    def _cutover_step(self, app: AppName) -> Step:
        return Step(
            StepKind.CUTOVER,
            CompositeAction(
                f"unmap {app.live} route from {app.previous}, stop {app.previous}",
                (
                    PlatformAction(
                        f"unmap route {app.live} from {app.previous}",
                        self.platform.unmap_route,
                        (app.previous, app.live),
                    ),
                    PlatformAction(
                        f"stop {app.previous}", self.platform.stop, (app.previous,)
                    ),
                ),
            ),
        )

    @staticmethod
    def describe(steps: StepList) -> list[str]:
        return [f"{i + 1}. {step}" for i, step in enumerate(steps)]
