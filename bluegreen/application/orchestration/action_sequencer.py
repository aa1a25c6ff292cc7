"""
Transactional Action Sequencer

Architectural Intent:
- Executes a Step List with all-or-nothing observable effect, modulo steps
  explicitly marked non-reversible
- On the first forward failure, runs the compensations of earlier steps in
  reverse order; if one of those fails, stops and reports indeterminate
- Never retries, never times out; each action runs at most once per direction

Execution Model:
1. RUNNING: forward actions run strictly in order, one in flight at a time
2. All succeed -> SUCCEEDED
3. Forward failure at k -> COMPENSATING over k-1 ... c+1, skipping steps
   without a compensation, where c is the last committing step that
   succeeded (-1 if none)
4. All compensations succeed -> ROLLED_BACK
5. A compensation fails -> INDETERMINATE (terminal, no further actions)
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional, Sequence

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from bluegreen.domain.entities.step import Step, StepList
from bluegreen.domain.errors import SequencerError
from bluegreen.domain.ports.action_port import ActionPort
from bluegreen.domain.value_objects.execution_outcome import (
    Direction,
    ExecutionOutcome,
    StepRecord,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

ROLLBACK_FAILURE_MESSAGE = (
    "Oh no. Something's gone wrong. I've tried to roll back "
    "but you should check to see if everything is OK."
)


class SequencerState(Enum):
    PENDING = auto()
    RUNNING = auto()
    COMPENSATING = auto()
    SUCCEEDED = auto()
    ROLLED_BACK = auto()
    INDETERMINATE = auto()


class ActionSequencer:
    """Runs one Step List exactly once and reports an ExecutionOutcome."""

    def __init__(
        self,
        steps: Sequence[Step],
        rollback_failure_message: str = ROLLBACK_FAILURE_MESSAGE,
    ) -> None:
        self.steps: StepList = tuple(steps)
        self.rollback_failure_message = rollback_failure_message
        self._state = SequencerState.PENDING
        self._records: list[StepRecord] = []
        self._committed_index = -1

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def records(self) -> tuple[StepRecord, ...]:
        return tuple(self._records)

    async def execute(self) -> ExecutionOutcome:
        if self._state != SequencerState.PENDING:
            raise SequencerError("A step list can only be executed once")

        self._state = SequencerState.RUNNING
        for index, step in enumerate(self.steps):
            error = await self._run(index, step, step.forward, Direction.FORWARD)
            if error is not None:
                logger.warning(
                    "Step %d (%s) failed, rolling back: %s",
                    index,
                    step.kind.value,
                    error,
                )
                return await self._compensate(index, error)
            if step.commits:
                self._committed_index = index

        self._state = SequencerState.SUCCEEDED
        logger.info("All %d steps completed", len(self.steps))
        return ExecutionOutcome.success(self.records)

    async def _compensate(
        self, failed_index: int, error: Exception
    ) -> ExecutionOutcome:
        self._state = SequencerState.COMPENSATING
        if self._committed_index >= 0:
            logger.warning(
                "Step %d (%s) committed the run; earlier steps are kept",
                self._committed_index,
                self.steps[self._committed_index].kind.value,
            )
        for index in range(failed_index - 1, self._committed_index, -1):
            step = self.steps[index]
            if step.compensate is None:
                logger.debug(
                    "Step %d (%s) is not reversible, skipping",
                    index,
                    step.kind.value,
                )
                continue

            rollback_error = await self._run(
                index, step, step.compensate, Direction.COMPENSATE
            )
            if rollback_error is not None:
                self._state = SequencerState.INDETERMINATE
                logger.error(
                    "Compensation for step %d (%s) failed: %s",
                    index,
                    step.kind.value,
                    rollback_error,
                )
                return ExecutionOutcome.failed_during_rollback(
                    error,
                    rollback_error,
                    self.rollback_failure_message,
                    self.records,
                )

        self._state = SequencerState.ROLLED_BACK
        logger.info("Rolled back after failure at step %d", failed_index)
        return ExecutionOutcome.rolled_back(
            error, self.records, committed=self._committed_index >= 0
        )

    async def _run(
        self, index: int, step: Step, action: ActionPort, direction: Direction
    ) -> Optional[Exception]:
        """Run one action, record it, and return its error instead of raising."""
        logger.info(
            "[%s] %s",
            direction.value,
            action.description,
            extra={
                "step_index": index,
                "step_kind": step.kind.value,
                "direction": direction.value,
            },
        )
        with tracer.start_as_current_span(
            f"{direction.value} {step.kind.value}"
        ) as span:
            span.set_attribute("bluegreen.step.index", index)
            span.set_attribute("bluegreen.step.action", action.description)
            try:
                await action.execute()
            except Exception as exc:
                span.record_exception(exc)
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                self._records.append(
                    StepRecord(
                        index=index,
                        kind=step.kind,
                        direction=direction,
                        description=action.description,
                        succeeded=False,
                        error=str(exc),
                    )
                )
                return exc

        self._records.append(
            StepRecord(
                index=index,
                kind=step.kind,
                direction=direction,
                description=action.description,
                succeeded=True,
            )
        )
        return None
