"""
Execution Outcome Value Object

Architectural Intent:
- The only externally observable result of running a Step List
- Exactly one of: success, failed-and-rolled-back, failed-during-rollback
- Carries the ordered step trace so callers can report what happened
- `committed` marks a failure after the point of no return: the new version
  stays in place and nothing was compensated
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
from bluegreen.domain.entities.step import StepKind


class OutcomeStatus(Enum):
    SUCCESS = auto()
    FAILED_AND_ROLLED_BACK = auto()
    FAILED_DURING_ROLLBACK = auto()


class Direction(Enum):
    FORWARD = "forward"
    COMPENSATE = "compensate"


@dataclass(frozen=True)
class StepRecord:
    index: int
    kind: StepKind
    direction: Direction
    description: str
    succeeded: bool
    error: str = ""


@dataclass(frozen=True)
class ExecutionOutcome:
    status: OutcomeStatus
    error: Optional[Exception] = None
    rollback_error: Optional[Exception] = None
    message: str = ""
    records: tuple[StepRecord, ...] = ()
    committed: bool = False

    @staticmethod
    def success(records: tuple[StepRecord, ...] = ()) -> "ExecutionOutcome":
        return ExecutionOutcome(status=OutcomeStatus.SUCCESS, records=records)

    @staticmethod
    def rolled_back(
        error: Exception,
        records: tuple[StepRecord, ...] = (),
        committed: bool = False,
    ) -> "ExecutionOutcome":
        return ExecutionOutcome(
            status=OutcomeStatus.FAILED_AND_ROLLED_BACK,
            error=error,
            records=records,
            committed=committed,
        )

    @staticmethod
    def failed_during_rollback(
        error: Exception,
        rollback_error: Exception,
        message: str,
        records: tuple[StepRecord, ...] = (),
    ) -> "ExecutionOutcome":
        return ExecutionOutcome(
            status=OutcomeStatus.FAILED_DURING_ROLLBACK,
            error=error,
            rollback_error=rollback_error,
            message=message,
            records=records,
        )

    @property
    def succeeded(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_indeterminate(self) -> bool:
        return self.status == OutcomeStatus.FAILED_DURING_ROLLBACK

    @property
    def compensations(self) -> tuple[StepRecord, ...]:
        return tuple(r for r in self.records if r.direction == Direction.COMPENSATE)

    @property
    def failed_step(self) -> Optional[StepRecord]:
        for record in self.records:
            if record.direction == Direction.FORWARD and not record.succeeded:
                return record
        return None

    def completed(self, kind: StepKind) -> bool:
        return any(
            r.kind == kind and r.direction == Direction.FORWARD and r.succeeded
            for r in self.records
        )
