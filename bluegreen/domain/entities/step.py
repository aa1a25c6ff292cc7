"""
Step Module

Architectural Intent:
- A Step is a tagged unit of work: a forward action and an optional compensation
- Compensation undoes this step's effect and only runs when a later step fails
- Actions are values (facade method + bound arguments), not closures over
  mutable state, so plans compare equal and sequencing is testable with fakes

Design Decisions:
- A step without compensation is non-reversible; its effect is permanent
- A committing step is a point of no return: once its forward action
  succeeds, later failures no longer compensate it or anything before it
- CompositeAction runs sub-actions in order and stops at the first failure
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional
from bluegreen.domain.ports.action_port import ActionPort


class StepKind(Enum):
    PUSH = "push"
    EVICT_TWO_BACK = "evict-two-back"
    DEMOTE_PREVIOUS = "demote-previous"
    DEMOTE_LIVE = "demote-live"
    CUTOVER = "cutover"


@dataclass(frozen=True)
class PlatformAction:
    """A single Platform Facade call with its arguments bound."""

    description: str
    operation: Callable[..., Awaitable[Any]]
    args: tuple = ()

    async def execute(self) -> None:
        await self.operation(*self.args)

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class CompositeAction:
    """Runs several actions in order as one; the first failure propagates."""

    description: str
    actions: tuple[ActionPort, ...]

    async def execute(self) -> None:
        for action in self.actions:
            await action.execute()

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class Step:
    kind: StepKind
    forward: ActionPort
    compensate: Optional[ActionPort] = None
    commits: bool = False

    @property
    def is_reversible(self) -> bool:
        return self.compensate is not None

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.forward.description}"
        if self.compensate is not None:
            text += f" (undo: {self.compensate.description})"
        return text


StepList = tuple[Step, ...]
