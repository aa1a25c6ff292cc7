"""
Action Port

Architectural Intent:
- The capability a Step's forward or compensating action must provide
- execute() returns on success and raises on failure
- Lets the sequencer run platform calls and test fakes interchangeably
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ActionPort(Protocol):
    description: str

    async def execute(self) -> None: ...
