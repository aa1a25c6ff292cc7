"""
Application Orchestration Package

Architectural Intent:
- Contains workflow orchestration components
- Sequential, compensating execution of rotation step lists
"""

from bluegreen.application.orchestration.action_sequencer import (
    ActionSequencer,
    SequencerState,
    ROLLBACK_FAILURE_MESSAGE,
)

__all__ = ["ActionSequencer", "SequencerState", "ROLLBACK_FAILURE_MESSAGE"]
