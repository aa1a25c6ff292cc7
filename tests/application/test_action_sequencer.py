"""
Action Sequencer Tests

Architectural Intent:
- Verifies the all-or-nothing contract with substitutable fake actions
- Covers success, rollback and indeterminate outcomes and their ordering
"""

from dataclasses import dataclass, field
from typing import Optional

import pytest
from bluegreen.application.orchestration.action_sequencer import (
    ActionSequencer,
    ROLLBACK_FAILURE_MESSAGE,
    SequencerState,
)
from bluegreen.domain.entities.step import Step, StepKind
from bluegreen.domain.errors import PlatformError, SequencerError
from bluegreen.domain.value_objects.execution_outcome import Direction, OutcomeStatus


@dataclass
class FakeAction:
    description: str
    log: list
    error: Optional[Exception] = None

    async def execute(self) -> None:
        self.log.append(self.description)
        if self.error is not None:
            raise self.error


@dataclass
class Script:
    """Builds a step list whose actions all write to one shared log."""

    log: list = field(default_factory=list)

    def step(
        self,
        name: str,
        fails: bool = False,
        undo: bool = True,
        undo_fails: bool = False,
        commits: bool = False,
    ) -> Step:
        forward = FakeAction(
            f"do {name}", self.log, PlatformError(f"{name} failed") if fails else None
        )
        compensate = None
        if undo:
            compensate = FakeAction(
                f"undo {name}",
                self.log,
                PlatformError(f"undo {name} failed") if undo_fails else None,
            )
        return Step(StepKind.PUSH, forward, compensate, commits=commits)


class TestSuccess:
    @pytest.mark.asyncio
    async def test_all_forward_actions_run_in_order(self):
        script = Script()
        steps = [script.step("a"), script.step("b"), script.step("c")]

        outcome = await ActionSequencer(steps).execute()

        assert outcome.status == OutcomeStatus.SUCCESS
        assert script.log == ["do a", "do b", "do c"]

    @pytest.mark.asyncio
    async def test_no_compensation_on_success(self):
        script = Script()
        sequencer = ActionSequencer([script.step("a"), script.step("b")])

        outcome = await sequencer.execute()

        assert not any(entry.startswith("undo") for entry in script.log)
        assert outcome.compensations == ()
        assert sequencer.state == SequencerState.SUCCEEDED

    @pytest.mark.asyncio
    async def test_empty_step_list_succeeds(self):
        outcome = await ActionSequencer([]).execute()
        assert outcome.succeeded

    @pytest.mark.asyncio
    async def test_records_every_forward_action(self):
        script = Script()
        outcome = await ActionSequencer([script.step("a"), script.step("b")]).execute()

        assert [r.index for r in outcome.records] == [0, 1]
        assert all(r.direction == Direction.FORWARD for r in outcome.records)
        assert all(r.succeeded for r in outcome.records)


class TestRollback:
    @pytest.mark.asyncio
    async def test_compensations_run_in_reverse_order(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b"),
            script.step("c"),
            script.step("d", fails=True),
            script.step("e"),
        ]

        outcome = await ActionSequencer(steps).execute()

        assert outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK
        assert script.log == [
            "do a",
            "do b",
            "do c",
            "do d",
            "undo c",
            "undo b",
            "undo a",
        ]

    @pytest.mark.asyncio
    async def test_failing_step_never_runs_its_own_compensation(self):
        script = Script()
        steps = [script.step("a"), script.step("b", fails=True)]

        await ActionSequencer(steps).execute()

        assert "undo b" not in script.log
        assert "undo a" in script.log

    @pytest.mark.asyncio
    async def test_steps_without_compensation_are_skipped(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b", undo=False),
            script.step("c"),
            script.step("d", fails=True),
        ]

        outcome = await ActionSequencer(steps).execute()

        assert script.log == ["do a", "do b", "do c", "do d", "undo c", "undo a"]
        assert [r.index for r in outcome.compensations] == [2, 0]

    @pytest.mark.asyncio
    async def test_carries_the_original_error(self):
        script = Script()
        steps = [script.step("a"), script.step("b", fails=True)]

        outcome = await ActionSequencer(steps).execute()

        assert isinstance(outcome.error, PlatformError)
        assert str(outcome.error) == "b failed"
        assert outcome.rollback_error is None

    @pytest.mark.asyncio
    async def test_first_step_failure_has_nothing_to_undo(self):
        script = Script()
        sequencer = ActionSequencer([script.step("a", fails=True), script.step("b")])

        outcome = await sequencer.execute()

        assert outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK
        assert script.log == ["do a"]
        assert sequencer.state == SequencerState.ROLLED_BACK

    @pytest.mark.asyncio
    async def test_later_steps_are_not_attempted(self):
        script = Script()
        steps = [script.step("a", fails=True), script.step("b"), script.step("c")]

        await ActionSequencer(steps).execute()

        assert "do b" not in script.log
        assert "do c" not in script.log


class TestIndeterminate:
    @pytest.mark.asyncio
    async def test_compensation_failure_stops_rollback(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b", undo_fails=True),
            script.step("c"),
            script.step("d", fails=True),
        ]
        sequencer = ActionSequencer(steps)

        outcome = await sequencer.execute()

        assert outcome.status == OutcomeStatus.FAILED_DURING_ROLLBACK
        assert script.log == ["do a", "do b", "do c", "do d", "undo c", "undo b"]
        assert "undo a" not in script.log
        assert sequencer.state == SequencerState.INDETERMINATE

    @pytest.mark.asyncio
    async def test_carries_both_errors_and_message(self):
        script = Script()
        steps = [script.step("a", undo_fails=True), script.step("b", fails=True)]

        outcome = await ActionSequencer(steps).execute()

        assert str(outcome.error) == "b failed"
        assert str(outcome.rollback_error) == "undo a failed"
        assert outcome.message == ROLLBACK_FAILURE_MESSAGE

    @pytest.mark.asyncio
    async def test_custom_message(self):
        script = Script()
        steps = [script.step("a", undo_fails=True), script.step("b", fails=True)]

        outcome = await ActionSequencer(steps, "inspect manually").execute()

        assert outcome.message == "inspect manually"

    @pytest.mark.asyncio
    async def test_failed_compensation_is_recorded(self):
        script = Script()
        steps = [script.step("a", undo_fails=True), script.step("b", fails=True)]

        outcome = await ActionSequencer(steps).execute()

        last = outcome.records[-1]
        assert last.direction == Direction.COMPENSATE
        assert last.index == 0
        assert not last.succeeded
        assert last.error == "undo a failed"


class TestCommitPoint:
    @pytest.mark.asyncio
    async def test_failure_after_commit_compensates_nothing(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b", undo=False, commits=True),
            script.step("c", fails=True),
        ]

        sequencer = ActionSequencer(steps)
        outcome = await sequencer.execute()

        assert outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK
        assert outcome.committed is True
        assert outcome.compensations == ()
        assert script.log == ["do a", "do b", "do c"]
        assert sequencer.state == SequencerState.ROLLED_BACK

    @pytest.mark.asyncio
    async def test_steps_after_commit_are_still_compensated(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b", undo=False, commits=True),
            script.step("c"),
            script.step("d", fails=True),
        ]

        outcome = await ActionSequencer(steps).execute()

        assert outcome.committed is True
        assert script.log == ["do a", "do b", "do c", "do d", "undo c"]

    @pytest.mark.asyncio
    async def test_failing_commit_step_still_rolls_back(self):
        script = Script()
        steps = [
            script.step("a"),
            script.step("b", fails=True, undo=False, commits=True),
        ]

        outcome = await ActionSequencer(steps).execute()

        assert outcome.committed is False
        assert script.log == ["do a", "do b", "undo a"]

    @pytest.mark.asyncio
    async def test_failed_step_is_reported(self):
        script = Script()
        steps = [script.step("a"), script.step("b", fails=True)]

        outcome = await ActionSequencer(steps).execute()

        assert outcome.failed_step.index == 1
        assert outcome.failed_step.description == "do b"
        assert outcome.completed(StepKind.PUSH)


class TestLifecycle:
    def test_initial_state(self):
        assert ActionSequencer([]).state == SequencerState.PENDING

    @pytest.mark.asyncio
    async def test_executes_only_once(self):
        script = Script()
        sequencer = ActionSequencer([script.step("a")])
        await sequencer.execute()

        with pytest.raises(SequencerError, match="only be executed once"):
            await sequencer.execute()
        assert script.log == ["do a"]

    def test_step_list_is_frozen(self):
        script = Script()
        steps = [script.step("a")]
        sequencer = ActionSequencer(steps)
        steps.append(script.step("b"))

        assert len(sequencer.steps) == 1
        assert isinstance(sequencer.steps, tuple)

    @pytest.mark.asyncio
    async def test_non_platform_exceptions_also_roll_back(self):
        script = Script()
        bad = Step(StepKind.CUTOVER, FakeAction("explode", script.log, RuntimeError("x")))

        outcome = await ActionSequencer([script.step("a"), bad]).execute()

        assert outcome.status == OutcomeStatus.FAILED_AND_ROLLED_BACK
        assert isinstance(outcome.error, RuntimeError)
        assert script.log[-1] == "undo a"
