"""Cobertura adicional para guard denial na SubmissionStateMachine."""

from __future__ import annotations

import fsm.manager.machine as machine_module
from fsm.manager.machine import SubmissionStateMachine
from fsm.rules.guards import GuardResult
from fsm.states import SubmissionState


def test_transition_returns_failure_when_guard_blocks_valid_transition(
    monkeypatch,
) -> None:
    def _deny_guard(from_state: SubmissionState, to_state: SubmissionState) -> GuardResult:
        del from_state, to_state
        return GuardResult.deny("blocked_by_guard")

    monkeypatch.setattr(machine_module, "evaluate_guards", _deny_guard)

    machine = SubmissionStateMachine(attempt_id="att-guard")
    result = machine.transition(target=SubmissionState.VALIDATING, trigger="submit")

    assert result.success is False
    assert result.error_reason == "blocked_by_guard"
    assert machine.current_state == SubmissionState.IDLE
    assert machine.history == []
