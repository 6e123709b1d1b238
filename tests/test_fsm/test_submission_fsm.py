"""
Testes do módulo FSM de submissão.

Cobre estados, mapa de transições, guards, tipos e a máquina de uma
tentativa (progresso monotônico, terminais sem saída, histórico).
"""

import pytest

from fsm import (
    DEFAULT_INITIAL_STATE,
    IN_FLIGHT_STATES,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    StateTransition,
    SubmissionState,
    SubmissionStateMachine,
    TransitionResult,
    create_submission_fsm,
    evaluate_guards,
    get_valid_targets,
    is_in_flight,
    is_terminal,
    is_transition_valid,
    validate_transition_map,
)
from fsm.rules.guards import guard_same_state, guard_terminal_state


class TestSubmissionStates:
    """Estados, terminais e estados em andamento."""

    def test_state_sets_partition_the_enum(self) -> None:
        """Terminais, em andamento e IDLE cobrem todos os estados."""
        assert frozenset({SubmissionState.SUCCESS, SubmissionState.ERROR}) == TERMINAL_STATES
        assert SubmissionState.IDLE not in IN_FLIGHT_STATES
        assert set(SubmissionState) == TERMINAL_STATES | IN_FLIGHT_STATES | {SubmissionState.IDLE}
        assert DEFAULT_INITIAL_STATE == SubmissionState.IDLE

        for state in SubmissionState:
            assert is_terminal(state) is (state in TERMINAL_STATES)
            assert is_in_flight(state) is (state in IN_FLIGHT_STATES)

    def test_state_values_are_lowercase_strings(self) -> None:
        """Valores estáveis para wire e logs."""
        assert str(SubmissionState.UPLOADING) == "uploading"
        assert SubmissionState("success") is SubmissionState.SUCCESS


class TestValidTransitions:
    """Mapa de transições."""

    def test_transition_map_is_consistent(self) -> None:
        """Todos os estados mapeados e terminais sem saída."""
        assert validate_transition_map() == []
        for terminal in TERMINAL_STATES:
            assert VALID_TRANSITIONS[terminal] == frozenset()

    def test_sequence_is_strictly_ordered(self) -> None:
        """Não há atalho de IDLE para SUBMITTING nem volta para VALIDATING."""
        assert get_valid_targets(SubmissionState.IDLE) == frozenset({SubmissionState.VALIDATING})
        assert not is_transition_valid(SubmissionState.IDLE, SubmissionState.SUBMITTING)
        assert not is_transition_valid(SubmissionState.SUBMITTING, SubmissionState.UPLOADING)
        assert not is_transition_valid(SubmissionState.UPLOADING, SubmissionState.VALIDATING)
        assert is_transition_valid(SubmissionState.VALIDATING, SubmissionState.SUBMITTING)

    def test_every_in_flight_state_can_fail(self) -> None:
        """Qualquer etapa em andamento pode terminar em ERROR."""
        for state in IN_FLIGHT_STATES:
            assert is_transition_valid(state, SubmissionState.ERROR)


class TestGuards:
    """Guards padrão."""

    def test_terminal_state_is_denied(self) -> None:
        result = guard_terminal_state(SubmissionState.SUCCESS, SubmissionState.VALIDATING)
        assert result.allowed is False
        assert "terminal" in (result.reason or "")

    def test_reflexive_only_for_uploading(self) -> None:
        """Progresso de upload é a única transição reflexiva."""
        assert guard_same_state(SubmissionState.UPLOADING, SubmissionState.UPLOADING).allowed
        assert not guard_same_state(SubmissionState.SUBMITTING, SubmissionState.SUBMITTING).allowed

    def test_evaluate_guards_returns_first_denial(self) -> None:
        result = evaluate_guards(SubmissionState.ERROR, SubmissionState.ERROR)
        assert result.allowed is False


class TestTransitionTypes:
    """StateTransition e TransitionResult."""

    def test_state_transition_rejects_empty_trigger(self) -> None:
        with pytest.raises(ValueError, match="trigger"):
            StateTransition(SubmissionState.IDLE, SubmissionState.VALIDATING, trigger=" ")

    def test_state_transition_rejects_progress_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="progress"):
            StateTransition(
                SubmissionState.VALIDATING,
                SubmissionState.UPLOADING,
                trigger="upload_started",
                progress=101,
            )

    def test_to_log_dict_includes_progress_when_present(self) -> None:
        transition = StateTransition(
            SubmissionState.UPLOADING, SubmissionState.UPLOADING, trigger="upload_progress", progress=40
        )
        data = transition.to_log_dict()
        assert data["from_state"] == "UPLOADING"
        assert data["progress"] == 40

    def test_transition_result_consistency(self) -> None:
        with pytest.raises(ValueError):
            TransitionResult(success=True)
        with pytest.raises(ValueError):
            TransitionResult(success=False)


class TestSubmissionStateMachine:
    """Máquina de uma tentativa."""

    def test_happy_path_with_upload_records_history(self) -> None:
        machine = create_submission_fsm("att-1")
        assert machine.current_state == SubmissionState.IDLE

        steps = [
            (SubmissionState.VALIDATING, None),
            (SubmissionState.UPLOADING, 0),
            (SubmissionState.UPLOADING, 50),
            (SubmissionState.UPLOADING, 100),
            (SubmissionState.SUBMITTING, None),
            (SubmissionState.SUCCESS, None),
        ]
        for target, progress in steps:
            result = machine.transition(target, trigger="step", progress=progress)
            assert result.success, result.error_reason

        assert machine.is_terminal
        assert machine.progress == 100
        assert len(machine.history) == len(steps)
        assert machine.get_state_summary()["attempt_id"] == "att-1"
        assert machine.get_history_summary()[-1]["to_state"] == "SUCCESS"

    def test_progress_cannot_regress(self) -> None:
        machine = SubmissionStateMachine("att-2")
        machine.transition(SubmissionState.VALIDATING, trigger="submit")
        machine.transition(SubmissionState.UPLOADING, trigger="upload", progress=60)

        result = machine.transition(SubmissionState.UPLOADING, trigger="upload", progress=30)

        assert result.success is False
        assert "regrediu" in (result.error_reason or "")
        assert machine.progress == 60

    def test_progress_only_in_uploading(self) -> None:
        machine = SubmissionStateMachine("att-3")
        result = machine.transition(SubmissionState.VALIDATING, trigger="submit", progress=10)
        assert result.success is False
        assert machine.current_state == SubmissionState.IDLE

    def test_terminal_state_is_never_reopened(self) -> None:
        machine = SubmissionStateMachine("att-4")
        machine.transition(SubmissionState.VALIDATING, trigger="submit")
        machine.transition(SubmissionState.ERROR, trigger="spam")

        result = machine.transition(SubmissionState.VALIDATING, trigger="retry")

        assert result.success is False
        assert machine.current_state == SubmissionState.ERROR
        assert machine.get_valid_targets() == frozenset()

    def test_history_is_a_copy(self) -> None:
        machine = SubmissionStateMachine("att-5")
        machine.transition(SubmissionState.VALIDATING, trigger="submit")
        machine.history.clear()
        assert len(machine.history) == 1
