"""
Módulo FSM — máquina de estados das tentativas de submissão.

Estrutura:
    - states/: Estados (SubmissionState enum)
    - transitions/: Grafo de transições (VALID_TRANSITIONS)
    - rules/: Guards e invariantes
    - manager/: Máquina de estados (SubmissionStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import SubmissionStateMachine, create_submission_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    IN_FLIGHT_STATES,
    TERMINAL_STATES,
    SubmissionState,
    is_in_flight,
    is_terminal,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "IN_FLIGHT_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GuardResult",
    "StateTransition",
    "SubmissionState",
    "SubmissionStateMachine",
    "TransitionResult",
    "create_submission_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_in_flight",
    "is_terminal",
    "is_transition_valid",
    "validate_transition_map",
]
