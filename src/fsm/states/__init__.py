"""Estados da FSM de submissão."""

from fsm.states.submission import (
    DEFAULT_INITIAL_STATE,
    IN_FLIGHT_STATES,
    TERMINAL_STATES,
    SubmissionState,
    is_in_flight,
    is_terminal,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "IN_FLIGHT_STATES",
    "TERMINAL_STATES",
    "SubmissionState",
    "is_in_flight",
    "is_terminal",
]
