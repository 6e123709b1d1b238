"""
Guards da FSM de submissão.

O mapa de transições diz quais destinos existem a partir de cada estado;
os guards impõem o que vale para qualquer tentativa:

1. ambos os estados são SubmissionState
2. SUCCESS/ERROR não têm saída (reenvio = nova tentativa)
3. self-loop apenas em UPLOADING, que é como o progresso avança
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fsm.states.submission import TERMINAL_STATES, SubmissionState


@dataclass(frozen=True, slots=True)
class GuardResult:
    """Veredito de um guard; ``reason`` só existe quando negado."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "GuardResult":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        return cls(allowed=False, reason=reason)


Guard = Callable[[SubmissionState, SubmissionState], GuardResult]

_ALLOWED = GuardResult.allow()


def guard_valid_state(from_state: SubmissionState, to_state: SubmissionState) -> GuardResult:
    """Nega valores que não são SubmissionState (ex: strings cruas)."""
    for label, state in (("origem", from_state), ("destino", to_state)):
        if not isinstance(state, SubmissionState):
            return GuardResult.deny(f"Estado de {label} inválido: {state!r}")
    return _ALLOWED


def guard_terminal_state(from_state: SubmissionState, to_state: SubmissionState) -> GuardResult:
    """Nega qualquer saída de SUCCESS/ERROR."""
    del to_state
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, inicie uma nova tentativa"
        )
    return _ALLOWED


def guard_same_state(from_state: SubmissionState, to_state: SubmissionState) -> GuardResult:
    """Nega self-loop fora de UPLOADING."""
    if from_state is to_state and from_state is not SubmissionState.UPLOADING:
        return GuardResult.deny(f"Transição reflexiva não permitida: {from_state.name}")
    return _ALLOWED


# Ordem importa: o primeiro deny é o motivo reportado
DEFAULT_GUARDS: tuple[Guard, ...] = (
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
)


def evaluate_guards(
    from_state: SubmissionState,
    to_state: SubmissionState,
    guards: Sequence[Guard] | None = None,
) -> GuardResult:
    """
    Aplica os guards em sequência.

    Args:
        from_state: Estado atual da tentativa.
        to_state: Estado pedido.
        guards: Guards a aplicar (DEFAULT_GUARDS se None).

    Returns:
        O primeiro GuardResult negado, ou allow().
    """
    for guard in DEFAULT_GUARDS if guards is None else guards:
        result = guard(from_state, to_state)
        if not result.allowed:
            return result
    return _ALLOWED
