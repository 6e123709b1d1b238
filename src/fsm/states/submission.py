"""
Estados de uma tentativa de submissão de aplicação.

Cada tentativa percorre idle → validating → (uploading →) submitting e
termina em success ou error. Uma nova tentativa usa uma nova instância da
máquina; estados terminais nunca são reabertos.
"""

from enum import StrEnum


class SubmissionState(StrEnum):
    """
    Estados canônicos de uma tentativa de submissão.

    Estados não-terminais:
        - IDLE: Nenhuma submissão em andamento
        - VALIDATING: Spam check e validação local
        - UPLOADING: Transferência do arquivo anexado (com progresso)
        - SUBMITTING: Chamada ao colaborador de persistência (com retry)

    Estados terminais:
        - SUCCESS: Registro persistido (carrega application_id)
        - ERROR: Falha terminal (carrega mensagem e/ou erros de campo)
    """

    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    SUBMITTING = "submitting"

    SUCCESS = "success"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[SubmissionState] = frozenset({
    SubmissionState.SUCCESS,
    SubmissionState.ERROR,
})

# Estados em que o guard single-flight está ativo
IN_FLIGHT_STATES: frozenset[SubmissionState] = frozenset({
    SubmissionState.VALIDATING,
    SubmissionState.UPLOADING,
    SubmissionState.SUBMITTING,
})

DEFAULT_INITIAL_STATE: SubmissionState = SubmissionState.IDLE


def is_terminal(state: SubmissionState) -> bool:
    """
    Verifica se o estado encerra a tentativa.

    Args:
        state: Estado a ser verificado

    Returns:
        True se o estado é terminal
    """
    return state in TERMINAL_STATES


def is_in_flight(state: SubmissionState) -> bool:
    """Indica se há submissão em andamento neste estado."""
    return state in IN_FLIGHT_STATES
