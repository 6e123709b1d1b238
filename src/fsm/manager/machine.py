"""
Máquina de estados de uma tentativa de submissão.

Uma instância por tentativa: estados terminais não são reabertos e uma nova
tentativa começa em uma nova máquina (``create_submission_fsm``).
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.submission import (
    DEFAULT_INITIAL_STATE,
    SubmissionState,
    is_in_flight,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class SubmissionStateMachine:
    """
    Máquina de estados de uma tentativa de submissão.

    Valida transições contra o grafo e os guards, mantém o progresso de
    upload monotônico e registra o histórico para auditoria.

    Attributes:
        current_state: Estado atual da tentativa
        progress: Último progresso de upload registrado (0..100)
        history: Histórico de transições realizadas
    """

    __slots__ = ("_attempt_id", "_current_state", "_history", "_progress")

    def __init__(self, attempt_id: str = "") -> None:
        """
        Inicializa a máquina em IDLE.

        Args:
            attempt_id: Identificador da tentativa para logs
        """
        self._current_state = DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._attempt_id = attempt_id
        self._progress: int | None = None

    @property
    def current_state(self) -> SubmissionState:
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def attempt_id(self) -> str:
        return self._attempt_id

    @property
    def progress(self) -> int | None:
        return self._progress

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._current_state)

    @property
    def is_in_flight(self) -> bool:
        return is_in_flight(self._current_state)

    def get_valid_targets(self) -> frozenset[SubmissionState]:
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: SubmissionState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
        progress: int | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho
            metadata: Dados adicionais para auditoria (nunca PII)
            progress: Progresso de upload (apenas para UPLOADING)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        guard_result: GuardResult = evaluate_guards(self._current_state, target)
        if not guard_result.allowed:
            return TransitionResult(success=False, error_reason=guard_result.reason)

        if progress is not None:
            if target != SubmissionState.UPLOADING:
                return TransitionResult(
                    success=False,
                    error_reason=f"progress só é aceito em UPLOADING, recebido em {target.name}",
                )
            if self._progress is not None and progress < self._progress:
                return TransitionResult(
                    success=False,
                    error_reason=f"progress regrediu: {self._progress} → {progress}",
                )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
            progress=progress,
        )

        self._current_state = target
        if progress is not None:
            self._progress = progress
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """
        Resumo do estado atual para observability.

        Returns:
            Dict com informações do estado (seguro para logs)
        """
        return {
            "attempt_id": self._attempt_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "progress": self._progress,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]


def create_submission_fsm(attempt_id: str) -> SubmissionStateMachine:
    """
    Factory da máquina de uma nova tentativa.

    Args:
        attempt_id: Identificador da tentativa

    Returns:
        SubmissionStateMachine em IDLE
    """
    return SubmissionStateMachine(attempt_id=attempt_id)
