"""
Registros imutáveis da FSM de submissão.

``StateTransition`` entra no histórico da tentativa; ``TransitionResult`` é
o retorno de ``SubmissionStateMachine.transition``.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.submission import SubmissionState


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Uma mudança de estado da tentativa.

    Attributes:
        from_state: Estado antes da mudança.
        to_state: Estado depois da mudança (igual ao anterior no progresso
            de upload).
        trigger: Evento que causou a mudança (ex: 'spam_rejected').
        metadata: Contexto de auditoria, sem PII.
        progress: Percentual do upload, só em UPLOADING.
        timestamp: Instante UTC.
    """

    from_state: SubmissionState
    to_state: SubmissionState
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    progress: int | None = None
    timestamp: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")
        if self.progress is not None and not 0 <= self.progress <= 100:
            raise ValueError(f"progress deve estar entre 0 e 100, recebido: {self.progress}")

    def to_log_dict(self) -> dict[str, Any]:
        """Campos para ``extra=`` de log; ``progress`` só quando presente."""
        data: dict[str, Any] = {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }
        if self.progress is not None:
            data["progress"] = self.progress
        return data


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Sucesso traz ``transition``; falha traz ``error_reason``."""

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
