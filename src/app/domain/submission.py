"""Status observável de uma tentativa de submissão."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from app.domain.validation import ValidationError
from fsm.states import SubmissionState, is_terminal


class ErrorCategory(StrEnum):
    """Categoria de falha terminal; cada uma mapeia para uma mensagem geral."""

    VALIDATION = "validation"
    SPAM = "spam"
    UPLOAD = "upload"
    RATE_LIMITED = "rate_limited"
    SERVER = "server"
    CANCELLED = "cancelled"


# Mensagens gerais por categoria (nunca expõem heurísticas internas)
SPAM_REJECTED_MESSAGE = "We could not process this submission."
VALIDATION_FAILED_MESSAGE = "Please correct the highlighted fields and try again."
SERVER_ERROR_MESSAGE = "We could not save your application right now. Please try again shortly."
CANCELLED_MESSAGE = "Submission was cancelled."

# Mensagem de rejeição por honeypot do colaborador de persistência
SERVER_SPAM_MESSAGE = "Spam detected."


def rate_limited_message(retry_after_seconds: int | None) -> str:
    if retry_after_seconds:
        return f"Too many submissions. Please try again in {retry_after_seconds} seconds."
    return "Too many submissions. Please try again later."


@dataclass(frozen=True, slots=True)
class SubmissionStatus:
    """Snapshot do estado da tentativa.

    Attributes:
        state: Estado atual da FSM.
        progress: Progresso do upload (0..100), apenas em UPLOADING.
        message: Mensagem geral (erros e sucesso).
        errors: Erros de campo (validação local ou do servidor).
        application_id: Id persistido (apenas em SUCCESS).
        retry_after_seconds: Dica do servidor em caso de rate limit.
        error_category: Categoria da falha (apenas em ERROR).
    """

    state: SubmissionState
    progress: int | None = None
    message: str | None = None
    errors: tuple[ValidationError, ...] = ()
    application_id: str | None = None
    retry_after_seconds: int | None = None
    error_category: ErrorCategory | None = None

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.state)

    @property
    def succeeded(self) -> bool:
        return self.state == SubmissionState.SUCCESS

    @classmethod
    def idle(cls) -> SubmissionStatus:
        return cls(state=SubmissionState.IDLE)

    @classmethod
    def success(cls, application_id: str) -> SubmissionStatus:
        return cls(
            state=SubmissionState.SUCCESS,
            application_id=application_id,
            message="Application submitted successfully.",
        )

    @classmethod
    def failure(
        cls,
        category: ErrorCategory,
        message: str,
        errors: tuple[ValidationError, ...] = (),
        retry_after_seconds: int | None = None,
    ) -> SubmissionStatus:
        return cls(
            state=SubmissionState.ERROR,
            message=message,
            errors=errors,
            retry_after_seconds=retry_after_seconds,
            error_category=category,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"state": str(self.state)}
        if self.progress is not None:
            data["progress"] = self.progress
        if self.message:
            data["message"] = self.message
        if self.errors:
            data["errors"] = [error.to_dict() for error in self.errors]
        if self.application_id:
            data["applicationId"] = self.application_id
        if self.retry_after_seconds is not None:
            data["retryAfterSeconds"] = self.retry_after_seconds
        return data


@dataclass(frozen=True, slots=True)
class ApplicationSubmittedEvent:
    """Evento entregue aos notificadores após persistência.

    Carrega apenas o resumo necessário para roteamento interno.
    """

    application_id: str
    application_kind: str
    email: str
    full_name: str
    summary: dict[str, str] = field(default_factory=dict)
    submitted_at: datetime = field(default_factory=lambda: datetime.now(UTC))
