"""Taxonomia de erros do motor de intake.

Erros de validação de campo são valores (``ValidationError``), não exceções.
As exceções abaixo representam falhas que interrompem uma etapa da
submissão e são classificadas pelo orquestrador:

- ``SpamRejectedError``: rejeição terminal silenciosa, nunca repetida
- ``FileUploadError``: falha de tipo/tamanho/transporte do upload
- ``RateLimitedError``: carrega retry-after, não é repetida automaticamente
- ``TransientServerError`` / ``NetworkError``: repetidas com backoff
- ``PermanentServerError``: exposta imediatamente, sem retry
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.validation import ValidationError


class IntakeError(RuntimeError):
    """Base para todas as falhas do motor de intake."""


class InvalidPayloadError(IntakeError):
    """Payload bruto estruturalmente inutilizável (tipo/discriminador)."""

    def __init__(self, errors: Sequence[ValidationError]) -> None:
        self.errors = tuple(errors)
        fields = ", ".join(error.field for error in self.errors) or "payload"
        super().__init__(f"invalid_payload: {fields}")


class SpamRejectedError(IntakeError):
    """Submissão classificada como spam.

    Attributes:
        reasons: Motivos internos (só para log, nunca expostos ao chamador).
    """

    def __init__(self, reasons: Sequence[str] = ()) -> None:
        self.reasons = tuple(reasons)
        super().__init__("spam_rejected")


class FileUploadError(IntakeError):
    """Falha no protocolo de upload em duas fases.

    Attributes:
        code: Código estável (INVALID_FILE_TYPE, FILE_TOO_LARGE, ...).
        message: Mensagem apresentável ao usuário.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}")


class RateLimitedError(IntakeError):
    """Colaborador recusou por limite de taxa (HTTP 429)."""

    def __init__(self, retry_after_seconds: int | None = None, message: str = "") -> None:
        self.retry_after_seconds = retry_after_seconds
        self.message = message
        super().__init__(message or f"rate_limited retry_after={retry_after_seconds}")


class TransientServerError(IntakeError):
    """Falha transitória do colaborador (5xx); elegível a retry."""

    def __init__(self, message: str = "", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"transient_server_error status={status_code}")


class NetworkError(TransientServerError):
    """Timeout ou falha de conexão; classificada como transitória."""


class PermanentServerError(IntakeError):
    """Falha não transitória (4xx, validação no servidor, spam no servidor).

    Attributes:
        status_code: Status HTTP (ou equivalente) retornado.
        message: Mensagem do servidor.
        validation_errors: Erros de campo reportados pelo servidor.
        spam: True quando o servidor rejeitou pelo honeypot.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        validation_errors: Sequence[ValidationError] = (),
        *,
        spam: bool = False,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.validation_errors = tuple(validation_errors)
        self.spam = spam
        super().__init__(message or f"permanent_server_error status={status_code}")


class ReferenceDataError(IntakeError):
    """Dados de referência (países, estados, jurisdições) ausentes ou inválidos."""
