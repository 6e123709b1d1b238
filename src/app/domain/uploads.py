"""Tipos do protocolo de upload em duas fases (ticket → transferência)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class UploadPurpose(StrEnum):
    """Finalidade do arquivo; define tipos aceitos e limite de tamanho."""

    PITCH_DECK = "pitch_deck"
    VERIFICATION = "verification"


class UploadErrorCode(StrEnum):
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    EMPTY_FILE = "EMPTY_FILE"
    INVALID_FILE_NAME = "INVALID_FILE_NAME"
    UPLOAD_REJECTED = "UPLOAD_REJECTED"
    TICKET_EXPIRED = "TICKET_EXPIRED"
    TICKET_CONSUMED = "TICKET_CONSUMED"
    TRANSFER_FAILED = "TRANSFER_FAILED"


class AttachedFile(BaseModel):
    """Arquivo anexado ao formulário, ainda não enviado."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    content_type: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class UploadTicketRequest:
    """Corpo enviado ao colaborador de upload."""

    file_name: str
    file_type: str
    file_size: int
    purpose: UploadPurpose
    file_ref: str

    def to_wire(self) -> dict[str, object]:
        return {
            "fileName": self.file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
            "purpose": str(self.purpose),
            "fileRef": self.file_ref,
        }


@dataclass(frozen=True, slots=True)
class UploadTicketGrant:
    """Resposta do colaborador: destino de escrita de uso único."""

    upload_url: str
    file_ref: str = ""
    expires_at: datetime | None = None
    max_size_bytes: int | None = None
    allowed_mime_types: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FileUploadTicket:
    """Credencial de escrita de uso único com expiração.

    Attributes:
        file_ref: Referência namespaced do arquivo no storage.
        upload_url: Destino do PUT.
        expires_at: Instante de expiração (UTC).
        max_size_bytes: Limite aceito para os bytes transferidos.
        allowed_mime_types: Tipos aceitos para a finalidade.
        content_type: Content-Type declarado no pedido do ticket.
        purpose: Finalidade do upload.
    """

    file_ref: str
    upload_url: str
    expires_at: datetime
    max_size_bytes: int
    allowed_mime_types: tuple[str, ...]
    content_type: str
    purpose: UploadPurpose

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Resultado de ``upload_file``/``transfer`` (nunca lança)."""

    success: bool
    file_ref: str | None = None
    error: str | None = None
    code: UploadErrorCode | None = None

    @classmethod
    def ok(cls, file_ref: str) -> UploadResult:
        return cls(success=True, file_ref=file_ref)

    @classmethod
    def failed(cls, code: str, message: str) -> UploadResult:
        return cls(success=False, error=message, code=UploadErrorCode(code))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"success": self.success}
        if self.file_ref:
            data["fileRef"] = self.file_ref
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True, slots=True)
class UploadConstraints:
    """Tipos e tamanho aceitos para uma finalidade."""

    allowed_mime_types: tuple[str, ...]
    allowed_extensions: tuple[str, ...]
    max_size_bytes: int
    label: str = field(default="file")
