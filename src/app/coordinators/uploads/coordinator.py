"""Coordenação do upload em duas fases (ticket → transferência).

Fase 1 (``request_ticket``): valida tipo/tamanho/nome, sanitiza o nome,
monta a referência namespaced e obtém do colaborador um destino de escrita
de uso único com expiração limitada.

Fase 2 (``transfer``): transfere os bytes para o destino do ticket. O ticket
é marcado como consumido antes da transferência; em falha de transporte um
novo ticket é necessário (não há retry no mesmo ticket).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from app.coordinators.uploads.constraints import check_upload_constraints, constraints_for
from app.coordinators.uploads.file_names import build_file_ref, sanitize_file_name
from app.domain.uploads import (
    FileUploadTicket,
    UploadErrorCode,
    UploadPurpose,
    UploadResult,
    UploadTicketRequest,
)
from app.observability import get_correlation_id, record_upload
from config.settings import UploadSettings, get_upload_settings
from utils.errors import FileUploadError, RateLimitedError, TransientServerError

if TYPE_CHECKING:
    from app.domain.uploads import AttachedFile
    from app.protocols.upload_client import UploadClientProtocol

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class FileUploadCoordinator:
    """Coordena tickets de upload e transferências.

    Args:
        client: Colaborador de upload (emissão de ticket + PUT).
        settings: Limites e TTL (usa env se omitido).
        clock: Relógio injetável (UTC).
    """

    def __init__(
        self,
        client: UploadClientProtocol,
        settings: UploadSettings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._client = client
        self._settings = settings or get_upload_settings()
        self._clock = clock
        # file_ref -> expires_at; entradas expiradas são podadas a cada transfer
        self._consumed: dict[str, datetime] = {}

    @property
    def settings(self) -> UploadSettings:
        return self._settings

    @property
    def consumed_ticket_count(self) -> int:
        """Tickets consumidos ainda dentro da validade."""
        return len(self._consumed)

    async def request_ticket(
        self,
        file_name: str,
        mime_type: str,
        size_bytes: int,
        purpose: UploadPurpose | str = UploadPurpose.PITCH_DECK,
    ) -> FileUploadTicket:
        """Fase 1: valida restrições e obtém ticket de escrita.

        Args:
            file_name: Nome original do arquivo.
            mime_type: Content-Type declarado.
            size_bytes: Tamanho declarado.
            purpose: pitch_deck ou verification.

        Returns:
            FileUploadTicket com expiração limitada ao TTL configurado.

        Raises:
            FileUploadError: Restrição violada, recusa do colaborador ou
                falha de transporte.
        """
        purpose = UploadPurpose(purpose)
        constraints = constraints_for(purpose, self._settings)
        check_upload_constraints(file_name, mime_type, size_bytes, constraints)

        now = self._clock()
        content_type = mime_type.strip().lower()
        safe_name = sanitize_file_name(file_name)
        proposed_ref = build_file_ref(self._settings.ref_prefix, purpose, safe_name, now)

        request = UploadTicketRequest(
            file_name=safe_name,
            file_type=content_type,
            file_size=size_bytes,
            purpose=purpose,
            file_ref=proposed_ref,
        )
        try:
            grant = await self._client.request_ticket(request)
        except (TransientServerError, RateLimitedError) as exc:
            logger.warning(
                "upload_ticket_request_failed",
                extra={"purpose": str(purpose), "error_type": type(exc).__name__},
            )
            raise FileUploadError(
                UploadErrorCode.TRANSFER_FAILED,
                "Upload service is unavailable. Please try again.",
            ) from exc

        max_expiry = now + timedelta(seconds=self._settings.ticket_ttl_seconds)
        expires_at = min(grant.expires_at, max_expiry) if grant.expires_at else max_expiry
        max_size = constraints.max_size_bytes
        if grant.max_size_bytes:
            max_size = min(max_size, grant.max_size_bytes)

        ticket = FileUploadTicket(
            file_ref=grant.file_ref or proposed_ref,
            upload_url=grant.upload_url,
            expires_at=expires_at,
            max_size_bytes=max_size,
            allowed_mime_types=grant.allowed_mime_types or constraints.allowed_mime_types,
            content_type=content_type,
            purpose=purpose,
        )
        logger.info(
            "upload_ticket_issued",
            extra={
                "purpose": str(purpose),
                "file_ref": ticket.file_ref,
                "size_bytes": size_bytes,
                "expires_at": ticket.expires_at.isoformat(),
            },
        )
        return ticket

    async def transfer(
        self,
        ticket: FileUploadTicket,
        data: bytes,
        on_progress: ProgressCallback | None = None,
    ) -> UploadResult:
        """Fase 2: transfere os bytes para o destino do ticket.

        Args:
            ticket: Ticket emitido por ``request_ticket`` (uso único).
            data: Conteúdo do arquivo.
            on_progress: Recebe o percentual transferido (0..100).

        Returns:
            UploadResult de sucesso com a referência do arquivo.

        Raises:
            FileUploadError: TICKET_CONSUMED, TICKET_EXPIRED, FILE_TOO_LARGE
                ou TRANSFER_FAILED.
        """
        now = self._clock()
        self._prune_consumed(now)

        if ticket.file_ref in self._consumed:
            raise FileUploadError(
                UploadErrorCode.TICKET_CONSUMED,
                "This upload link was already used. Please attach the file again.",
            )
        if ticket.is_expired(now):
            raise FileUploadError(
                UploadErrorCode.TICKET_EXPIRED,
                "The upload link expired. Please attach the file again.",
            )

        # Consumido antes do IO: falha de transporte exige novo ticket
        self._consumed[ticket.file_ref] = ticket.expires_at

        if len(data) > ticket.max_size_bytes:
            raise FileUploadError(
                UploadErrorCode.FILE_TOO_LARGE,
                "The file is larger than the upload link allows",
            )

        total = len(data)

        def _report(sent_bytes: int) -> None:
            if on_progress is not None and total:
                on_progress(min(100, sent_bytes * 100 // total))

        try:
            await self._client.put_bytes(ticket.upload_url, data, ticket.content_type, _report)
        except (TransientServerError, RateLimitedError, FileUploadError) as exc:
            record_upload(str(ticket.purpose), total, success=False, correlation_id=get_correlation_id())
            logger.warning(
                "upload_transfer_failed",
                extra={"file_ref": ticket.file_ref, "error_type": type(exc).__name__},
            )
            raise FileUploadError(
                UploadErrorCode.TRANSFER_FAILED,
                "File upload failed. Please try again.",
            ) from exc

        if on_progress is not None:
            on_progress(100)
        record_upload(str(ticket.purpose), total, success=True, correlation_id=get_correlation_id())
        logger.info("upload_transfer_completed", extra={"file_ref": ticket.file_ref})
        return UploadResult.ok(ticket.file_ref)

    async def upload_file(
        self,
        file: AttachedFile,
        purpose: UploadPurpose | str,
        on_progress: ProgressCallback | None = None,
    ) -> UploadResult:
        """Executa as duas fases para um arquivo anexado (nunca lança).

        Se o ticket expirar antes da transferência, solicita um novo uma
        única vez.

        Returns:
            UploadResult com file_ref em sucesso ou error/code em falha.
        """
        try:
            ticket = await self.request_ticket(
                file.file_name, file.content_type, file.size_bytes, purpose
            )
            if ticket.is_expired(self._clock()):
                logger.info("upload_ticket_expired_before_transfer", extra={"file_ref": ticket.file_ref})
                ticket = await self.request_ticket(
                    file.file_name, file.content_type, file.size_bytes, purpose
                )
            return await self.transfer(ticket, file.data, on_progress)
        except FileUploadError as exc:
            return UploadResult.failed(exc.code, exc.message)

    def _prune_consumed(self, now: datetime) -> None:
        # Ticket expirado já é recusado por TICKET_EXPIRED
        expired = [ref for ref, expires_at in self._consumed.items() if now >= expires_at]
        for ref in expired:
            del self._consumed[ref]
