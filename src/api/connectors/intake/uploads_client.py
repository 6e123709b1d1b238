"""Colaborador HTTP de upload (emissão de ticket + PUT direto).

- POST {INTAKE_UPLOAD_TICKET_URL} ``{fileName, fileType, fileSize, purpose}``
  → ``{uploadUrl, fileRef, expiresAt, maxSize, allowedTypes}``
- 400 ``{error, allowedTypes?, maxSize?}`` vira ``FileUploadError``
- PUT dos bytes em chunks com Content-Length explícito e progresso
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from api.connectors.intake.errors import parse_json_body, raise_for_intake_status
from api.connectors.intake.http_base import HttpClientConfig, IntakeHttpClient
from app.domain.uploads import UploadErrorCode, UploadTicketGrant
from utils.errors import FileUploadError, TransientServerError

if TYPE_CHECKING:
    import httpx

    from app.domain.uploads import UploadTicketRequest

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class HttpUploadClient:
    """Implementação HTTP de ``UploadClientProtocol``.

    Args:
        ticket_url: Endpoint de emissão de ticket.
        config: Configuração HTTP.
        transport: Transport httpx injetável para testes.
        chunk_size: Tamanho dos chunks do PUT.
    """

    def __init__(
        self,
        ticket_url: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        if not ticket_url:
            raise ValueError("ticket_url é obrigatório")
        self._ticket_url = ticket_url
        self._http = IntakeHttpClient(config, transport=transport)
        self._chunk_size = chunk_size

    async def request_ticket(self, request: UploadTicketRequest) -> UploadTicketGrant:
        """Solicita destino de escrita de uso único.

        Raises:
            FileUploadError: Recusa do colaborador (400).
            TransientServerError: 5xx ou resposta malformada.
            NetworkError: Falha de transporte.
        """
        response = await self._http.request("POST", self._ticket_url, json=request.to_wire())
        if response.status_code == 400:
            raise _rejection_error(parse_json_body(response))
        raise_for_intake_status(response)

        body = parse_json_body(response)
        upload_url = body.get("uploadUrl")
        if not upload_url:
            raise TransientServerError("missing_upload_url", status_code=response.status_code)

        return UploadTicketGrant(
            upload_url=str(upload_url),
            file_ref=str(body.get("fileRef") or ""),
            expires_at=_parse_expiry(body.get("expiresAt")),
            max_size_bytes=_as_int(body.get("maxSize")),
            allowed_mime_types=tuple(str(t) for t in body.get("allowedTypes") or ()),
        )

    async def put_bytes(
        self,
        upload_url: str,
        data: bytes,
        content_type: str,
        on_progress: Callable[[int], None] | None = None,
    ) -> None:
        """Transfere os bytes em chunks reportando bytes enviados.

        Raises:
            FileUploadError: Destino recusou a escrita (4xx).
            TransientServerError: 5xx.
            NetworkError: Falha de transporte.
        """
        headers = {"Content-Type": content_type, "Content-Length": str(len(data))}
        response = await self._http.request(
            "PUT", upload_url, content=self._chunks(data, on_progress), headers=headers
        )
        if 400 <= response.status_code < 500 and response.status_code != 429:
            logger.warning("upload_put_rejected", extra={"status_code": response.status_code})
            raise FileUploadError(
                UploadErrorCode.UPLOAD_REJECTED, "The upload destination rejected the file"
            )
        raise_for_intake_status(response)

    async def _chunks(
        self, data: bytes, on_progress: Callable[[int], None] | None
    ) -> AsyncIterator[bytes]:
        sent = 0
        for offset in range(0, len(data), self._chunk_size):
            chunk = data[offset : offset + self._chunk_size]
            yield chunk
            sent += len(chunk)
            if on_progress is not None:
                on_progress(sent)

    async def aclose(self) -> None:
        await self._http.aclose()


def _rejection_error(body: dict[str, Any]) -> FileUploadError:
    message = str(body.get("error") or "The file was rejected")
    if body.get("allowedTypes"):
        return FileUploadError(UploadErrorCode.INVALID_FILE_TYPE, message)
    if body.get("maxSize"):
        return FileUploadError(UploadErrorCode.FILE_TOO_LARGE, message)
    return FileUploadError(UploadErrorCode.UPLOAD_REJECTED, message)


def _parse_expiry(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, int | float):
        # epoch em ms
        return datetime.fromtimestamp(raw / 1000, tz=UTC)
    try:
        parsed = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("upload_ticket_expiry_unparseable")
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _as_int(raw: Any) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None
