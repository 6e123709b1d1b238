"""Protocolo do colaborador de upload (ticket + PUT direto)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.uploads import UploadTicketGrant, UploadTicketRequest


class UploadClientProtocol(Protocol):
    """Contrato do colaborador de upload.

    - request_ticket: emite destino de escrita de uso único; recusa com
      FileUploadError (tipo/tamanho) ou falha de transporte.
    - put_bytes: transfere os bytes para o destino do ticket.
    """

    async def request_ticket(self, request: UploadTicketRequest) -> UploadTicketGrant: ...

    async def put_bytes(
        self,
        upload_url: str,
        data: bytes,
        content_type: str,
        on_progress: Callable[[int], None] | None = None,
    ) -> None: ...
