"""Notificador via webhook interno (ex: canal do time).

Envia apenas o resumo de roteamento; campos narrativos e email do
aplicante não saem por este canal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from app.domain.submission import ApplicationSubmittedEvent

logger = logging.getLogger(__name__)


class WebhookNotifier:
    """POST JSON do resumo da aplicação.

    Args:
        webhook_url: Destino do POST.
        timeout_seconds: Timeout da chamada.
        transport: Transport httpx injetável para testes.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not webhook_url:
            raise ValueError("webhook_url é obrigatório")
        self._url = webhook_url
        self._timeout = timeout_seconds
        self._transport = transport

    @property
    def name(self) -> str:
        return "webhook"

    def build_payload(self, event: ApplicationSubmittedEvent) -> dict[str, Any]:
        return {
            "event": "application.submitted",
            "applicationId": event.application_id,
            "applicationKind": event.application_kind,
            "submittedAt": event.submitted_at.isoformat(),
            "summary": dict(event.summary),
        }

    async def notify(self, event: ApplicationSubmittedEvent) -> None:
        """Raises httpx.HTTPError em falha (logada pelo agendador)."""
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self._url, json=self.build_payload(event))
            response.raise_for_status()
        logger.info(
            "webhook_notified",
            extra={"application_id": event.application_id, "status_code": response.status_code},
        )
