"""Colaborador HTTP de persistência de aplicações.

POST {INTAKE_APPLICATIONS_URL} com o registro normalizado e o header
``Idempotency-Key``; 2xx retorna ``{"id": ...}``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.intake.errors import parse_json_body, raise_for_intake_status
from api.connectors.intake.http_base import HttpClientConfig, IntakeHttpClient
from app.protocols.application_store import ApplicationStoreProtocol
from utils.errors import TransientServerError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

IDEMPOTENCY_HEADER = "Idempotency-Key"


class HttpApplicationStore(ApplicationStoreProtocol):
    """Persistência via endpoint HTTP.

    Args:
        applications_url: Endpoint de criação.
        config: Configuração HTTP (timeout, headers).
        transport: Transport httpx injetável para testes.
    """

    def __init__(
        self,
        applications_url: str,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not applications_url:
            raise ValueError("applications_url é obrigatório")
        self._url = applications_url
        self._http = IntakeHttpClient(config, transport=transport)

    async def create_application(self, record: dict[str, Any], idempotency_key: str) -> str:
        response = await self._http.request(
            "POST",
            self._url,
            json=record,
            headers={IDEMPOTENCY_HEADER: idempotency_key},
        )
        logger.info(
            "applications_api_response",
            extra={
                "status_code": response.status_code,
                "application_kind": record.get("applicationKind"),
            },
        )
        raise_for_intake_status(response)

        application_id = parse_json_body(response).get("id")
        if not application_id:
            raise TransientServerError("missing_application_id", status_code=response.status_code)
        return str(application_id)

    async def aclose(self) -> None:
        await self._http.aclose()
