"""Cliente HTTP base dos colaboradores do intake.

Sem retry próprio: o retry da persistência é do orquestrador (BackoffPolicy),
e o upload exige novo ticket a cada falha. Aqui apenas classificamos falhas
de transporte como ``NetworkError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from utils.errors import NetworkError

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 15.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class IntakeHttpClient:
    """Cliente HTTP assíncrono com classificação de erros de transporte.

    Args:
        config: Timeout e headers padrão.
        transport: Transport httpx injetável (``httpx.MockTransport`` em testes).
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        content: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Executa a requisição.

        Raises:
            NetworkError: Timeout, falha de conexão ou erro de protocolo.
        """
        try:
            return await self._get_client().request(
                method, url, json=json, content=content, headers=headers
            )
        except httpx.TimeoutException as exc:
            logger.warning("http_timeout", extra={"method": method, "error_type": type(exc).__name__})
            raise NetworkError("http_timeout") from exc
        except httpx.TransportError as exc:
            logger.warning(
                "http_transport_error", extra={"method": method, "error_type": type(exc).__name__}
            )
            raise NetworkError("http_connection_error") from exc

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
