"""Protocolo do colaborador de persistência de aplicações.

Implementações: HTTP (api/connectors/intake), Firestore e memória
(app/infra/stores).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ApplicationStoreProtocol(ABC):
    """Contrato de criação idempotente de aplicações.

    Método canônico:
    - create_application(record, idempotency_key) -> application_id
      Repetir a chamada com a mesma chave nunca cria um segundo registro.
    """

    @abstractmethod
    async def create_application(self, record: dict[str, Any], idempotency_key: str) -> str:
        """Cria (ou recupera) o registro durável.

        Args:
            record: Payload normalizado (camelCase, sem bytes de arquivo).
            idempotency_key: Chave estável da tentativa lógica.

        Returns:
            Id da aplicação persistida.

        Raises:
            PermanentServerError: Validação/spam rejeitados pelo servidor (4xx).
            RateLimitedError: Limite de taxa (429) com retry-after.
            TransientServerError: Falha 5xx elegível a retry.
            NetworkError: Timeout/conexão, elegível a retry.
        """
