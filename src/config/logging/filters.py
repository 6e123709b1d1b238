"""Filters de logging para injeção de contexto e redação de PII.

Campos injetados:
- correlation_id: ID da tentativa de submissão (ou da requisição)
- service: Nome do serviço (ex: arena_intake)

Emails presentes na mensagem formatada são mascarados antes da saída.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.masking import mask_emails_in_text

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona correlation_id e service ao record.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class EmailRedactionFilter(logging.Filter):
    """Mascara emails na mensagem final do record.

    Cobre o caso de um email chegar aos logs via args/exception message;
    campos em `extra` devem ser mascarados na origem (utils.masking).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = mask_emails_in_text(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True
