"""Setup do logging estruturado do intake.

Um único handler em stdout, saída JSON (python-json-logger) e dois filtros:
correlation_id/service por tentativa de submissão e redação de emails.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="arena_intake")

    logger = get_logger(__name__)
    logger.info("submission_succeeded", extra={"attempts": 1})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

from config.logging.filters import CorrelationIdFilter, EmailRedactionFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "arena_intake"

# Bibliotecas que logam URLs de upload assinadas ou payloads em INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "google.auth", "urllib3")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Instala o handler JSON no root logger.

    Chamada uma vez pelo bootstrap; chamadas seguintes substituem o
    handler anterior.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case insensitive).
        service_name: Valor do campo ``service`` em todo record.
        correlation_id_getter: Fonte do correlation_id da tentativa atual
            (ex: app.observability.get_correlation_id).
        stream: Destino da saída (stdout se omitido).

    Raises:
        ValueError: Nível fora de VALID_LOG_LEVELS.
    """
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(normalized)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(EmailRedactionFilter())

    root = logging.getLogger()
    root.setLevel(normalized)
    root.handlers = [handler]

    quiet_level = max(logging.WARNING, root.level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    """Atalho para ``logging.getLogger(name)``."""
    return logging.getLogger(name)
