"""Métricas do intake via structured logging.

Registradas como logs estruturados (``metric_*``) para agregação posterior
no sistema de logs.

Métricas:
- Latência: duração por componente/operação
- Outcome: contador de submissões por categoria terminal
- Upload: tamanho e finalidade dos arquivos transferidos
- Notificação: resultado por notificador
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "submission_orchestrator")
        operation: Nome da operação (ex: "submit", "persist")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_submission_outcome(
    application_kind: str,
    state: str,
    category: str | None,
    attempts: int,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado terminal de uma tentativa.

    Args:
        application_kind: founder | investor
        state: success | error
        category: Categoria do erro (None em sucesso)
        attempts: Chamadas feitas ao colaborador de persistência
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_submission_outcome",
        extra={
            "metric_type": "counter",
            "application_kind": application_kind,
            "state": state,
            "error_category": category or "none",
            "persistence_attempts": attempts,
            "correlation_id": correlation_id,
        },
    )


def record_upload(
    purpose: str,
    size_bytes: int,
    success: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra uma transferência de arquivo."""
    logger.info(
        "metric_upload",
        extra={
            "metric_type": "upload",
            "purpose": purpose,
            "size_bytes": size_bytes,
            "success": success,
            "correlation_id": correlation_id,
        },
    )


def record_notification(
    notifier: str,
    success: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra o resultado de uma notificação pós-submissão."""
    logger.info(
        "metric_notification",
        extra={
            "metric_type": "counter",
            "notifier": notifier,
            "success": success,
            "correlation_id": correlation_id,
        },
    )
