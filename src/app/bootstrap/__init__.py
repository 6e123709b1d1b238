"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, create_intake_service

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()

    # Uma fachada por formulário
    service = create_intake_service()
"""

from __future__ import annotations

import logging

from app.bootstrap.dependencies import create_intake_service
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_intake_settings,
    get_notification_settings,
    get_upload_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "arena_intake"

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa a aplicação para testes (logging em DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    intake = get_intake_settings()
    notifications = get_notification_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS

    errors: list[str] = [f"base: {error}" for error in base.validate()]
    errors.extend(f"intake: {error}" for error in intake.validate(base))
    errors.extend(f"uploads: {error}" for error in get_upload_settings().validate())
    errors.extend(f"notifications: {error}" for error in notifications.validate())

    uses_firestore = intake.store_backend == "firestore" or "mail_queue" in notifications.backends
    if uses_firestore:
        firestore_errors = get_firestore_settings().validate(base.gcp_project)
        errors.extend(f"firestore: {error}" for error in firestore_errors)

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


__all__ = [
    "SERVICE_NAME",
    "create_intake_service",
    "initialize_app",
    "initialize_test_app",
    "validate_runtime_settings",
]
