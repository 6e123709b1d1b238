"""Factories de dependências — criação de implementações concretas.

Centraliza a escolha de implementações a partir das settings:
persistência (memory|http|firestore), upload, notificadores e a fachada
``ApplicationIntakeService``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.intake import HttpApplicationStore, HttpClientConfig, HttpUploadClient
from app.bootstrap.clients import create_firestore_client
from app.coordinators.uploads import FileUploadCoordinator
from app.infra.notifications import FirestoreMailQueueNotifier, WebhookNotifier
from app.infra.stores import FirestoreApplicationStore, MemoryApplicationStore
from app.services import ApplicationIntakeService, CrossFieldValidator, FormValidator
from app.use_cases.applications import BackoffPolicy, SubmissionOrchestrator
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_intake_settings,
    get_notification_settings,
    get_upload_settings,
)

if TYPE_CHECKING:
    from app.protocols import ApplicationStoreProtocol, NotifierProtocol, UploadClientProtocol

logger = logging.getLogger(__name__)


def create_form_validator() -> FormValidator:
    intake = get_intake_settings()
    return FormValidator(
        cross_validator=CrossFieldValidator(min_entity_check_size=intake.min_entity_check_size),
        upload_settings=get_upload_settings(),
    )


def create_application_store() -> ApplicationStoreProtocol:
    """Cria o colaborador de persistência conforme INTAKE_STORE_BACKEND.

    - "memory": MemoryApplicationStore (dev only)
    - "http": HttpApplicationStore (endpoint externo)
    - "firestore": FirestoreApplicationStore (in-process)
    """
    intake = get_intake_settings()
    backend = intake.store_backend

    if backend == "http":
        store: ApplicationStoreProtocol = HttpApplicationStore(
            intake.applications_url,
            HttpClientConfig(timeout_seconds=intake.http_timeout_seconds),
        )
    elif backend == "firestore":
        firestore = get_firestore_settings()
        store = FirestoreApplicationStore(
            create_firestore_client(),
            collection_name=firestore.collection_applications,
            rate_limits_collection=firestore.collection_rate_limits,
            rate_limit_seconds=intake.rate_limit_seconds,
            validator=create_form_validator(),
        )
    elif backend == "memory":
        base = get_base_settings()
        if not base.is_development:
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": base.environment},
            )
        store = MemoryApplicationStore(
            rate_limit_seconds=intake.rate_limit_seconds,
            validator=create_form_validator(),
        )
    else:
        msg = f"INTAKE_STORE_BACKEND inválido: {backend}"
        raise ValueError(msg)

    logger.info("application_store_created", extra={"backend": backend})
    return store


def create_upload_client() -> UploadClientProtocol:
    """Cria o colaborador de upload (HTTP)."""
    intake = get_intake_settings()
    return HttpUploadClient(
        intake.upload_ticket_url,
        HttpClientConfig(timeout_seconds=intake.http_timeout_seconds),
    )


def create_notifiers() -> list[NotifierProtocol]:
    """Cria os notificadores ativos em INTAKE_NOTIFIER_BACKENDS."""
    settings = get_notification_settings()
    notifiers: list[NotifierProtocol] = []

    if "mail_queue" in settings.backends:
        notifiers.append(
            FirestoreMailQueueNotifier(
                create_firestore_client(),
                settings.ops_emails,
                collection_name=settings.mail_queue_collection,
                environment=get_base_settings().environment,
            )
        )
    if "webhook" in settings.backends:
        notifiers.append(
            WebhookNotifier(settings.ops_webhook_url, settings.webhook_timeout_seconds)
        )

    logger.info("notifiers_created", extra={"notifiers": [n.name for n in notifiers]})
    return notifiers


def create_intake_service(
    store: ApplicationStoreProtocol | None = None,
    upload_client: UploadClientProtocol | None = None,
    notifiers: list[NotifierProtocol] | None = None,
) -> ApplicationIntakeService:
    """Monta a fachada do intake (uma instância por formulário).

    Args:
        store: Colaborador de persistência (das settings se omitido).
        upload_client: Colaborador de upload (das settings se omitido).
        notifiers: Notificadores (das settings se omitido).
    """
    form_validator = create_form_validator()
    uploads = FileUploadCoordinator(
        upload_client or create_upload_client(), settings=get_upload_settings()
    )
    orchestrator = SubmissionOrchestrator(
        store=store or create_application_store(),
        uploads=uploads,
        notifiers=create_notifiers() if notifiers is None else notifiers,
        form_validator=form_validator,
        backoff=BackoffPolicy.from_settings(get_intake_settings()),
    )
    return ApplicationIntakeService(
        form_validator=form_validator, uploads=uploads, orchestrator=orchestrator
    )
