"""Notificador via fila de email no Firestore.

Grava um job em ``mailQueue`` (status=queued, attempts=0); a entrega é feita
por um worker externo. ``messageIdHint`` permite dedupe no worker.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.submission import ApplicationSubmittedEvent

logger = logging.getLogger(__name__)

MAIL_QUEUE_COLLECTION = "mailQueue"
FROM_NAME = "Arena Intake"

_SUMMARY_LABELS: dict[str, str] = {
    "company_name": "Company",
    "website": "URL",
    "stage": "Stage",
    "industry": "Industry",
    "capital_sought": "Raising",
    "mode": "Offering",
    "investor_type": "Investor type",
    "accreditation_status": "Accredited",
    "check_size": "Check size",
    "country": "Country",
}


def build_subject(event: ApplicationSubmittedEvent) -> str:
    if event.application_kind == "founder":
        company = event.summary.get("company_name") or event.full_name
        return f"[Arena] New founder application: {company}"
    return f"[Arena] New investor application: {event.full_name}"


def build_text(event: ApplicationSubmittedEvent) -> str:
    lines = [f"Name: {event.full_name}", f"Email: {event.email}"]
    lines.extend(
        f"{_SUMMARY_LABELS.get(key, key)}: {value}"
        for key, value in event.summary.items()
        if value
    )
    lines.append(f"Application ID: {event.application_id}")
    return "\n".join(lines)


class FirestoreMailQueueNotifier:
    """Enfileira email interno para cada nova aplicação.

    Args:
        firestore_client: Cliente Firestore.
        recipients: Emails do time que recebem o aviso.
        collection_name: Collection da fila (default: mailQueue).
        environment: Ambiente gravado no job.
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        recipients: Sequence[str],
        collection_name: str = MAIL_QUEUE_COLLECTION,
        environment: str = "development",
    ) -> None:
        self._db = firestore_client
        self._recipients = list(recipients)
        self._collection = collection_name
        self._environment = environment

    @property
    def name(self) -> str:
        return "mail_queue"

    def build_job(self, event: ApplicationSubmittedEvent) -> dict[str, Any]:
        now = datetime.now(UTC)
        return {
            "to": self._recipients,
            "cc": [],
            "bcc": [],
            "subject": build_subject(event),
            "text": build_text(event),
            "html": None,
            "replyTo": event.email,
            "fromName": FROM_NAME,
            "messageIdHint": f"apply-{event.application_id}",
            "metadata": {
                "applicationId": event.application_id,
                "applicationKind": event.application_kind,
            },
            "status": "queued",
            "attempts": 0,
            "lastError": None,
            "notBefore": now,
            "createdAt": now,
            "updatedAt": now,
            "env": self._environment,
        }

    async def notify(self, event: ApplicationSubmittedEvent) -> None:
        job = self.build_job(event)
        await asyncio.to_thread(self._db.collection(self._collection).add, job)
        logger.info(
            "mail_job_enqueued",
            extra={
                "application_id": event.application_id,
                "recipients": len(self._recipients),
            },
        )
