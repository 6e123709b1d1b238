"""Despacho das notificações pós-submissão em background.

Cada notificador roda como task rastreada, ligada à tentativa
(``attempt_id``) e à aplicação persistida. Falhas são logadas com esses
identificadores e nunca alteram o status da submissão. No shutdown, as
notificações pendentes são aguardadas até o timeout e então canceladas.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.observability import record_notification

if TYPE_CHECKING:
    from collections.abc import Coroutine

logger = logging.getLogger(__name__)

MAX_CONCURRENT_NOTIFICATIONS = 20

_semaphore = asyncio.Semaphore(MAX_CONCURRENT_NOTIFICATIONS)


@dataclass(frozen=True, slots=True)
class NotificationJob:
    """Uma notificação de uma aplicação persistida.

    Attributes:
        notifier: Nome do notificador (mail_queue, webhook).
        attempt_id: Tentativa de submissão que persistiu a aplicação.
        application_id: ID devolvido pela persistência.
    """

    notifier: str
    attempt_id: str
    application_id: str

    @property
    def log_fields(self) -> dict[str, str]:
        return {
            "notifier": self.notifier,
            "attempt_id": self.attempt_id,
            "application_id": self.application_id,
        }


_pending: dict[asyncio.Task[Any], NotificationJob] = {}


def dispatch_notification(
    job: NotificationJob,
    coroutine: Coroutine[Any, Any, None],
) -> asyncio.Task[None]:
    """Agenda a notificação com limite de concorrência.

    Args:
        job: Identificação do notificador e da submissão.
        coroutine: ``notifier.notify(event)`` ainda não aguardada.

    Returns:
        Task rastreada até terminar (ou ser cancelada no shutdown).
    """
    task = asyncio.create_task(
        _run_with_limit(coroutine), name=f"notify:{job.notifier}:{job.attempt_id}"
    )
    _pending[task] = job
    task.add_done_callback(_on_notification_done)
    logger.info(
        "notification_dispatched",
        extra={**job.log_fields, "pending_notifications": len(_pending)},
    )
    return task


def pending_notifications() -> int:
    return len(_pending)


async def _run_with_limit(coroutine: Coroutine[Any, Any, None]) -> None:
    async with _semaphore:
        await coroutine


def _on_notification_done(task: asyncio.Task[Any]) -> None:
    job = _pending.pop(task, None)
    if job is None:
        return

    if task.cancelled():
        logger.warning("notification_cancelled", extra=job.log_fields)
        return

    exc = task.exception()
    record_notification(job.notifier, success=exc is None, correlation_id=job.attempt_id)
    if exc is not None:
        logger.error(
            "notification_failed",
            extra={
                **job.log_fields,
                "error_type": type(exc).__name__,
                "pending_notifications": len(_pending),
            },
        )


async def drain_notifications(timeout_seconds: float = 30.0) -> None:
    """Aguarda notificações pendentes durante o shutdown do processo."""
    if not _pending:
        return

    pending_now = list(_pending)
    logger.info(
        "notifications_shutdown_wait",
        extra={
            "pending_notifications": len(pending_now),
            "notifiers": sorted({_pending[task].notifier for task in pending_now}),
            "timeout_seconds": timeout_seconds,
        },
    )
    _, still_pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
    if not still_pending:
        return

    for task in still_pending:
        task.cancel()
    await asyncio.gather(*still_pending, return_exceptions=True)
    logger.warning(
        "notifications_shutdown_cancelled", extra={"cancelled_notifications": len(still_pending)}
    )
