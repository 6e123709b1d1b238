"""Orquestrador de submissão de aplicações.

Fluxo de uma tentativa (estritamente sequencial):
1. Single-flight: chamada concorrente aguarda a tentativa em andamento
2. Spam check (honeypot já no dict bruto; rejeição fixa, nunca repetida)
3. Validação do formulário (retorna todos os erros)
4. Upload do arquivo anexado, quando houver (progresso 0..100)
5. Persistência com retry/backoff e chave de idempotência estável
6. Notificações em background (nunca afetam o resultado)

O orquestrador é o único escritor do ``SubmissionStatus``; cada status é
precedido de uma transição válida na máquina de estados da tentativa.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from app.domain.applications import parse_application_payload
from app.domain.idempotency import derive_idempotency_key
from app.domain.submission import (
    CANCELLED_MESSAGE,
    SERVER_ERROR_MESSAGE,
    SPAM_REJECTED_MESSAGE,
    VALIDATION_FAILED_MESSAGE,
    ApplicationSubmittedEvent,
    ErrorCategory,
    SubmissionStatus,
    rate_limited_message,
)
from app.infra.tasks import NotificationJob, dispatch_notification
from app.observability import (
    correlation_scope,
    generate_attempt_id,
    get_correlation_id,
    record_latency,
    record_submission_outcome,
)
from app.services.form_validator import FormValidator
from app.services.spam_detector import SpamDetector
from app.use_cases.applications.backoff_policy import BackoffPolicy
from fsm import SubmissionState, SubmissionStateMachine, create_submission_fsm
from utils.errors import (
    InvalidPayloadError,
    PermanentServerError,
    RateLimitedError,
    SpamRejectedError,
    TransientServerError,
)
from utils.masking import mask_email

if TYPE_CHECKING:
    from app.coordinators.uploads import FileUploadCoordinator
    from app.domain.applications import FounderApplication, InvestorApplication
    from app.protocols import ApplicationStoreProtocol, NotifierProtocol

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

_SUMMARY_FIELDS: dict[str, tuple[str, ...]] = {
    "founder": ("company_name", "website", "stage", "industry", "capital_sought"),
    "investor": ("mode", "investor_type", "accreditation_status", "check_size", "country"),
}


class StatusStream:
    """Fila de status de um observador, inscrita enquanto aberta."""

    def __init__(self, subscribers: set[asyncio.Queue[SubmissionStatus]]) -> None:
        self._subscribers = subscribers
        self._queue: asyncio.Queue[SubmissionStatus] = asyncio.Queue()
        self._closed = False
        subscribers.add(self._queue)

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> StatusStream:
        return self

    async def __anext__(self) -> SubmissionStatus:
        if self._closed:
            raise StopAsyncIteration
        try:
            status = await self._queue.get()
        except asyncio.CancelledError:
            self.close()
            raise
        if status.is_terminal:
            self.close()
        return status

    async def __aenter__(self) -> StatusStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    async def aclose(self) -> None:
        self.close()

    def close(self) -> None:
        self._closed = True
        self._subscribers.discard(self._queue)


class SubmissionOrchestrator:
    """Conduz uma submissão do payload bruto até o status terminal.

    Args:
        store: Colaborador de persistência.
        uploads: Coordenador de upload (necessário apenas com arquivo anexado).
        notifiers: Notificadores disparados após sucesso.
        spam_detector: SpamDetector (novo se omitido).
        form_validator: FormValidator (novo se omitido).
        backoff: Política de retry da persistência.
        sleep: Função de espera (injetável em testes).
        rng: Fonte aleatória uniforme para o jitter.
    """

    def __init__(
        self,
        *,
        store: ApplicationStoreProtocol,
        uploads: FileUploadCoordinator | None = None,
        notifiers: Sequence[NotifierProtocol] = (),
        spam_detector: SpamDetector | None = None,
        form_validator: FormValidator | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: SleepFn = asyncio.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._store = store
        self._uploads = uploads
        self._notifiers = tuple(notifiers)
        self._spam = spam_detector or SpamDetector()
        self._validator = form_validator or FormValidator()
        self._backoff = backoff or BackoffPolicy()
        self._sleep = sleep
        self._rng = rng

        self._inflight: asyncio.Future[SubmissionStatus] | None = None
        self._status = SubmissionStatus.idle()
        self._history: list[SubmissionStatus] = []
        self._subscribers: set[asyncio.Queue[SubmissionStatus]] = set()
        self._persistence_attempts = 0

    @property
    def status(self) -> SubmissionStatus:
        """Último status publicado."""
        return self._status

    @property
    def history(self) -> tuple[SubmissionStatus, ...]:
        """Status publicados na tentativa atual (ou na última)."""
        return tuple(self._history)

    @property
    def is_in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def watcher_count(self) -> int:
        """Streams de ``watch()`` ainda inscritos."""
        return len(self._subscribers)

    def watch(self) -> StatusStream:
        """Stream de status até o próximo status terminal.

        A inscrição acontece na chamada, então ``watch()`` pode ser criado
        antes de ``submit()`` sem perder o primeiro status. A inscrição sai
        no status terminal, no cancelamento da espera ou em ``aclose()``;
        um stream que nunca será consumido deve ser fechado (ou usado com
        ``async with``).
        """
        return StatusStream(self._subscribers)

    async def submit(
        self,
        payload: FounderApplication | InvestorApplication | dict[str, Any],
        idempotency_key: str | None = None,
    ) -> SubmissionStatus:
        """Executa uma tentativa de submissão.

        Args:
            payload: Payload tipado ou dict bruto (camelCase ou snake_case).
            idempotency_key: Chave explícita; derivada do payload se omitida.

        Returns:
            SubmissionStatus terminal (SUCCESS ou ERROR). Nunca lança,
            exceto ``asyncio.CancelledError``.
        """
        if self._inflight is not None and not self._inflight.done():
            logger.info("submission_already_in_flight", extra={"state": str(self._status.state)})
            return await asyncio.shield(self._inflight)

        # Guard definido antes do primeiro await
        future: asyncio.Future[SubmissionStatus] = asyncio.get_running_loop().create_future()
        self._inflight = future
        self._history = []
        self._persistence_attempts = 0
        fsm = create_submission_fsm(generate_attempt_id())

        with correlation_scope(fsm.attempt_id):
            started = time.perf_counter()
            kind = _kind_of(payload)
            try:
                status = await self._run(fsm, payload, idempotency_key)
            except asyncio.CancelledError:
                status = self._fail(fsm, ErrorCategory.CANCELLED, CANCELLED_MESSAGE)
                logger.warning("submission_cancelled", extra={"attempt_id": fsm.attempt_id})
                self._finish(future, status, kind, started)
                raise
            except Exception:
                logger.exception("submission_unexpected_error", extra={"attempt_id": fsm.attempt_id})
                status = self._fail(fsm, ErrorCategory.SERVER, SERVER_ERROR_MESSAGE)

            self._finish(future, status, kind, started)
            return status

    async def _run(
        self,
        fsm: SubmissionStateMachine,
        payload: FounderApplication | InvestorApplication | dict[str, Any],
        idempotency_key: str | None,
    ) -> SubmissionStatus:
        self._advance(fsm, SubmissionStatus(state=SubmissionState.VALIDATING), "submit")
        logger.info("submission_started", extra={"attempt_id": fsm.attempt_id})

        # Honeypot no dict bruto antes do parse
        try:
            if isinstance(payload, dict):
                self._spam.ensure_not_spam(payload)
            application = parse_application_payload(payload)
            self._spam.ensure_not_spam(application)
        except SpamRejectedError as exc:
            logger.info(
                "spam_rejected",
                extra={"application_kind": _kind_of(payload), "reason_count": len(exc.reasons)},
            )
            return self._fail(fsm, ErrorCategory.SPAM, SPAM_REJECTED_MESSAGE)
        except InvalidPayloadError as exc:
            return self._fail(fsm, ErrorCategory.VALIDATION, VALIDATION_FAILED_MESSAGE, exc.errors)

        validation = self._validator.validate(application)
        if not validation.is_valid:
            logger.info(
                "submission_validation_failed",
                extra={
                    "application_kind": application.application_kind,
                    "error_count": len(validation.errors),
                    "fields": sorted({error.field for error in validation.errors}),
                },
            )
            return self._fail(
                fsm, ErrorCategory.VALIDATION, VALIDATION_FAILED_MESSAGE, validation.errors
            )

        attached = application.attached_file
        if attached is not None:
            if self._uploads is None:
                raise RuntimeError("upload coordinator not configured")
            self._advance(
                fsm, SubmissionStatus(state=SubmissionState.UPLOADING, progress=0), "upload_started"
            )
            upload = await self._uploads.upload_file(
                attached,
                application.upload_purpose,
                on_progress=lambda percent: self._report_progress(fsm, percent),
            )
            if not upload.success or not upload.file_ref:
                logger.warning(
                    "submission_upload_failed",
                    extra={"code": str(upload.code) if upload.code else None},
                )
                return self._fail(
                    fsm, ErrorCategory.UPLOAD, upload.error or "File upload failed. Please try again."
                )
            application = application.with_file_ref(upload.file_ref)

        self._advance(fsm, SubmissionStatus(state=SubmissionState.SUBMITTING), "persist")
        key = idempotency_key or derive_idempotency_key(application)
        record = application.to_record()

        try:
            application_id = await self._persist(record, key)
        except RateLimitedError as exc:
            return self._fail(
                fsm,
                ErrorCategory.RATE_LIMITED,
                rate_limited_message(exc.retry_after_seconds),
                retry_after_seconds=exc.retry_after_seconds,
            )
        except PermanentServerError as exc:
            return self._permanent_failure(fsm, exc)
        except TransientServerError as exc:
            logger.error(
                "persistence_retries_exhausted",
                extra={
                    "attempts": self._persistence_attempts,
                    "error_type": type(exc).__name__,
                    "status_code": exc.status_code,
                },
            )
            return self._fail(fsm, ErrorCategory.SERVER, SERVER_ERROR_MESSAGE)

        logger.info(
            "submission_persisted",
            extra={
                "application_id": application_id,
                "application_kind": application.application_kind,
                "email": mask_email(application.email),
                "attempts": self._persistence_attempts,
            },
        )
        self._schedule_notifications(application, application_id)

        status = SubmissionStatus.success(application_id)
        self._advance(fsm, status, "persisted")
        return status

    async def _persist(self, record: dict[str, Any], idempotency_key: str) -> str:
        """Chama o colaborador com retry; mesma chave em todas as tentativas."""
        while True:
            self._persistence_attempts += 1
            attempt = self._persistence_attempts
            try:
                return await self._store.create_application(record, idempotency_key)
            except TransientServerError as exc:
                if not self._backoff.should_retry(attempt):
                    raise
                delay = self._backoff.delay_for(attempt, self._rng)
                logger.warning(
                    "persistence_retry_scheduled",
                    extra={
                        "attempt": attempt,
                        "max_attempts": self._backoff.max_attempts,
                        "delay_seconds": round(delay, 3),
                        "error_type": type(exc).__name__,
                        "status_code": exc.status_code,
                    },
                )
                await self._sleep(delay)

    def _permanent_failure(
        self, fsm: SubmissionStateMachine, exc: PermanentServerError
    ) -> SubmissionStatus:
        logger.warning(
            "persistence_rejected",
            extra={
                "status_code": exc.status_code,
                "spam": exc.spam,
                "error_count": len(exc.validation_errors),
            },
        )
        if exc.spam:
            return self._fail(fsm, ErrorCategory.SPAM, SPAM_REJECTED_MESSAGE)
        if exc.validation_errors:
            return self._fail(
                fsm,
                ErrorCategory.VALIDATION,
                exc.message or VALIDATION_FAILED_MESSAGE,
                exc.validation_errors,
            )
        return self._fail(fsm, ErrorCategory.SERVER, exc.message or SERVER_ERROR_MESSAGE)

    def _schedule_notifications(
        self, application: FounderApplication | InvestorApplication, application_id: str
    ) -> None:
        if not self._notifiers:
            return
        kind = str(application.application_kind)
        summary = {
            name: str(getattr(application, name, "")).strip()
            for name in _SUMMARY_FIELDS.get(kind, ())
        }
        event = ApplicationSubmittedEvent(
            application_id=application_id,
            application_kind=kind,
            email=application.email.strip().lower(),
            full_name=application.full_name.strip(),
            summary=summary,
        )
        attempt_id = get_correlation_id()
        for notifier in self._notifiers:
            job = NotificationJob(
                notifier=notifier.name, attempt_id=attempt_id, application_id=application_id
            )
            dispatch_notification(job, notifier.notify(event))

    def _report_progress(self, fsm: SubmissionStateMachine, percent: int) -> None:
        percent = max(0, min(100, int(percent)))
        last = fsm.progress or 0
        if percent <= last:
            return
        self._advance(
            fsm, SubmissionStatus(state=SubmissionState.UPLOADING, progress=percent), "upload_progress"
        )

    def _fail(
        self,
        fsm: SubmissionStateMachine,
        category: ErrorCategory,
        message: str,
        errors: Sequence[Any] = (),
        retry_after_seconds: int | None = None,
    ) -> SubmissionStatus:
        status = SubmissionStatus.failure(
            category, message, tuple(errors), retry_after_seconds=retry_after_seconds
        )
        self._advance(fsm, status, f"failed_{category}")
        return status

    def _advance(
        self, fsm: SubmissionStateMachine, status: SubmissionStatus, trigger: str
    ) -> None:
        result = fsm.transition(status.state, trigger, progress=status.progress)
        if not result.success:
            logger.error(
                "submission_transition_rejected",
                extra={
                    "attempt_id": fsm.attempt_id,
                    "from_state": str(fsm.current_state),
                    "to_state": str(status.state),
                    "reason": result.error_reason,
                },
            )
        self._publish(status)

    def _publish(self, status: SubmissionStatus) -> None:
        self._status = status
        self._history.append(status)
        for queue in self._subscribers:
            queue.put_nowait(status)

    def _finish(
        self,
        future: asyncio.Future[SubmissionStatus],
        status: SubmissionStatus,
        kind: str,
        started: float,
    ) -> None:
        if not future.done():
            future.set_result(status)
        self._inflight = None

        correlation_id = get_correlation_id()
        record_latency(
            "submission_orchestrator", "submit", (time.perf_counter() - started) * 1000, correlation_id
        )
        record_submission_outcome(
            kind,
            str(status.state),
            str(status.error_category) if status.error_category else None,
            self._persistence_attempts,
            correlation_id,
        )
        logger.info(
            "submission_finished",
            extra={
                "state": str(status.state),
                "error_category": str(status.error_category) if status.error_category else None,
                "application_id": status.application_id,
            },
        )


def _kind_of(payload: Any) -> str:
    if isinstance(payload, dict):
        raw = payload.get("applicationKind", payload.get("application_kind"))
        return str(raw) if raw else "unknown"
    return str(getattr(payload, "application_kind", "unknown"))
