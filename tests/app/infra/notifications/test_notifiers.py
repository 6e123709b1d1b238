"""Testes dos notificadores pós-submissão."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import MagicMock

import httpx
import pytest

from app.domain import ApplicationSubmittedEvent
from app.infra.notifications import FirestoreMailQueueNotifier, WebhookNotifier
from app.infra.notifications.firestore_mail_queue import build_subject, build_text


def _event(kind: str = "founder") -> ApplicationSubmittedEvent:
    summary = (
        {"company_name": "Acme Robotics", "stage": "seed", "website": ""}
        if kind == "founder"
        else {"mode": "506c", "check_size": "250k-plus"}
    )
    return ApplicationSubmittedEvent(
        application_id="app-123",
        application_kind=kind,
        email="jane.doe@example.com",
        full_name="Jane Doe",
        summary=summary,
        submitted_at=datetime(2026, 1, 15, 12, 0, tzinfo=UTC),
    )


class TestMailQueueNotifier:
    """Job gravado na fila de email."""

    def test_subject_per_kind(self) -> None:
        assert build_subject(_event("founder")) == "[Arena] New founder application: Acme Robotics"
        assert build_subject(_event("investor")) == "[Arena] New investor application: Jane Doe"

    def test_text_skips_empty_summary_values(self) -> None:
        text = build_text(_event())
        assert "Company: Acme Robotics" in text
        assert "URL:" not in text
        assert text.endswith("Application ID: app-123")

    def test_job_shape(self) -> None:
        notifier = FirestoreMailQueueNotifier(MagicMock(), ["ops@example.com"], environment="staging")
        job = notifier.build_job(_event())

        assert job["to"] == ["ops@example.com"]
        assert job["status"] == "queued"
        assert job["attempts"] == 0
        assert job["messageIdHint"] == "apply-app-123"
        assert job["replyTo"] == "jane.doe@example.com"
        assert job["env"] == "staging"

    @pytest.mark.asyncio
    async def test_notify_adds_job_to_collection(self) -> None:
        client = MagicMock()
        notifier = FirestoreMailQueueNotifier(client, ["ops@example.com"])

        await notifier.notify(_event())

        client.collection.assert_called_once_with("mailQueue")
        job = client.collection.return_value.add.call_args.args[0]
        assert job["metadata"] == {"applicationId": "app-123", "applicationKind": "founder"}
        assert notifier.name == "mail_queue"


class TestWebhookNotifier:
    """POST do resumo."""

    @pytest.mark.asyncio
    async def test_posts_summary_without_applicant_email(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(204)

        notifier = WebhookNotifier("https://hooks.example.com/intake", transport=httpx.MockTransport(handler))
        await notifier.notify(_event("investor"))

        body = json.loads(captured[0].content)
        assert body["event"] == "application.submitted"
        assert body["applicationId"] == "app-123"
        assert body["summary"] == {"mode": "506c", "check_size": "250k-plus"}
        assert "jane.doe@example.com" not in captured[0].content.decode()

    @pytest.mark.asyncio
    async def test_http_error_is_raised(self) -> None:
        notifier = WebhookNotifier(
            "https://hooks.example.com/intake",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(httpx.HTTPStatusError):
            await notifier.notify(_event())

    def test_url_is_required(self) -> None:
        with pytest.raises(ValueError):
            WebhookNotifier("")
