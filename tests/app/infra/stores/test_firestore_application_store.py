"""Testes do FirestoreApplicationStore (cliente Firestore mockado)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as google_exceptions

from app.domain import parse_application_payload
from app.infra.stores import FirestoreApplicationStore
from utils.errors import PermanentServerError, RateLimitedError, TransientServerError

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def _snapshot(exists: bool, data: dict[str, Any] | None = None) -> MagicMock:
    snapshot = MagicMock()
    snapshot.exists = exists
    snapshot.to_dict.return_value = data
    return snapshot


def _client(
    *,
    app_exists: bool = False,
    last_submitted: datetime | None = None,
) -> tuple[MagicMock, MagicMock, MagicMock]:
    """Cliente com uma collection de aplicações e uma de rate limit."""
    app_doc = MagicMock()
    app_doc.get.return_value = _snapshot(app_exists)
    limit_doc = MagicMock()
    limit_doc.get.return_value = _snapshot(
        last_submitted is not None,
        {"lastSubmittedAt": last_submitted} if last_submitted else None,
    )

    apps = MagicMock()
    apps.document.return_value = app_doc
    limits = MagicMock()
    limits.document.return_value = limit_doc

    client = MagicMock()
    client.collection.side_effect = lambda name: apps if name == "applications" else limits
    return client, app_doc, limit_doc


def _store(client: MagicMock) -> FirestoreApplicationStore:
    return FirestoreApplicationStore(client, clock=lambda: NOW)


class TestFirestoreApplicationStore:
    """Criação idempotente e mapeamento de erros."""

    @pytest.mark.asyncio
    async def test_creates_document_keyed_by_idempotency_key(
        self, founder_payload: dict[str, Any]
    ) -> None:
        client, app_doc, limit_doc = _client()
        record = parse_application_payload(founder_payload).to_record()

        application_id = await _store(client).create_application(record, "key-abc")

        assert application_id == "key-abc"
        data = app_doc.create.call_args.args[0]
        assert data["status"] == "new"
        assert data["createdAt"] == NOW
        assert data["companyName"] == "Acme Robotics"
        assert len(data["emailHash"]) == 16
        limit_doc.set.assert_called_once()
        assert limit_doc.set.call_args.args[0]["expiresAt"] == NOW + timedelta(seconds=30)

    @pytest.mark.asyncio
    async def test_existing_document_is_returned(self, founder_payload: dict[str, Any]) -> None:
        client, app_doc, _ = _client(app_exists=True)
        record = parse_application_payload(founder_payload).to_record()

        assert await _store(client).create_application(record, "key-abc") == "key-abc"
        app_doc.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_conflict_is_treated_as_existing(
        self, founder_payload: dict[str, Any]
    ) -> None:
        client, app_doc, limit_doc = _client()
        app_doc.create.side_effect = google_exceptions.AlreadyExists("exists")
        record = parse_application_payload(founder_payload).to_record()

        assert await _store(client).create_application(record, "key-abc") == "key-abc"
        limit_doc.set.assert_not_called()

    @pytest.mark.asyncio
    async def test_rate_limited(self, founder_payload: dict[str, Any]) -> None:
        client, app_doc, _ = _client(last_submitted=NOW - timedelta(seconds=5))
        record = parse_application_payload(founder_payload).to_record()

        with pytest.raises(RateLimitedError) as exc_info:
            await _store(client).create_application(record, "key-abc")

        assert exc_info.value.retry_after_seconds == 26
        app_doc.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unavailable_is_transient(self, founder_payload: dict[str, Any]) -> None:
        client, app_doc, _ = _client()
        app_doc.get.side_effect = google_exceptions.ServiceUnavailable("down")
        record = parse_application_payload(founder_payload).to_record()

        with pytest.raises(TransientServerError):
            await _store(client).create_application(record, "key-abc")

    @pytest.mark.asyncio
    async def test_permission_denied_is_permanent(self, founder_payload: dict[str, Any]) -> None:
        client, app_doc, _ = _client()
        app_doc.get.side_effect = google_exceptions.PermissionDenied("no")
        record = parse_application_payload(founder_payload).to_record()

        with pytest.raises(PermanentServerError) as exc_info:
            await _store(client).create_application(record, "key-abc")
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_honeypot_never_touches_firestore(self, founder_payload: dict[str, Any]) -> None:
        client, _, _ = _client()
        record = parse_application_payload({**founder_payload, "websiteHoneypot": "x"}).to_record()

        with pytest.raises(PermanentServerError) as exc_info:
            await _store(client).create_application(record, "key-abc")

        assert exc_info.value.spam is True
        client.collection.assert_not_called()
