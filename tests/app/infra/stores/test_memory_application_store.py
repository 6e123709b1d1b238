"""Testes do MemoryApplicationStore."""

from __future__ import annotations

from typing import Any

import pytest

from app.domain import parse_application_payload
from app.infra.stores import MemoryApplicationStore
from utils.errors import PermanentServerError, RateLimitedError


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _record(raw: dict[str, Any]) -> dict[str, Any]:
    return parse_application_payload(raw).to_record()


class TestMemoryApplicationStore:
    """Semântica do colaborador in-process."""

    @pytest.mark.asyncio
    async def test_create_and_idempotent_retry(self, founder_payload: dict[str, Any]) -> None:
        store = MemoryApplicationStore()
        record = _record(founder_payload)

        first = await store.create_application(record, "key-1")
        second = await store.create_application(record, "key-1")

        assert first == second
        assert first.startswith("app-")
        assert list(store.records) == [first]
        assert store.records[first]["status"] == "new"

    @pytest.mark.asyncio
    async def test_honeypot_is_rejected_as_spam(self, founder_payload: dict[str, Any]) -> None:
        store = MemoryApplicationStore()
        record = {**_record(founder_payload), "websiteHoneypot": "filled"}

        with pytest.raises(PermanentServerError) as exc_info:
            await store.create_application(record, "key-1")

        assert exc_info.value.spam is True
        assert exc_info.value.message == "Spam detected."
        assert store.records == {}

    @pytest.mark.asyncio
    async def test_invalid_record_is_rejected_with_field_errors(
        self, investor_payload: dict[str, Any]
    ) -> None:
        store = MemoryApplicationStore()
        record = {**_record(investor_payload), "state": ""}

        with pytest.raises(PermanentServerError) as exc_info:
            await store.create_application(record, "key-1")

        assert exc_info.value.status_code == 400
        assert [error.field for error in exc_info.value.validation_errors] == ["state"]

    @pytest.mark.asyncio
    async def test_rate_limit_per_email(self, investor_payload: dict[str, Any]) -> None:
        clock = _Clock()
        store = MemoryApplicationStore(rate_limit_seconds=30, clock=clock)
        await store.create_application(_record(investor_payload), "key-1")

        clock.now += 10
        other = _record({**investor_payload, "fullName": "Johnny Smith"})
        with pytest.raises(RateLimitedError) as exc_info:
            await store.create_application(other, "key-2")
        assert exc_info.value.retry_after_seconds == 21

        clock.now += 25
        assert await store.create_application(other, "key-2")

    @pytest.mark.asyncio
    async def test_rate_limit_can_be_disabled(self, investor_payload: dict[str, Any]) -> None:
        store = MemoryApplicationStore(rate_limit_seconds=0)
        await store.create_application(_record(investor_payload), "key-1")
        await store.create_application(_record(investor_payload), "key-2")
        assert len(store.records) == 2
