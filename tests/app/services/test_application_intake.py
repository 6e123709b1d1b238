"""Testes da fachada ApplicationIntakeService (wiring via bootstrap)."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from app.bootstrap import create_intake_service
from app.domain import AttachedFile, ValidationCode
from fsm import SubmissionState
from tests.fakes.fake_application_store import FakeApplicationStore
from tests.fakes.fake_upload_client import FakeUploadClient


def _service(store: FakeApplicationStore | None = None, upload_client: FakeUploadClient | None = None):
    return create_intake_service(
        store=store or FakeApplicationStore(),
        upload_client=upload_client or FakeUploadClient(),
        notifiers=[],
    )


class TestValidateField:
    """validate_field."""

    def test_with_dict_context(self) -> None:
        errors = _service().validate_field(
            "state", "XX", {"application_kind": "investor", "country": "US"}
        )
        assert [error.code for error in errors] == [ValidationCode.INVALID_STATE]

    def test_without_context(self) -> None:
        assert _service().validate_field("email", "jane@example.com") == []


class TestValidateFormAndCompletion:
    """validate_form e form_completion."""

    def test_validate_form(self, founder_payload: dict[str, Any]) -> None:
        service = _service()
        assert service.validate_form(founder_payload).is_valid
        assert not service.validate_form({**founder_payload, "stage": "growth"}).is_valid

    def test_form_completion(self, founder_payload: dict[str, Any]) -> None:
        assert _service().form_completion(founder_payload) == 100


class TestSubmitAndUpload:
    """submit, watch e upload_file."""

    @pytest.mark.asyncio
    async def test_submit_and_watch(self, investor_payload: dict[str, Any]) -> None:
        store = FakeApplicationStore()
        service = _service(store)

        stream = service.watch()
        collector = asyncio.create_task(_collect(stream))
        status = await service.submit(investor_payload)
        seen = await collector

        assert status.state == SubmissionState.SUCCESS
        assert [s.state for s in seen] == [
            SubmissionState.VALIDATING,
            SubmissionState.SUBMITTING,
            SubmissionState.SUCCESS,
        ]
        assert service.orchestrator.status is status
        assert store.call_count == 1

    @pytest.mark.asyncio
    async def test_upload_file(self) -> None:
        client = FakeUploadClient()
        result = await _service(upload_client=client).upload_file(
            AttachedFile(file_name="letter.pdf", content_type="application/pdf", data=b"%PDF-1.7"),
            "verification",
        )
        assert result.success
        assert result.file_ref and "/verification/" in result.file_ref
        assert client.ticket_requests[0].purpose == "verification"


async def _collect(stream) -> list:
    return [status async for status in stream]
