"""Testes do composition root (settings → implementações)."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

import app.bootstrap.dependencies as dependencies
from api.connectors.intake import HttpApplicationStore
from app.bootstrap import validate_runtime_settings
from app.infra.notifications import FirestoreMailQueueNotifier, WebhookNotifier
from app.infra.stores import FirestoreApplicationStore, MemoryApplicationStore
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_intake_settings,
    get_notification_settings,
    get_upload_settings,
)

_GETTERS = (
    get_base_settings,
    get_firestore_settings,
    get_intake_settings,
    get_notification_settings,
    get_upload_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    for getter in _GETTERS:
        getter.cache_clear()
    yield
    for getter in _GETTERS:
        getter.cache_clear()


class TestCreateApplicationStore:
    """Escolha do backend de persistência."""

    def test_memory_is_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INTAKE_STORE_BACKEND", raising=False)
        assert isinstance(dependencies.create_application_store(), MemoryApplicationStore)

    def test_http_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "http")
        monkeypatch.setenv("INTAKE_APPLICATIONS_URL", "https://api.example.com/applications")
        assert isinstance(dependencies.create_application_store(), HttpApplicationStore)

    def test_firestore_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "firestore")
        monkeypatch.setattr(dependencies, "create_firestore_client", MagicMock())
        assert isinstance(dependencies.create_application_store(), FirestoreApplicationStore)

    def test_memory_outside_development_logs_warning(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.delenv("INTAKE_STORE_BACKEND", raising=False)
        with caplog.at_level(logging.WARNING, logger="app.bootstrap.dependencies"):
            dependencies.create_application_store()
        assert any(r.getMessage() == "memory_store_in_non_dev" for r in caplog.records)


class TestCreateNotifiers:
    """Notificadores ativos."""

    def test_none_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INTAKE_NOTIFIER_BACKENDS", raising=False)
        assert dependencies.create_notifiers() == []

    def test_both_backends(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_NOTIFIER_BACKENDS", "mail_queue,webhook")
        monkeypatch.setenv("INTAKE_OPS_EMAILS", "ops@example.com")
        monkeypatch.setenv("INTAKE_OPS_WEBHOOK_URL", "https://hooks.example.com/x")
        monkeypatch.setattr(dependencies, "create_firestore_client", MagicMock())

        notifiers = dependencies.create_notifiers()

        assert [type(n) for n in notifiers] == [FirestoreMailQueueNotifier, WebhookNotifier]


class TestValidateRuntimeSettings:
    """Validação no startup."""

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "http")
        monkeypatch.delenv("INTAKE_APPLICATIONS_URL", raising=False)
        validate_runtime_settings()

    def test_production_fails_fast(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.delenv("INTAKE_STORE_BACKEND", raising=False)
        with pytest.raises(RuntimeError, match="memory"):
            validate_runtime_settings()

    def test_mail_queue_requires_firestore_project(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "http")
        monkeypatch.setenv("INTAKE_APPLICATIONS_URL", "https://api.example.com/applications")
        monkeypatch.setenv("INTAKE_NOTIFIER_BACKENDS", "mail_queue")
        monkeypatch.setenv("INTAKE_OPS_EMAILS", "ops@example.com")
        for name in ("FIRESTORE_PROJECT_ID", "GCP_PROJECT", "GOOGLE_CLOUD_PROJECT"):
            monkeypatch.delenv(name, raising=False)

        with pytest.raises(RuntimeError, match="firestore"):
            validate_runtime_settings()
