"""Testes para config/settings.

Valida valores padrão, carga de env e regras de validação.
"""

from __future__ import annotations

import pytest

from config.settings import (
    BaseSettings,
    FirestoreSettings,
    IntakeSettings,
    NotificationSettings,
    UploadSettings,
    get_intake_settings,
    get_notification_settings,
    get_upload_settings,
)
from config.settings.base.core import parse_environment


class TestBaseSettings:
    """Testes para BaseSettings."""

    def test_defaults_are_valid(self) -> None:
        settings = BaseSettings()
        assert settings.is_development
        assert settings.validate() == []

    def test_immutable(self) -> None:
        settings = BaseSettings()
        with pytest.raises(AttributeError):
            settings.environment = "production"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), (" Stage ", "staging"), ("qa", "development")],
    )
    def test_environment_aliases(self, raw: str, expected: str) -> None:
        assert parse_environment(raw) == expected

    def test_invalid_log_level(self) -> None:
        assert BaseSettings(log_level="LOUD").validate() == ["LOG_LEVEL inválido: LOUD"]


class TestIntakeSettings:
    """Testes para IntakeSettings."""

    def test_defaults(self) -> None:
        settings = IntakeSettings()
        assert settings.store_backend == "memory"
        assert settings.max_attempts == 3
        assert settings.min_entity_check_size == "50k-250k"
        assert settings.validate(BaseSettings()) == []

    def test_memory_backend_forbidden_in_production(self) -> None:
        errors = IntakeSettings().validate(BaseSettings(environment="production"))
        assert any("memory" in error for error in errors)

    def test_http_backend_requires_url(self) -> None:
        errors = IntakeSettings(store_backend="http").validate(BaseSettings())
        assert errors == ["INTAKE_STORE_BACKEND=http requer INTAKE_APPLICATIONS_URL"]

    def test_firestore_backend_requires_project(self) -> None:
        settings = IntakeSettings(store_backend="firestore")
        assert settings.validate(BaseSettings()) != []
        assert settings.validate(BaseSettings(gcp_project="arena-prod")) == []

    def test_inconsistent_backoff(self) -> None:
        settings = IntakeSettings(backoff_base_seconds=10.0, backoff_max_seconds=1.0, backoff_jitter=2.0)
        assert len(settings.validate(BaseSettings())) == 2

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "HTTP")
        monkeypatch.setenv("INTAKE_APPLICATIONS_URL", "https://api.example.com/applications")
        monkeypatch.setenv("INTAKE_MAX_ATTEMPTS", "5")
        get_intake_settings.cache_clear()
        try:
            settings = get_intake_settings()
        finally:
            get_intake_settings.cache_clear()

        assert settings.store_backend == "http"
        assert settings.max_attempts == 5

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_STORE_BACKEND", "redis")
        get_intake_settings.cache_clear()
        try:
            assert get_intake_settings().store_backend == "memory"
        finally:
            get_intake_settings.cache_clear()


class TestUploadSettings:
    """Testes para UploadSettings."""

    def test_defaults(self) -> None:
        settings = UploadSettings()
        assert settings.ticket_ttl_seconds == 600
        assert settings.pitch_deck_max_bytes == 25 * 1024 * 1024
        assert settings.verification_max_bytes == 10 * 1024 * 1024
        assert settings.validate() == []

    def test_invalid_values(self) -> None:
        settings = UploadSettings(ticket_ttl_seconds=0, ref_prefix="a/b")
        assert len(settings.validate()) == 2

    def test_prefix_is_trimmed_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_REF_PREFIX", "/intake/")
        get_upload_settings.cache_clear()
        try:
            assert get_upload_settings().ref_prefix == "intake"
        finally:
            get_upload_settings.cache_clear()


class TestNotificationSettings:
    """Testes para NotificationSettings."""

    def test_backends_need_targets(self) -> None:
        settings = NotificationSettings(backends=("mail_queue", "webhook"))
        assert len(settings.validate()) == 2

    def test_unknown_backend(self) -> None:
        assert NotificationSettings(backends=("sms",)).validate() != []

    def test_csv_parsing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INTAKE_NOTIFIER_BACKENDS", "Mail_Queue, webhook")
        monkeypatch.setenv("INTAKE_OPS_EMAILS", "a@example.com, ,b@example.com")
        get_notification_settings.cache_clear()
        try:
            settings = get_notification_settings()
        finally:
            get_notification_settings.cache_clear()

        assert settings.backends == ("mail_queue", "webhook")
        assert settings.ops_emails == ("a@example.com", "b@example.com")


class TestFirestoreSettings:
    """Testes para FirestoreSettings."""

    def test_requires_some_project(self) -> None:
        assert FirestoreSettings().validate("") != []
        assert FirestoreSettings().validate("arena-prod") == []
        assert FirestoreSettings(project_id="arena").validate("") == []

    def test_project_falls_back_to_gcp_project(self) -> None:
        assert FirestoreSettings().resolve_project_id("arena-prod") == "arena-prod"
        assert FirestoreSettings(project_id="arena").resolve_project_id("arena-prod") == "arena"

    def test_collections_must_differ(self) -> None:
        settings = FirestoreSettings(project_id="arena", collection_rate_limits="applications")
        assert settings.validate("") == ["collections de aplicações e rate limit devem ser distintas"]
