"""Settings do motor de submissão.

Backend de persistência, endpoints dos colaboradores HTTP, política de
retry e regras de negócio configuráveis.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from app.domain.enums import CheckSize, enum_values

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

StoreBackend = Literal["memory", "http", "firestore"]

_VALID_BACKENDS = ("memory", "http", "firestore")


@dataclass(frozen=True)
class IntakeSettings:
    """Configurações do intake de aplicações.

    Attributes:
        store_backend: Colaborador de persistência (memory|http|firestore)
        applications_url: Endpoint POST de criação (backend http)
        upload_ticket_url: Endpoint POST de emissão de ticket de upload
        http_timeout_seconds: Timeout das chamadas HTTP
        max_attempts: Tentativas de persistência (inclui a primeira)
        backoff_base_seconds: Delay base do backoff exponencial
        backoff_max_seconds: Teto do delay
        backoff_jitter: Fração de jitter aplicada ao delay (0..1)
        min_entity_check_size: Menor faixa de ticket aceita para
            institutional/family-office
        rate_limit_seconds: Janela mínima entre submissões do mesmo email
            (colaborador in-process)
    """

    store_backend: StoreBackend = "memory"
    applications_url: str = ""
    upload_ticket_url: str = ""
    http_timeout_seconds: float = 15.0

    max_attempts: int = 3
    backoff_base_seconds: float = 1.0
    backoff_max_seconds: float = 8.0
    backoff_jitter: float = 0.2

    min_entity_check_size: str = CheckSize.MEDIUM.value
    rate_limit_seconds: int = 30

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações do intake.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.store_backend not in _VALID_BACKENDS:
            errors.append(f"INTAKE_STORE_BACKEND inválido: {self.store_backend}")

        if self.store_backend == "memory" and base.is_production:
            errors.append("INTAKE_STORE_BACKEND=memory proibido em production")

        if self.store_backend == "http" and not self.applications_url:
            errors.append("INTAKE_STORE_BACKEND=http requer INTAKE_APPLICATIONS_URL")

        if self.store_backend == "firestore" and not base.gcp_project:
            errors.append("INTAKE_STORE_BACKEND=firestore requer GCP_PROJECT configurado")

        if self.max_attempts < 1:
            errors.append("INTAKE_MAX_ATTEMPTS deve ser >= 1")

        if self.backoff_base_seconds < 0 or self.backoff_max_seconds < self.backoff_base_seconds:
            errors.append("INTAKE_BACKOFF_* inconsistente (0 <= base <= max)")

        if not 0.0 <= self.backoff_jitter <= 1.0:
            errors.append("INTAKE_BACKOFF_JITTER deve estar entre 0 e 1")

        if self.min_entity_check_size not in enum_values(CheckSize):
            errors.append(
                f"INTAKE_MIN_ENTITY_CHECK_SIZE inválido: {self.min_entity_check_size}"
            )

        if self.http_timeout_seconds <= 0:
            errors.append("INTAKE_HTTP_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_intake_from_env() -> IntakeSettings:
    """Carrega IntakeSettings de variáveis de ambiente."""
    backend_str = os.getenv("INTAKE_STORE_BACKEND", "memory").lower()
    backend: StoreBackend = backend_str if backend_str in _VALID_BACKENDS else "memory"
    return IntakeSettings(
        store_backend=backend,
        applications_url=os.getenv("INTAKE_APPLICATIONS_URL", ""),
        upload_ticket_url=os.getenv("INTAKE_UPLOAD_TICKET_URL", ""),
        http_timeout_seconds=float(os.getenv("INTAKE_HTTP_TIMEOUT_SECONDS", "15")),
        max_attempts=int(os.getenv("INTAKE_MAX_ATTEMPTS", "3")),
        backoff_base_seconds=float(os.getenv("INTAKE_BACKOFF_BASE_SECONDS", "1.0")),
        backoff_max_seconds=float(os.getenv("INTAKE_BACKOFF_MAX_SECONDS", "8.0")),
        backoff_jitter=float(os.getenv("INTAKE_BACKOFF_JITTER", "0.2")),
        min_entity_check_size=os.getenv(
            "INTAKE_MIN_ENTITY_CHECK_SIZE", CheckSize.MEDIUM.value
        ).lower(),
        rate_limit_seconds=int(os.getenv("INTAKE_RATE_LIMIT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_intake_settings() -> IntakeSettings:
    """Retorna instância cacheada de IntakeSettings."""
    return _load_intake_from_env()
