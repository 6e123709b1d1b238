"""Settings base: ambiente, identificação do serviço e projeto GCP."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_VALID_ENVIRONMENTS = frozenset({"development", "staging", "production"})
_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
}
_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class BaseSettings:
    """Configuração comum a todos os componentes.

    Attributes:
        environment: development | staging | production. Fora de
            development o bootstrap valida em modo estrito.
        service_name: Identificação do serviço (campo ``service`` dos logs).
        debug: Flag de depuração local.
        log_level: Nível do root logger.
        gcp_project: Projeto GCP padrão (Firestore, fila de email).
    """

    environment: Environment = "development"
    service_name: str = "arena-intake"
    debug: bool = False
    log_level: str = "INFO"
    gcp_project: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        """Lista de problemas de configuração (vazia = OK)."""
        errors: list[str] = []
        if self.environment not in _VALID_ENVIRONMENTS:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        return errors


def parse_environment(raw: str) -> Environment:
    """Normaliza ENVIRONMENT; valores desconhecidos caem em development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """BaseSettings lidas do ambiente (cacheadas)."""
    return BaseSettings(
        environment=parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "arena-intake"),
        debug=os.getenv("DEBUG", "").lower() in _TRUTHY,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        gcp_project=os.getenv("GCP_PROJECT", os.getenv("GOOGLE_CLOUD_PROJECT", "")),
    )
