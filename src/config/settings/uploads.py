"""Settings de upload de arquivos (tickets de uso único)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_MB = 1024 * 1024


@dataclass(frozen=True)
class UploadSettings:
    """Configurações do upload em duas fases.

    Attributes:
        ticket_ttl_seconds: Validade do ticket (padrão 10 minutos)
        pitch_deck_max_bytes: Limite para pitch deck (PDF/JPEG/PNG)
        verification_max_bytes: Limite para documento de verificação (PDF)
        ref_prefix: Prefixo das referências no storage
    """

    ticket_ttl_seconds: int = 600
    pitch_deck_max_bytes: int = 25 * _MB
    verification_max_bytes: int = 10 * _MB
    ref_prefix: str = "applications"

    def validate(self) -> list[str]:
        """Valida configurações de upload.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.ticket_ttl_seconds <= 0:
            errors.append("UPLOAD_TICKET_TTL_SECONDS deve ser > 0")

        if self.pitch_deck_max_bytes <= 0 or self.verification_max_bytes <= 0:
            errors.append("UPLOAD_*_MAX_BYTES deve ser > 0")

        if not self.ref_prefix or "/" in self.ref_prefix.strip("/"):
            errors.append("UPLOAD_REF_PREFIX deve ser um único segmento")

        return errors


def _load_uploads_from_env() -> UploadSettings:
    """Carrega UploadSettings de variáveis de ambiente."""
    return UploadSettings(
        ticket_ttl_seconds=int(os.getenv("UPLOAD_TICKET_TTL_SECONDS", "600")),
        pitch_deck_max_bytes=int(os.getenv("UPLOAD_PITCH_DECK_MAX_BYTES", str(25 * _MB))),
        verification_max_bytes=int(
            os.getenv("UPLOAD_VERIFICATION_MAX_BYTES", str(10 * _MB))
        ),
        ref_prefix=os.getenv("UPLOAD_REF_PREFIX", "applications").strip("/"),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """Retorna instância cacheada de UploadSettings."""
    return _load_uploads_from_env()
