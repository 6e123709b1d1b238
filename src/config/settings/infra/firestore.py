"""Settings do Firestore (store in-process e fila de email)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

APPLICATIONS_COLLECTION_DEFAULT = "applications"
RATE_LIMITS_COLLECTION_DEFAULT = "applicationRateLimits"


@dataclass(frozen=True)
class FirestoreSettings:
    """Projeto e collections do Firestore.

    Attributes:
        project_id: FIRESTORE_PROJECT_ID; vazio = herda o projeto GCP base.
        collection_applications: Documentos das aplicações (id = chave de
            idempotência).
        collection_rate_limits: Última submissão por hash de email.
    """

    project_id: str = ""
    collection_applications: str = APPLICATIONS_COLLECTION_DEFAULT
    collection_rate_limits: str = RATE_LIMITS_COLLECTION_DEFAULT

    def resolve_project_id(self, gcp_project: str) -> str:
        """Projeto efetivo: o próprio ou, na falta, o projeto GCP base."""
        return self.project_id or gcp_project

    def validate(self, gcp_project: str) -> list[str]:
        errors: list[str] = []
        if not self.resolve_project_id(gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")
        if self.collection_applications == self.collection_rate_limits:
            errors.append("collections de aplicações e rate limit devem ser distintas")
        return errors


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """FirestoreSettings lidas do ambiente (cacheadas)."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        collection_applications=os.getenv(
            "FIRESTORE_APPLICATIONS_COLLECTION", APPLICATIONS_COLLECTION_DEFAULT
        ),
        collection_rate_limits=os.getenv(
            "FIRESTORE_RATE_LIMITS_COLLECTION", RATE_LIMITS_COLLECTION_DEFAULT
        ),
    )
