"""Cliente Firestore compartilhado pelo store e pela fila de email."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Instancia o cliente na primeira chamada e reutiliza depois.

    Sem projeto configurado, o SDK resolve pelas credenciais do ambiente
    (ADC).
    """
    from google.cloud import firestore

    project_id = get_firestore_settings().resolve_project_id(get_base_settings().gcp_project)
    client = firestore.Client(project=project_id or None)
    logger.info("firestore_client_created", extra={"project": project_id or "adc"})
    return client
