"""Stores — implementações in-process do colaborador de persistência.

Módulos disponíveis:
    - firestore_application_store: aplicações no Firestore
    - memory_application_store: aplicações em memória (dev/testes)
    - server_checks: honeypot e revalidação do lado servidor
"""

from __future__ import annotations

from app.infra.stores.firestore_application_store import FirestoreApplicationStore
from app.infra.stores.memory_application_store import MemoryApplicationStore

__all__ = [
    "FirestoreApplicationStore",
    "MemoryApplicationStore",
]
