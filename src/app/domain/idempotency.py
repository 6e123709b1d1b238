"""Derivação da chave de idempotência de uma aplicação.

A mesma aplicação (mesma identidade normalizada) gera sempre a mesma chave,
de modo que retries e reenvios após falha transitória nunca criam um
segundo registro no colaborador de persistência.
"""

from __future__ import annotations

import hashlib
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.applications import FounderApplication, InvestorApplication

_SEPARATOR = "\x1f"


def _norm(value: str) -> str:
    return " ".join(unicodedata.normalize("NFKC", value).casefold().split())


def derive_idempotency_key(payload: FounderApplication | InvestorApplication) -> str:
    """Gera a chave de idempotência (SHA-256 hex).

    Campos de identidade:
    - todos: tipo, email (minúsculo), nome completo (casefold)
    - founder: nome da empresa e website
    - investidor: modo e nome da entidade

    Args:
        payload: Aplicação tipada.

    Returns:
        Hex digest de 64 caracteres.
    """
    parts = [
        str(payload.application_kind),
        payload.email.strip().lower(),
        _norm(payload.full_name),
    ]
    if payload.application_kind == "founder":
        parts.extend((_norm(payload.company_name), payload.website.strip().lower().rstrip("/")))
    else:
        parts.extend((payload.mode.strip().lower(), _norm(payload.entity_name)))

    return hashlib.sha256(_SEPARATOR.join(parts).encode("utf-8")).hexdigest()
