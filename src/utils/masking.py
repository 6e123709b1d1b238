"""Mascaramento de PII para logs.

Emails e nomes de aplicantes nunca vão crus para os logs; o mascaramento
é determinístico (mesma entrada = mesma saída).
"""

from __future__ import annotations

import hashlib
import re
from re import Pattern
from typing import Final

_EMAIL_PATTERN: Final[Pattern[str]] = re.compile(
    r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b"
)


def mask_email(email: str) -> str:
    """Mascara o local part preservando o domínio.

    Exemplos:
        >>> mask_email("Jane.Doe@example.com")
        'j***@example.com'
        >>> mask_email("")
        ''
    """
    if not email or "@" not in email:
        return "***" if email else email
    local, _, domain = email.strip().rpartition("@")
    head = local[:1].lower() if local else ""
    return f"{head}***@{domain.lower()}"


def mask_emails_in_text(text: str) -> str:
    """Substitui todo email encontrado em texto livre pela forma mascarada."""
    if not text:
        return text
    return _EMAIL_PATTERN.sub(lambda m: f"{m.group(1).lower()}***@{m.group(2).lower()}", text)


def email_fingerprint(email: str) -> str:
    """Hash curto e estável do email normalizado (chave de log/rate limit)."""
    normalized = email.strip().lower()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:16]
