"""Padrões de conteúdo malicioso compartilhados pelos validadores.

Usado pelo pre-check de SUSPICIOUS_CONTENT do FieldValidator e pelas
heurísticas do SpamDetector. Patterns compilados uma vez.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Final

SUSPICIOUS_PATTERNS: Final[tuple[Pattern[str], ...]] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"<\s*/?\s*script\b",
        r"javascript\s*:",
        r"vbscript\s*:",
        r"data\s*:\s*text/html",
        r"\bon[a-z]+\s*=",
        r"<\s*(iframe|object|embed|form)\b",
        r"\bexpression\s*\(",
        r"\beval\s*\(",
        # protocol-relative ("//host") no início do valor
        r"^\s*//[^/\s]",
        # operadores NoSQL
        r"\$(where|ne|gt|gte|lt|lte|regex|or|and|nin)\b",
        # SQL injection
        r"\bunion\s+(all\s+)?select\b",
        r"\b(drop|truncate)\s+table\b",
        r"'\s*or\s+'?\d+'?\s*=\s*'?\d+",
        r";\s*--",
    )
)

HTML_TAG_PATTERN: Final[Pattern[str]] = re.compile(r"<\s*/?\s*[a-z!][^>]*>", re.IGNORECASE)

# Esquemas sempre rejeitados em campos de URL
BLOCKED_URL_SCHEME_PATTERN: Final[Pattern[str]] = re.compile(
    r"^\s*(javascript|vbscript|data|file)\s*:", re.IGNORECASE
)

BBCODE_PATTERN: Final[Pattern[str]] = re.compile(r"\[/?(url|link|img)\b[^\]]*\]", re.IGNORECASE)

HTML_ENTITY_PATTERN: Final[Pattern[str]] = re.compile(r"&#x?[0-9a-f]+;|&lt;\s*/?\s*[a-z]", re.IGNORECASE)

URL_IN_TEXT_PATTERN: Final[Pattern[str]] = re.compile(r"\b(?:https?://|www\.)\S+", re.IGNORECASE)

SCRIPT_MARKER_PATTERN: Final[Pattern[str]] = re.compile(
    r"<\s*/?\s*script\b|javascript\s*:|vbscript\s*:|data\s*:\s*text/html", re.IGNORECASE
)


def contains_suspicious_content(value: str) -> bool:
    """Indica se o texto casa com algum padrão de ataque conhecido."""
    if not value:
        return False
    return any(pattern.search(value) for pattern in SUSPICIOUS_PATTERNS)


def contains_html_tag(value: str) -> bool:
    return bool(value) and HTML_TAG_PATTERN.search(value) is not None


def has_blocked_url_scheme(value: str) -> bool:
    return bool(value) and BLOCKED_URL_SCHEME_PATTERN.match(value) is not None
