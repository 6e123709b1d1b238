"""Classificador heurístico de spam (sem IO).

Roda antes de qualquer validação ou persistência. O honeypot é checado
ainda no dict bruto (``check_raw``), antes do parse: um bot que também
manda campos mal tipados recebe a mesma rejeição fixa, nunca os erros
de campo.

Os motivos acumulam (não exclusivos) e servem apenas para log interno; o
chamador recebe somente ``is_spam``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.domain.applications import FounderApplication, InvestorApplication
from app.services.content_patterns import (
    BBCODE_PATTERN,
    HTML_ENTITY_PATTERN,
    SCRIPT_MARKER_PATTERN,
    URL_IN_TEXT_PATTERN,
    contains_html_tag,
    has_blocked_url_scheme,
)
from utils.errors import SpamRejectedError

logger = logging.getLogger(__name__)

HONEYPOT_KEYS = ("websiteHoneypot", "website_honeypot")

MAX_LINKS_PER_FIELD = 3
REPETITION_MIN_WORDS = 10
REPETITION_MIN_UNIQUE_RATIO = 0.3

# Campos de texto livre inspecionados (URL, email e enums ficam de fora)
FOUNDER_FREE_TEXT_FIELDS: tuple[str, ...] = (
    "full_name",
    "role",
    "company_name",
    "one_line_description",
    "problem",
    "solution",
    "enterprise_engagement",
    "key_highlights",
    "capital_raised_amount",
    "signature",
)

INVESTOR_FREE_TEXT_FIELDS: tuple[str, ...] = (
    "full_name",
    "entity_name",
    "jurisdiction",
    "custodian_info",
    "referral_source",
    "signature",
)


@dataclass(frozen=True, slots=True)
class SpamCheckResult:
    """Resultado efêmero do spam check (nunca persistido)."""

    is_spam: bool
    reasons: tuple[str, ...] = field(default_factory=tuple)


class SpamDetector:
    """Detector de spam por honeypot e marcadores de markup/script."""

    def check_raw(self, raw: Mapping[str, Any]) -> SpamCheckResult:
        """Honeypot no payload bruto, com qualquer tipo de valor (ex: ``1``)."""
        if any(_is_filled(raw.get(key)) for key in HONEYPOT_KEYS):
            logger.info(
                "spam_detected",
                extra={
                    "application_kind": str(raw.get("applicationKind", raw.get("application_kind"))),
                    "reasons": ["honeypot_filled"],
                },
            )
            return SpamCheckResult(is_spam=True, reasons=("honeypot_filled",))
        return SpamCheckResult(is_spam=False)

    def ensure_not_spam(
        self, payload: FounderApplication | InvestorApplication | Mapping[str, Any]
    ) -> None:
        """Raises SpamRejectedError quando o payload (bruto ou tipado) é spam."""
        result = self.check_raw(payload) if isinstance(payload, Mapping) else self.check(payload)
        if result.is_spam:
            raise SpamRejectedError(result.reasons)

    def check(self, payload: FounderApplication | InvestorApplication) -> SpamCheckResult:
        """Classifica o payload.

        Args:
            payload: Aplicação tipada.

        Returns:
            SpamCheckResult com todos os motivos encontrados.
        """
        reasons: list[str] = []

        if payload.website_honeypot.strip():
            reasons.append("honeypot_filled")

        fields = (
            INVESTOR_FREE_TEXT_FIELDS
            if isinstance(payload, InvestorApplication)
            else FOUNDER_FREE_TEXT_FIELDS
        )
        for name in fields:
            value = getattr(payload, name, "")
            if isinstance(value, str) and value.strip():
                reasons.extend(_text_reasons(name, value))

        result = SpamCheckResult(is_spam=bool(reasons), reasons=tuple(reasons))
        if result.is_spam:
            logger.info(
                "spam_detected",
                extra={
                    "application_kind": str(payload.application_kind),
                    "reasons": list(result.reasons),
                },
            )
        return result


def _text_reasons(field_name: str, value: str) -> list[str]:
    reasons: list[str] = []

    if (
        contains_html_tag(value)
        or BBCODE_PATTERN.search(value)
        or HTML_ENTITY_PATTERN.search(value)
        or has_blocked_url_scheme(value)
        or SCRIPT_MARKER_PATTERN.search(value)
    ):
        reasons.append(f"markup_in_{field_name}")

    if len(URL_IN_TEXT_PATTERN.findall(value)) > MAX_LINKS_PER_FIELD:
        reasons.append(f"excessive_links_in_{field_name}")

    words = value.lower().split()
    if len(words) > REPETITION_MIN_WORDS:
        unique_ratio = len(set(words)) / len(words)
        if unique_ratio < REPETITION_MIN_UNIQUE_RATIO:
            reasons.append(f"repetitive_content_in_{field_name}")

    return reasons


def _is_filled(value: Any) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())
