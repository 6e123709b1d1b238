"""Checagens do lado servidor aplicadas pelos colaboradores in-process.

O cliente já filtra spam e valida, mas o colaborador de persistência não
confia no chamador: honeypot e validação são reaplicados antes de gravar.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domain.submission import SERVER_SPAM_MESSAGE
from utils.errors import PermanentServerError

if TYPE_CHECKING:
    from app.services.form_validator import FormValidator

logger = logging.getLogger(__name__)

HONEYPOT_FIELD = "websiteHoneypot"


def reject_if_honeypot(record: dict[str, Any]) -> None:
    """Raises PermanentServerError(400, spam) quando o honeypot veio preenchido."""
    if str(record.get(HONEYPOT_FIELD) or "").strip():
        logger.info("server_spam_rejected", extra={"application_kind": record.get("applicationKind")})
        raise PermanentServerError(400, SERVER_SPAM_MESSAGE, spam=True)


def revalidate(record: dict[str, Any], validator: FormValidator) -> None:
    """Reaplica a validação do formulário sobre o registro recebido."""
    result = validator.validate(record)
    if not result.is_valid:
        logger.info(
            "server_validation_failed",
            extra={
                "application_kind": record.get("applicationKind"),
                "error_count": len(result.errors),
            },
        )
        raise PermanentServerError(400, "Validation failed.", result.errors)
