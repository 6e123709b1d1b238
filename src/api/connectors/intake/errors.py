"""Classificação das respostas de erro dos colaboradores HTTP.

Formato de erro esperado: ``{"error": str, "validationErrors"?: [...],
"retryAfter"?: int, "allowedTypes"?: [...], "maxSize"?: int}``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from app.domain.submission import SERVER_SPAM_MESSAGE
from app.domain.validation import ValidationCode, ValidationError
from utils.errors import PermanentServerError, RateLimitedError, TransientServerError

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


def parse_json_body(response: httpx.Response) -> dict[str, Any]:
    """Corpo JSON da resposta (vazio quando ausente, inválido ou não-objeto)."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def retry_after_seconds(response: httpx.Response, body: dict[str, Any]) -> int | None:
    """Retry-after do corpo (``retryAfter``) ou do header ``Retry-After``."""
    for raw in (body.get("retryAfter"), response.headers.get("Retry-After")):
        if raw is None:
            continue
        try:
            return max(0, int(float(raw)))
        except (TypeError, ValueError):
            continue
    return None


def server_validation_errors(body: dict[str, Any]) -> list[ValidationError]:
    """Converte ``validationErrors`` do servidor em ``ValidationError``."""
    raw_errors = body.get("validationErrors") or body.get("errors") or []
    if not isinstance(raw_errors, list):
        return []
    errors: list[ValidationError] = []
    for item in raw_errors:
        if not isinstance(item, dict) or not item.get("field"):
            continue
        try:
            code = ValidationCode(str(item.get("code", "")))
        except ValueError:
            code = ValidationCode.INVALID_FORMAT
        errors.append(
            ValidationError(
                field=str(item["field"]),
                message=str(item.get("message") or "Invalid value"),
                code=code,
            )
        )
    return errors


def raise_for_intake_status(response: httpx.Response) -> None:
    """Lança a exceção da taxonomia para respostas não-2xx.

    Raises:
        RateLimitedError: 429.
        TransientServerError: 5xx.
        PermanentServerError: Demais 4xx (com erros de validação e flag de
            spam quando presentes).
    """
    status = response.status_code
    if status < 400:
        return

    body = parse_json_body(response)
    message = str(body.get("error") or body.get("message") or "")

    if status == 429:
        raise RateLimitedError(retry_after_seconds(response, body), message)
    if status >= 500:
        raise TransientServerError(message, status_code=status)

    raise PermanentServerError(
        status,
        message,
        server_validation_errors(body),
        spam=message == SERVER_SPAM_MESSAGE,
    )
