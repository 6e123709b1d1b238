"""Validação determinística de campo isolado (sem IO).

Regras por classe de campo:
- Nome: 2..100 caracteres, letras (incl. latim estendido), espaço, hífen,
  apóstrofo e ponto; sem 5+ caracteres repetidos; sem tags HTML
- Email: local@domain, <=254, local <=64, domínio <=253, sem pontos
  consecutivos ou nas bordas do local part
- URL: apenas http/https; javascript:/vbscript:/data:/file: sempre
  rejeitados como INVALID_FORMAT
- Texto limitado, enums, país/estado, consentimento, referência de arquivo

Antes da regra específica roda o pre-check de conteúdo suspeito.
Cada chamada retorna no máximo um erro por campo (primeira regra violada).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from app.domain.validation import ValidationCode, ValidationError
from app.services.content_patterns import (
    contains_html_tag,
    contains_suspicious_content,
    has_blocked_url_scheme,
)
from app.services.field_rules import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    FieldKind,
    FieldRule,
    find_rule,
)
from config.reference import IntakeReferenceData, load_reference_data

if TYPE_CHECKING:
    from app.domain.applications import ValidationContext

logger = logging.getLogger(__name__)

EMAIL_MAX_LENGTH = 254
EMAIL_LOCAL_MAX_LENGTH = 64
EMAIL_DOMAIN_MAX_LENGTH = 253
URL_MAX_LENGTH = 2048
HOSTNAME_MAX_LENGTH = 253
FILE_REF_MAX_LENGTH = 512

_NAME_ALLOWED = re.compile(r"^[A-Za-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u00FF\u0100-\u024F\u1E00-\u1EFF\s\-'.]+$")
_REPEATED_CHARS = re.compile(r"(.)\1{4,}")
_EMAIL_LOCAL = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+$")
_EMAIL_DOMAIN = re.compile(
    r"^(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)
_HOSTNAME = re.compile(r"^[\w.\-]+$")
_PHONE = re.compile(r"^\+?[0-9\s().\-]{7,20}$")
_FILE_REF = re.compile(r"^[\w.\-/]+$")
_TRUTHY = frozenset({"true", "1", "yes", "on"})


def normalize_email(email: str) -> str:
    """Forma canônica do email para armazenamento e comparação."""
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return _email_problem(email.strip()) is None


def is_valid_url(url: str) -> bool:
    return _url_problem(url.strip()) is None


class FieldValidator:
    """Validador de campo isolado, stateless.

    Args:
        reference: Dados de referência (países/estados). Carregados do YAML
            empacotado quando omitidos.
    """

    def __init__(self, reference: IntakeReferenceData | None = None) -> None:
        self._reference = reference

    @property
    def reference(self) -> IntakeReferenceData:
        if self._reference is None:
            self._reference = load_reference_data()
        return self._reference

    def validate(
        self,
        field: str,
        raw_value: Any,
        context: ValidationContext | None = None,
    ) -> list[ValidationError]:
        """Valida um campo.

        Args:
            field: Nome do campo (snake_case).
            raw_value: Valor bruto informado.
            context: Tipo do formulário, modo e país (para estado).

        Returns:
            Lista com no máximo um erro (vazia = válido). Campos sem regra
            conhecida são aceitos.
        """
        kind = context.application_kind if context else None
        rule = find_rule(field, kind)
        if rule is None:
            logger.debug("field_rule_not_found", extra={"field": field})
            return []

        error = self._check(field, rule, raw_value, context)
        return [error] if error is not None else []

    def _check(
        self,
        field: str,
        rule: FieldRule,
        raw_value: Any,
        context: ValidationContext | None,
    ) -> ValidationError | None:
        if rule.kind is FieldKind.CONSENT:
            if _is_truthy(raw_value):
                return None
            if rule.required:
                return _error(field, rule.missing_message(), ValidationCode.REQUIRED_FIELD)
            return None

        if rule.kind is FieldKind.MULTI_ENUM:
            return self._check_multi_enum(field, rule, raw_value)

        value = _as_text(raw_value)
        if value is None:
            return _error(field, f"{rule.label} has an invalid value", ValidationCode.INVALID_FORMAT)
        if not value:
            if rule.required:
                return _error(field, rule.missing_message(), ValidationCode.REQUIRED_FIELD)
            return None

        if rule.kind is FieldKind.URL and has_blocked_url_scheme(value):
            return _error(
                field, f"{rule.label} must start with http:// or https://",
                ValidationCode.INVALID_FORMAT,
            )

        if contains_suspicious_content(value):
            return _error(
                field, f"{rule.label} contains invalid characters or patterns",
                ValidationCode.SUSPICIOUS_CONTENT,
            )

        checker = _CHECKERS[rule.kind]
        return checker(self, field, rule, value, context)

    def _check_multi_enum(
        self, field: str, rule: FieldRule, raw_value: Any
    ) -> ValidationError | None:
        if raw_value is None or raw_value == "":
            items: list[Any] = []
        elif isinstance(raw_value, str):
            items = [raw_value]
        elif isinstance(raw_value, Iterable):
            items = list(raw_value)
        else:
            return _error(field, f"{rule.label} has an invalid value", ValidationCode.INVALID_FORMAT)

        cleaned = [item.strip().lower() for item in items if isinstance(item, str) and item.strip()]
        if len(cleaned) != len(items):
            return _error(field, f"{rule.label} has an invalid value", ValidationCode.INVALID_FORMAT)
        if not cleaned:
            if rule.required:
                return _error(field, rule.missing_message(), ValidationCode.REQUIRED_FIELD)
            return None
        unknown = [item for item in cleaned if item not in rule.choices]
        if unknown:
            return _error(
                field, f"{rule.label} contains an unsupported option",
                ValidationCode.INVALID_FORMAT,
            )
        return None

    # ── checkers por classe de campo ─────────────────────────────────────

    def _check_name(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        if contains_html_tag(value):
            return _error(field, f"{rule.label} contains invalid characters", ValidationCode.INVALID_FORMAT)
        if len(value) < NAME_MIN_LENGTH:
            return _error(
                field, f"{rule.label} must be at least {NAME_MIN_LENGTH} characters",
                ValidationCode.INVALID_FORMAT,
            )
        if len(value) > NAME_MAX_LENGTH:
            return _error(
                field, f"{rule.label} must be {NAME_MAX_LENGTH} characters or less",
                ValidationCode.MAX_LENGTH,
            )
        if not _NAME_ALLOWED.match(value):
            return _error(
                field, f"{rule.label} can only contain letters, spaces, hyphens, apostrophes and periods",
                ValidationCode.INVALID_FORMAT,
            )
        if _REPEATED_CHARS.search(value):
            return _error(field, f"{rule.label} contains repeated characters", ValidationCode.INVALID_FORMAT)
        return None

    def _check_signature(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        if contains_html_tag(value):
            return _error(field, f"{rule.label} contains invalid characters", ValidationCode.INVALID_FORMAT)
        if len(value) < NAME_MIN_LENGTH:
            return _error(
                field, "Please type your full name as your signature",
                ValidationCode.INVALID_FORMAT,
            )
        return _check_max_length(field, rule, value)

    def _check_email(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        problem = _email_problem(value)
        if problem is None:
            return None
        code, message = problem
        return _error(field, message or f"Please enter a valid {rule.label.lower()}", code)

    def _check_url(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        problem = _url_problem(value)
        if problem is None:
            return None
        code, message = problem
        return _error(field, message or f"Please enter a valid {rule.label}", code)

    def _check_phone(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        digits = sum(ch.isdigit() for ch in value)
        if not _PHONE.match(value) or digits < 7:
            return _error(field, f"Please enter a valid {rule.label.lower()}", ValidationCode.INVALID_FORMAT)
        return None

    def _check_text(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        if rule.min_length is not None and len(value) < rule.min_length:
            return _error(
                field, f"{rule.label} must be at least {rule.min_length} characters",
                ValidationCode.INVALID_FORMAT,
            )
        return _check_max_length(field, rule, value)

    def _check_enum(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        if value.lower() not in rule.choices:
            return _error(field, f"Please select a valid {rule.label.lower()}", ValidationCode.INVALID_FORMAT)
        return None

    def _check_country(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context, rule
        if value.upper() not in self.reference.supported_countries:
            return _error(field, "Please select a supported country", ValidationCode.INVALID_COUNTRY)
        return None

    def _check_state(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        country = (context.country or "").strip().upper() if context else ""
        if country == "US":
            if value.upper() not in self.reference.us_states:
                return _error(field, "Please select a valid U.S. state", ValidationCode.INVALID_STATE)
            return None
        return _check_max_length(field, rule, value)

    def _check_file_ref(
        self, field: str, rule: FieldRule, value: str, context: ValidationContext | None
    ) -> ValidationError | None:
        del context
        if len(value) > FILE_REF_MAX_LENGTH or ".." in value or not _FILE_REF.match(value):
            return _error(field, f"{rule.label} reference is invalid", ValidationCode.INVALID_FORMAT)
        return None


_CHECKERS = {
    FieldKind.NAME: FieldValidator._check_name,
    FieldKind.SIGNATURE: FieldValidator._check_signature,
    FieldKind.EMAIL: FieldValidator._check_email,
    FieldKind.URL: FieldValidator._check_url,
    FieldKind.PHONE: FieldValidator._check_phone,
    FieldKind.TEXT: FieldValidator._check_text,
    FieldKind.ENUM: FieldValidator._check_enum,
    FieldKind.COUNTRY: FieldValidator._check_country,
    FieldKind.STATE: FieldValidator._check_state,
    FieldKind.FILE_REF: FieldValidator._check_file_ref,
}


def _error(field: str, message: str, code: ValidationCode) -> ValidationError:
    return ValidationError(field=field, message=message, code=code)


def _as_text(raw_value: Any) -> str | None:
    """Normaliza para texto aparado; None quando o tipo não é textual."""
    if raw_value is None:
        return ""
    if isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, str | int | float):
        return str(raw_value).strip()
    return None


def _is_truthy(raw_value: Any) -> bool:
    if isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, str):
        return raw_value.strip().lower() in _TRUTHY
    return False


def _check_max_length(field: str, rule: FieldRule, value: str) -> ValidationError | None:
    if rule.max_length is not None and len(value) > rule.max_length:
        return _error(
            field, f"{rule.label} must be {rule.max_length} characters or less",
            ValidationCode.MAX_LENGTH,
        )
    return None


def _email_problem(email: str) -> tuple[ValidationCode, str | None] | None:
    """Retorna (código, mensagem) do primeiro problema estrutural, ou None."""
    if len(email) > EMAIL_MAX_LENGTH:
        return ValidationCode.MAX_LENGTH, f"Email must be {EMAIL_MAX_LENGTH} characters or less"
    if email.count("@") != 1:
        return ValidationCode.INVALID_FORMAT, None
    local, domain = email.split("@")
    if not local or not domain:
        return ValidationCode.INVALID_FORMAT, None
    if ".." in email:
        return ValidationCode.INVALID_FORMAT, "Email address cannot contain consecutive dots"
    if local.startswith(".") or local.endswith("."):
        return ValidationCode.INVALID_FORMAT, "Email address cannot start or end with a dot"
    if len(local) > EMAIL_LOCAL_MAX_LENGTH or len(domain) > EMAIL_DOMAIN_MAX_LENGTH:
        return ValidationCode.INVALID_FORMAT, None
    if not _EMAIL_LOCAL.match(local) or not _EMAIL_DOMAIN.match(domain):
        return ValidationCode.INVALID_FORMAT, None
    return None


def _url_problem(url: str) -> tuple[ValidationCode, str | None] | None:
    """Retorna (código, mensagem) do primeiro problema da URL, ou None."""
    if len(url) > URL_MAX_LENGTH:
        return ValidationCode.MAX_LENGTH, f"URL must be {URL_MAX_LENGTH} characters or less"
    if has_blocked_url_scheme(url) or any(ch.isspace() for ch in url):
        return ValidationCode.INVALID_FORMAT, None
    try:
        parts = urlsplit(url)
        hostname = parts.hostname or ""
        _ = parts.port
    except ValueError:
        return ValidationCode.INVALID_FORMAT, None
    if parts.scheme.lower() not in ("http", "https"):
        return ValidationCode.INVALID_FORMAT, "URL must start with http:// or https://"
    if not hostname or len(hostname) > HOSTNAME_MAX_LENGTH or not _HOSTNAME.match(hostname):
        return ValidationCode.INVALID_FORMAT, None
    return None
