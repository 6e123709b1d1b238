"""Validação do formulário completo.

Combina, nesta ordem:
1. Regras de campo isolado (FieldValidator) para todos os campos do tipo
2. Restrições do arquivo anexado (tipo/tamanho), expostas nos campos
   virtuais ``deck_file``/``verification_file``
3. Restrições entre campos (CrossFieldValidator)

No máximo um erro por campo: erros cruzados de um campo que já tem erro
(próprio ou de outra relação) são descartados. O usuário vê primeiro o
problema do valor, depois a primeira relação violada.
"""

from __future__ import annotations

import logging
from typing import Any

from app.coordinators.uploads.constraints import check_attached_file, constraints_for
from app.domain.applications import (
    FounderApplication,
    InvestorApplication,
    ValidationContext,
    parse_application_payload,
)
from app.domain.uploads import UploadErrorCode
from app.domain.validation import FormValidationResult, ValidationCode, ValidationError
from app.services.cross_field_validator import CrossFieldValidator
from app.services.field_rules import required_fields, rules_for
from app.services.field_validator import FieldValidator
from config.settings import UploadSettings
from utils.errors import FileUploadError, InvalidPayloadError

logger = logging.getLogger(__name__)

# Campos exibidos apenas em 506(c); ignorados em 506(b)
ONLY_506C_FIELDS = frozenset(
    {"verification_method", "entity_name", "jurisdiction", "custodian_info", "verification_file_ref"}
)

_FILE_CODES: dict[str, ValidationCode] = {
    UploadErrorCode.INVALID_FILE_TYPE: ValidationCode.INVALID_FILE_TYPE,
    UploadErrorCode.FILE_TOO_LARGE: ValidationCode.FILE_TOO_LARGE,
    UploadErrorCode.EMPTY_FILE: ValidationCode.EMPTY_FILE,
}

Payload = FounderApplication | InvestorApplication


class FormValidator:
    """Validador de formulário (campo + arquivo + relações).

    Args:
        field_validator: FieldValidator (novo se omitido).
        cross_validator: CrossFieldValidator (novo se omitido).
        upload_settings: Limites de arquivo (env se omitido).
    """

    def __init__(
        self,
        field_validator: FieldValidator | None = None,
        cross_validator: CrossFieldValidator | None = None,
        upload_settings: UploadSettings | None = None,
    ) -> None:
        self._fields = field_validator or FieldValidator()
        self._cross = cross_validator or CrossFieldValidator()
        self._upload_settings = upload_settings

    @property
    def field_validator(self) -> FieldValidator:
        return self._fields

    def validate(self, payload: Payload | dict[str, Any]) -> FormValidationResult:
        """Valida o formulário inteiro.

        Args:
            payload: Payload tipado ou dict bruto.

        Returns:
            FormValidationResult com todos os erros encontrados.
        """
        try:
            payload = parse_application_payload(payload)
        except InvalidPayloadError as exc:
            return FormValidationResult(errors=exc.errors)

        errors = self._field_errors(payload)
        errors.extend(self._file_errors(payload))

        flagged = {error.field for error in errors}
        for error in self._cross.validate(payload):
            if error.field not in flagged:
                flagged.add(error.field)
                errors.append(error)

        if errors:
            logger.debug(
                "form_validation_failed",
                extra={
                    "application_kind": str(payload.application_kind),
                    "fields": sorted({error.field for error in errors}),
                },
            )
        return FormValidationResult(errors=tuple(errors))

    def completion(self, payload: Payload | dict[str, Any]) -> int:
        """Percentual de campos obrigatórios preenchidos (0..100).

        Considera os campos exigidos pelo modo (506(c)), o estado para
        investidores dos EUA e o pitch deck do founder.
        """
        try:
            payload = parse_application_payload(payload)
        except InvalidPayloadError:
            return 0

        filled = [_is_filled(getattr(payload, name)) for name in _required_for(payload)]
        if isinstance(payload, FounderApplication):
            filled.append(
                bool(payload.deck_url.strip() or payload.deck_file_ref.strip() or payload.deck_file)
            )
        if not filled:
            return 0
        return round(100 * sum(filled) / len(filled))

    def _field_errors(self, payload: Payload) -> list[ValidationError]:
        context = ValidationContext.from_payload(payload)
        skip_506c = isinstance(payload, InvestorApplication) and not payload.is_506c
        errors: list[ValidationError] = []
        for name in rules_for(payload.application_kind):
            if skip_506c and name in ONLY_506C_FIELDS:
                continue
            errors.extend(self._fields.validate(name, getattr(payload, name), context))
        return errors

    def _file_errors(self, payload: Payload) -> list[ValidationError]:
        attached = payload.attached_file
        if attached is None:
            return []
        field_name = "deck_file" if isinstance(payload, FounderApplication) else "verification_file"
        try:
            check_attached_file(
                attached, constraints_for(payload.upload_purpose, self._upload_settings)
            )
        except FileUploadError as exc:
            code = _FILE_CODES.get(exc.code, ValidationCode.INVALID_FORMAT)
            return [ValidationError(field=field_name, message=exc.message, code=code)]
        return []


def _required_for(payload: Payload) -> list[str]:
    names = list(required_fields(payload.application_kind))
    if isinstance(payload, InvestorApplication):
        if payload.is_506c:
            names.extend(("verification_method", "entity_name", "jurisdiction"))
        if payload.country.strip().upper() == "US":
            names.append("state")
    return names


def _is_filled(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)

