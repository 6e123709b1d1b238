"""Erros de validação field-scoped.

Cada ``ValidationError`` aponta para exatamente um campo do formulário
(ou para o campo virtual ``pitch_deck``) para exibição inline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ValidationCode(StrEnum):
    """Códigos estáveis de erro de validação."""

    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    MAX_LENGTH = "MAX_LENGTH"
    INVALID_COUNTRY = "INVALID_COUNTRY"
    INVALID_STATE = "INVALID_STATE"
    BUSINESS_LOGIC_MISMATCH = "BUSINESS_LOGIC_MISMATCH"
    ACCREDITATION_REQUIRED = "ACCREDITATION_REQUIRED"
    SUSPICIOUS_CONTENT = "SUSPICIOUS_CONTENT"
    JURISDICTION_MISMATCH = "JURISDICTION_MISMATCH"
    RESTRICTED_JURISDICTION = "RESTRICTED_JURISDICTION"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    EMPTY_FILE = "EMPTY_FILE"
    VERIFICATION_FILE_REQUIRED = "VERIFICATION_FILE_REQUIRED"


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Erro de validação de um único campo.

    Attributes:
        field: Nome do campo (snake_case) ou campo virtual.
        message: Mensagem apresentável ao usuário.
        code: Código estável.
    """

    field: str
    message: str
    code: ValidationCode

    def to_dict(self) -> dict[str, str]:
        """Serializa no formato de wire ``{field, message, code}``."""
        return {"field": self.field, "message": self.message, "code": str(self.code)}


@dataclass(frozen=True, slots=True)
class FormValidationResult:
    """Resultado de ``validate_form``."""

    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, object]:
        return {
            "isValid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }


def errors_for_field(errors: Iterable[ValidationError], field_name: str) -> list[ValidationError]:
    """Filtra erros de um campo específico."""
    return [error for error in errors if error.field == field_name]


def has_field_error(errors: Iterable[ValidationError], field_name: str) -> bool:
    """Indica se há ao menos um erro para o campo."""
    return any(error.field == field_name for error in errors)


def first_field_error(errors: Iterable[ValidationError], field_name: str) -> str | None:
    """Mensagem do primeiro erro do campo (para exibição inline)."""
    for error in errors:
        if error.field == field_name:
            return error.message
    return None
