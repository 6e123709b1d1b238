"""Validação de relações entre campos (sem IO).

Regras de investidor:
- País US exige estado válido; fora dos EUA estado é opcional
- 506(c) exige método de verificação, nome da entidade e jurisdição
  (um erro distinto por campo ausente)
- 506(c) com carta de verificação exige o arquivo (ref ou anexo)
- 506(c) admite apenas investidores acreditados
- institutional/family-office exigem acreditação e ticket mínimo
- Jurisdição de 506(c) consistente com o país

Regra de founder: pitch deck por URL ou arquivo (campo virtual
``pitch_deck``).
"""

from __future__ import annotations

from app.domain.applications import FounderApplication, InvestorApplication
from app.domain.enums import (
    ENTITY_INVESTOR_TYPES,
    AccreditationStatus,
    CheckSize,
    InvestorType,
    VerificationMethod,
    enum_values,
)
from app.domain.validation import ValidationCode, ValidationError
from config.reference import IntakeReferenceData, load_reference_data

PITCH_DECK_FIELD = "pitch_deck"
VERIFICATION_FILE_FIELD = "verification_file"

_REQUIRED_506C_FIELDS: tuple[tuple[str, str], ...] = (
    ("verification_method", "Please select a verification method for 506(c)"),
    ("entity_name", "Entity name is required for 506(c) verification"),
    ("jurisdiction", "Jurisdiction is required for 506(c) verification"),
)


class CrossFieldValidator:
    """Validador de restrições entre campos, stateless.

    Args:
        min_entity_check_size: Menor faixa de ticket aceita para
            institutional/family-office.
        reference: Dados de referência (carregados do YAML se omitidos).
    """

    def __init__(
        self,
        min_entity_check_size: CheckSize | str = CheckSize.MEDIUM,
        reference: IntakeReferenceData | None = None,
    ) -> None:
        self._min_check_size = CheckSize(min_entity_check_size)
        self._reference = reference

    @property
    def reference(self) -> IntakeReferenceData:
        if self._reference is None:
            self._reference = load_reference_data()
        return self._reference

    def validate(self, payload: FounderApplication | InvestorApplication) -> list[ValidationError]:
        """Valida as restrições entre campos do payload.

        Checagens cujos pré-requisitos estão ausentes ou inválidos (ex:
        check size desconhecido) são puladas; os erros individuais desses
        campos vêm do FieldValidator.
        """
        if isinstance(payload, InvestorApplication):
            return self._validate_investor(payload)
        return self._validate_founder(payload)

    def _validate_founder(self, payload: FounderApplication) -> list[ValidationError]:
        has_deck = bool(
            payload.deck_url.strip() or payload.deck_file_ref.strip() or payload.deck_file
        )
        if has_deck:
            return []
        return [
            ValidationError(
                field=PITCH_DECK_FIELD,
                message="Pitch deck is required (either upload a file or provide a URL)",
                code=ValidationCode.REQUIRED_FIELD,
            )
        ]

    def _validate_investor(self, payload: InvestorApplication) -> list[ValidationError]:
        errors: list[ValidationError] = []
        errors.extend(self._check_location(payload))
        if payload.is_506c:
            errors.extend(self._check_506c(payload))
        errors.extend(self._check_entity_investor(payload))
        return errors

    def _check_location(self, payload: InvestorApplication) -> list[ValidationError]:
        country = payload.country.strip().upper()
        state = payload.state.strip().upper()
        errors: list[ValidationError] = []

        if country in self.reference.restricted_countries:
            errors.append(
                ValidationError(
                    field="country",
                    message="We are unable to accept applications from this jurisdiction",
                    code=ValidationCode.RESTRICTED_JURISDICTION,
                )
            )

        if country == "US":
            if not state:
                errors.append(
                    ValidationError(
                        field="state",
                        message="State is required for U.S. investors",
                        code=ValidationCode.REQUIRED_FIELD,
                    )
                )
            elif state not in self.reference.us_states:
                errors.append(
                    ValidationError(
                        field="state",
                        message="Please select a valid U.S. state",
                        code=ValidationCode.INVALID_STATE,
                    )
                )
        return errors

    def _check_506c(self, payload: InvestorApplication) -> list[ValidationError]:
        errors = [
            ValidationError(field=name, message=message, code=ValidationCode.REQUIRED_FIELD)
            for name, message in _REQUIRED_506C_FIELDS
            if not str(getattr(payload, name)).strip()
        ]

        if (
            payload.verification_method.strip().lower() == VerificationMethod.LETTER
            and not payload.verification_file_ref.strip()
            and payload.verification_file is None
        ):
            errors.append(
                ValidationError(
                    field=VERIFICATION_FILE_FIELD,
                    message="Verification letter is required when using the letter verification method",
                    code=ValidationCode.VERIFICATION_FILE_REQUIRED,
                )
            )

        if payload.accreditation_status.strip().lower() != AccreditationStatus.YES:
            errors.append(
                ValidationError(
                    field="accreditation_status",
                    message="506(c) offerings are limited to accredited investors",
                    code=ValidationCode.ACCREDITATION_REQUIRED,
                )
            )

        country = payload.country.strip().upper()
        jurisdiction = payload.jurisdiction.strip()
        if (
            jurisdiction
            and country in self.reference.supported_countries
            and not self.reference.is_jurisdiction_consistent(country, jurisdiction)
        ):
            errors.append(
                ValidationError(
                    field="jurisdiction",
                    message="Jurisdiction does not match the selected country",
                    code=ValidationCode.JURISDICTION_MISMATCH,
                )
            )
        return errors

    def _check_entity_investor(self, payload: InvestorApplication) -> list[ValidationError]:
        investor_type = payload.investor_type.strip().lower()
        if investor_type not in ENTITY_INVESTOR_TYPES:
            return []

        label = "Institutional" if investor_type == InvestorType.INSTITUTIONAL else "Family office"
        errors: list[ValidationError] = []

        accreditation = payload.accreditation_status.strip().lower()
        if accreditation and accreditation != AccreditationStatus.YES:
            errors.append(
                ValidationError(
                    field="accreditation_status",
                    message=f"{label} investors must be accredited",
                    code=ValidationCode.BUSINESS_LOGIC_MISMATCH,
                )
            )

        check_size = payload.check_size.strip().lower()
        if check_size in enum_values(CheckSize) and CheckSize(check_size).rank < self._min_check_size.rank:
            errors.append(
                ValidationError(
                    field="check_size",
                    message=f"{label} investors typically invest {self._min_check_size.value} or more",
                    code=ValidationCode.BUSINESS_LOGIC_MISMATCH,
                )
            )
        return errors
