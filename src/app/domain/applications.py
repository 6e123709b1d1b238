"""Payloads de aplicação (união discriminada por ``applicationKind``).

Os campos de enum são mantidos como ``str`` para que valores desconhecidos
cheguem aos validadores de domínio e virem ``ValidationError`` field-scoped,
em vez de falhar no parse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel, to_snake

from app.domain.enums import ApplicationKind, InvestorMode
from app.domain.uploads import AttachedFile, UploadPurpose
from app.domain.validation import ValidationCode, ValidationError
from utils.errors import InvalidPayloadError


class _ApplicationBase(BaseModel):
    """Campos comuns aos dois formatos de aplicação."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    full_name: str = ""
    email: str = ""
    signature: str = ""
    # Campo invisível para humanos; qualquer valor indica bot
    website_honeypot: str = ""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null no wire equivale a campo ausente
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @property
    def attached_file(self) -> AttachedFile | None:
        return None

    @property
    def upload_purpose(self) -> UploadPurpose:
        raise NotImplementedError

    def with_file_ref(self, file_ref: str) -> _ApplicationBase:
        raise NotImplementedError

    def to_record(self) -> dict[str, Any]:
        """Payload normalizado para o colaborador de persistência.

        Strings aparadas, email em minúsculas, bytes de arquivo excluídos.
        """
        record = self.model_dump(
            by_alias=True,
            exclude={"deck_file", "verification_file"},
        )
        for key, value in record.items():
            if isinstance(value, str):
                record[key] = value.strip()
        record["email"] = record["email"].lower()
        return record


class FounderApplication(_ApplicationBase):
    """Aplicação de founder (pitch)."""

    application_kind: Literal["founder"] = "founder"

    # Founder & time
    role: str = ""
    phone: str = ""
    linkedin: str = ""

    # Empresa
    company_name: str = ""
    website: str = ""
    stage: str = ""
    industry: str = ""

    # Narrativa
    one_line_description: str = ""
    problem: str = ""
    solution: str = ""
    traction: str = ""
    revenue: str = ""

    # Pitch deck (URL ou arquivo)
    deck_url: str = ""
    deck_file_ref: str = ""
    deck_file: AttachedFile | None = None
    video_pitch: str = ""

    enterprise_engagement: str = ""
    key_highlights: str = ""

    # Funding
    capital_raised: str = ""
    capital_raised_amount: str = ""
    capital_sought: str = ""

    # Consentimento
    accuracy_confirm: bool = False
    understanding_confirm: bool = False

    @property
    def attached_file(self) -> AttachedFile | None:
        return self.deck_file

    @property
    def upload_purpose(self) -> UploadPurpose:
        return UploadPurpose.PITCH_DECK

    def with_file_ref(self, file_ref: str) -> FounderApplication:
        return self.model_copy(update={"deck_file_ref": file_ref, "deck_file": None})


class InvestorApplication(_ApplicationBase):
    """Aplicação de investidor (506(b) ou 506(c))."""

    application_kind: Literal["investor"] = "investor"

    mode: str = ""
    country: str = ""
    state: str = ""
    investor_type: str = ""
    accreditation_status: str = ""
    check_size: str = ""
    areas_of_interest: list[str] = Field(default_factory=list)
    referral_source: str = ""

    # Exclusivos de 506(c)
    verification_method: str = ""
    entity_name: str = ""
    jurisdiction: str = ""
    custodian_info: str = ""
    verification_file_ref: str = ""
    verification_file: AttachedFile | None = None

    consent_confirm: bool = False

    @property
    def is_506c(self) -> bool:
        return self.mode.strip().lower() == InvestorMode.RULE_506C

    @property
    def attached_file(self) -> AttachedFile | None:
        return self.verification_file

    @property
    def upload_purpose(self) -> UploadPurpose:
        return UploadPurpose.VERIFICATION

    def with_file_ref(self, file_ref: str) -> InvestorApplication:
        return self.model_copy(
            update={"verification_file_ref": file_ref, "verification_file": None}
        )


ApplicationPayload = Annotated[
    FounderApplication | InvestorApplication,
    Field(discriminator="application_kind"),
]

_PAYLOAD_ADAPTER: TypeAdapter[FounderApplication | InvestorApplication] = TypeAdapter(
    ApplicationPayload
)


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Contexto para validação de campo isolado.

    Attributes:
        application_kind: Formato do formulário (founder/investor).
        mode: Modo do investidor (506b/506c), quando aplicável.
        country: País informado, usado na checagem de estado.
    """

    application_kind: ApplicationKind | None = None
    mode: str | None = None
    country: str | None = None

    @classmethod
    def from_payload(cls, payload: FounderApplication | InvestorApplication) -> ValidationContext:
        if isinstance(payload, InvestorApplication):
            return cls(
                application_kind=ApplicationKind.INVESTOR,
                mode=payload.mode,
                country=payload.country,
            )
        return cls(application_kind=ApplicationKind.FOUNDER)


def parse_application_payload(
    raw: FounderApplication | InvestorApplication | dict[str, Any],
) -> FounderApplication | InvestorApplication:
    """Converte entrada bruta no payload tipado.

    Args:
        raw: Modelo já tipado ou dict (camelCase ou snake_case).

    Returns:
        FounderApplication ou InvestorApplication.

    Raises:
        InvalidPayloadError: Discriminador ausente/desconhecido ou tipos
            incompatíveis (ex: lista onde se espera texto).
    """
    if isinstance(raw, FounderApplication | InvestorApplication):
        return raw
    try:
        return _PAYLOAD_ADAPTER.validate_python(raw)
    except PydanticValidationError as exc:
        raise InvalidPayloadError(_convert_pydantic_errors(exc)) from exc


def _convert_pydantic_errors(exc: PydanticValidationError) -> list[ValidationError]:
    errors: list[ValidationError] = []
    seen: set[str] = set()
    for item in exc.errors():
        error_type = item.get("type", "")
        if error_type.startswith("union_tag") or error_type == "model_attributes_type":
            field_name = "application_kind"
            code = (
                ValidationCode.REQUIRED_FIELD
                if error_type == "union_tag_not_found"
                else ValidationCode.INVALID_FORMAT
            )
            message = "Application kind must be 'founder' or 'investor'"
        else:
            field_name = _field_from_loc(item.get("loc", ()))
            code = ValidationCode.INVALID_FORMAT
            message = "Invalid value"
        if field_name in seen:
            continue
        seen.add(field_name)
        errors.append(ValidationError(field=field_name, message=message, code=code))
    return errors


def _field_from_loc(loc: tuple[int | str, ...]) -> str:
    kinds = {kind.value for kind in ApplicationKind}
    for part in loc:
        if isinstance(part, str) and part not in kinds:
            return to_snake(part)
    return "payload"
