"""Registro de regras por campo dos formulários de founder e investidor.

Cada campo tem uma classe de regra (FieldKind) e limites. A
obrigatoriedade aqui é a do formulário base; campos exigidos apenas em
506(c) são tratados pelo CrossFieldValidator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from app.domain.enums import (
    AccreditationStatus,
    ApplicationKind,
    AreaOfInterest,
    CapitalRaised,
    CapitalSought,
    CheckSize,
    FounderStage,
    Industry,
    InvestorMode,
    InvestorType,
    Revenue,
    Traction,
    VerificationMethod,
    enum_values,
)


class FieldKind(StrEnum):
    NAME = "name"
    SIGNATURE = "signature"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    TEXT = "text"
    ENUM = "enum"
    MULTI_ENUM = "multi_enum"
    COUNTRY = "country"
    STATE = "state"
    CONSENT = "consent"
    FILE_REF = "file_ref"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Regra de um campo.

    Attributes:
        kind: Classe de regra.
        label: Nome legível usado nas mensagens.
        required: Obrigatório no formulário base.
        max_length: Limite superior (MAX_LENGTH).
        min_length: Limite inferior (INVALID_FORMAT).
        choices: Valores aceitos para ENUM/MULTI_ENUM.
        required_message: Mensagem customizada de obrigatoriedade.
    """

    kind: FieldKind
    label: str
    required: bool = False
    max_length: int | None = None
    min_length: int | None = None
    choices: frozenset[str] = field(default_factory=frozenset)
    required_message: str | None = None

    def missing_message(self) -> str:
        return self.required_message or f"{self.label} is required"


NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

FOUNDER_FIELD_RULES: dict[str, FieldRule] = {
    "full_name": FieldRule(FieldKind.NAME, "Your full name", required=True),
    "role": FieldRule(FieldKind.TEXT, "Your role at the company", required=True, max_length=100),
    "email": FieldRule(FieldKind.EMAIL, "Email address", required=True),
    "phone": FieldRule(FieldKind.PHONE, "Phone number"),
    "linkedin": FieldRule(FieldKind.URL, "LinkedIn URL"),
    "company_name": FieldRule(FieldKind.TEXT, "Company name", required=True, max_length=200),
    "website": FieldRule(FieldKind.URL, "Company website", required=True),
    "stage": FieldRule(
        FieldKind.ENUM, "Startup stage", required=True, choices=enum_values(FounderStage),
        required_message="Please select your startup stage",
    ),
    "industry": FieldRule(
        FieldKind.ENUM, "Industry", required=True, choices=enum_values(Industry),
        required_message="Please select your industry",
    ),
    "one_line_description": FieldRule(
        FieldKind.TEXT, "One-line description", required=True, max_length=150
    ),
    "problem": FieldRule(FieldKind.TEXT, "Problem description", required=True, max_length=300),
    "solution": FieldRule(FieldKind.TEXT, "Solution description", required=True, max_length=300),
    "traction": FieldRule(
        FieldKind.ENUM, "Traction", required=True, choices=enum_values(Traction),
        required_message="Please select your traction stage",
    ),
    "revenue": FieldRule(FieldKind.ENUM, "Revenue", choices=enum_values(Revenue)),
    "deck_url": FieldRule(FieldKind.URL, "Pitch deck URL"),
    "deck_file_ref": FieldRule(FieldKind.FILE_REF, "Pitch deck file"),
    "video_pitch": FieldRule(FieldKind.URL, "Video pitch URL"),
    "enterprise_engagement": FieldRule(
        FieldKind.TEXT, "Enterprise engagement", required=True, max_length=1000,
        required_message="Please indicate your enterprise engagement status",
    ),
    "key_highlights": FieldRule(FieldKind.TEXT, "Key highlights", max_length=1000),
    "capital_raised": FieldRule(
        FieldKind.ENUM, "Capital raised", choices=enum_values(CapitalRaised)
    ),
    "capital_raised_amount": FieldRule(FieldKind.TEXT, "Amount raised", max_length=100),
    "capital_sought": FieldRule(
        FieldKind.ENUM, "Capital sought", required=True, choices=enum_values(CapitalSought),
        required_message="Please select the capital amount you are seeking",
    ),
    "accuracy_confirm": FieldRule(
        FieldKind.CONSENT, "Accuracy confirmation", required=True,
        required_message="You must confirm the accuracy of your information",
    ),
    "understanding_confirm": FieldRule(
        FieldKind.CONSENT, "Understanding confirmation", required=True,
        required_message="You must confirm your understanding of the application process",
    ),
    "signature": FieldRule(
        FieldKind.SIGNATURE, "Digital signature", required=True, max_length=NAME_MAX_LENGTH
    ),
}

INVESTOR_FIELD_RULES: dict[str, FieldRule] = {
    "mode": FieldRule(
        FieldKind.ENUM, "Offering type", required=True, choices=enum_values(InvestorMode),
        required_message="Please select 506(b) or 506(c)",
    ),
    "full_name": FieldRule(FieldKind.NAME, "Your full name", required=True),
    "email": FieldRule(FieldKind.EMAIL, "Email address", required=True),
    "country": FieldRule(
        FieldKind.COUNTRY, "Country", required=True,
        required_message="Please select your country",
    ),
    "state": FieldRule(FieldKind.STATE, "State", max_length=100),
    "investor_type": FieldRule(
        FieldKind.ENUM, "Investor type", required=True, choices=enum_values(InvestorType),
        required_message="Please select your investor type",
    ),
    "accreditation_status": FieldRule(
        FieldKind.ENUM, "Accreditation status", required=True,
        choices=enum_values(AccreditationStatus),
        required_message="Please indicate your accreditation status",
    ),
    "check_size": FieldRule(
        FieldKind.ENUM, "Check size", required=True, choices=enum_values(CheckSize),
        required_message="Please select your typical check size",
    ),
    "areas_of_interest": FieldRule(
        FieldKind.MULTI_ENUM, "Areas of interest", required=True,
        choices=enum_values(AreaOfInterest),
        required_message="Please select at least one area of interest",
    ),
    "referral_source": FieldRule(FieldKind.TEXT, "Referral source", max_length=200),
    "verification_method": FieldRule(
        FieldKind.ENUM, "Verification method", choices=enum_values(VerificationMethod)
    ),
    "entity_name": FieldRule(FieldKind.TEXT, "Entity name", min_length=3, max_length=200),
    "jurisdiction": FieldRule(FieldKind.TEXT, "Jurisdiction", max_length=100),
    "custodian_info": FieldRule(FieldKind.TEXT, "Custodian information", max_length=500),
    "verification_file_ref": FieldRule(FieldKind.FILE_REF, "Verification document"),
    "consent_confirm": FieldRule(
        FieldKind.CONSENT, "Consent", required=True,
        required_message="You must confirm your consent to proceed",
    ),
    "signature": FieldRule(
        FieldKind.SIGNATURE, "Digital signature", required=True, max_length=NAME_MAX_LENGTH
    ),
}

_RULES_BY_KIND: dict[ApplicationKind, dict[str, FieldRule]] = {
    ApplicationKind.FOUNDER: FOUNDER_FIELD_RULES,
    ApplicationKind.INVESTOR: INVESTOR_FIELD_RULES,
}


def rules_for(kind: ApplicationKind | str) -> dict[str, FieldRule]:
    """Regras do formulário do tipo informado."""
    return _RULES_BY_KIND[ApplicationKind(kind)]


def find_rule(field_name: str, kind: ApplicationKind | str | None = None) -> FieldRule | None:
    """Localiza a regra de um campo.

    Sem tipo informado, procura primeiro no formulário de founder e depois
    no de investidor.
    """
    if kind is not None:
        return rules_for(kind).get(field_name)
    return FOUNDER_FIELD_RULES.get(field_name) or INVESTOR_FIELD_RULES.get(field_name)


def required_fields(kind: ApplicationKind | str) -> tuple[str, ...]:
    """Campos obrigatórios do formulário base (sem regras de modo)."""
    return tuple(name for name, rule in rules_for(kind).items() if rule.required)
