"""Conjuntos fixos de valores aceitos nos formulários de aplicação."""

from __future__ import annotations

from enum import StrEnum


class ApplicationKind(StrEnum):
    """Discriminador do payload."""

    FOUNDER = "founder"
    INVESTOR = "investor"


class InvestorMode(StrEnum):
    """Regime de oferta (Regulation D)."""

    RULE_506B = "506b"
    RULE_506C = "506c"


class InvestorType(StrEnum):
    INDIVIDUAL = "individual"
    FAMILY_OFFICE = "family-office"
    INSTITUTIONAL = "institutional"
    OTHER = "other"


# Tipos que exigem investidor acreditado e ticket mínimo
ENTITY_INVESTOR_TYPES = frozenset({InvestorType.INSTITUTIONAL, InvestorType.FAMILY_OFFICE})


class AccreditationStatus(StrEnum):
    YES = "yes"
    NO = "no"
    UNSURE = "unsure"


class CheckSize(StrEnum):
    """Faixas de ticket, da menor para a maior."""

    SMALL = "25k-50k"
    MEDIUM = "50k-250k"
    LARGE = "250k-plus"

    @property
    def rank(self) -> int:
        return _CHECK_SIZE_ORDER.index(self)


_CHECK_SIZE_ORDER: tuple[CheckSize, ...] = (CheckSize.SMALL, CheckSize.MEDIUM, CheckSize.LARGE)


class VerificationMethod(StrEnum):
    LETTER = "letter"
    THIRD_PARTY = "third-party"
    BANK_BROKERAGE = "bank-brokerage"


class AreaOfInterest(StrEnum):
    ENTERPRISE_AI = "enterprise-ai"
    HEALTHCARE_AI = "healthcare-ai"
    FINTECH_AI = "fintech-ai"
    HI_TECH = "hi-tech"


class FounderStage(StrEnum):
    PRE_SEED = "pre-seed"
    SEED = "seed"
    SERIES_A = "series-a"
    BOOTSTRAPPED = "bootstrapped"
    OTHER = "other"


class Industry(StrEnum):
    ENTERPRISE_AI = "enterprise-ai"
    HEALTHCARE_AI = "healthcare-ai"
    FINTECH_AI = "fintech-ai"
    HI_TECH = "hi-tech"
    OTHER = "other"


class Traction(StrEnum):
    IDEA = "idea"
    MVP = "mvp"
    PILOTS = "pilots"
    PAYING_CUSTOMERS = "paying-customers"
    SCALING = "scaling"


class Revenue(StrEnum):
    PRE_REVENUE = "pre-revenue"
    UNDER_100K = "under-100k"
    FROM_100K_TO_500K = "100k-500k"
    FROM_500K_TO_1M = "500k-1m"
    OVER_1M = "1m-plus"


class CapitalRaised(StrEnum):
    NONE = "none"
    FRIENDS_FAMILY = "friends-family"
    ANGEL = "angel"
    INSTITUTIONAL = "institutional"


class CapitalSought(StrEnum):
    UNDER_500K = "under-500k"
    FROM_500K_TO_1M = "500k-1m"
    FROM_1M_TO_3M = "1m-3m"
    OVER_3M = "3m-plus"


def enum_values(enum_cls: type[StrEnum]) -> frozenset[str]:
    """Valores aceitos de um StrEnum (para checagem de pertinência)."""
    return frozenset(member.value for member in enum_cls)
