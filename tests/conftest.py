"""Configuração do pytest para o projeto Arena Intake."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def founder_payload() -> dict[str, Any]:
    """Aplicação de founder válida (wire camelCase, deck por URL)."""
    return {
        "applicationKind": "founder",
        "fullName": "Jane Doe",
        "role": "CEO",
        "email": "Jane.Doe@Example.com",
        "phone": "+1 415 555 0100",
        "linkedin": "https://linkedin.com/in/janedoe",
        "companyName": "Acme Robotics",
        "website": "https://acme.example.com",
        "stage": "seed",
        "industry": "enterprise-ai",
        "oneLineDescription": "Robotic process automation for hospitals",
        "problem": "Manual scheduling wastes nurse time",
        "solution": "Agents that coordinate shifts automatically",
        "traction": "pilots",
        "revenue": "under-100k",
        "deckUrl": "https://docs.example.com/deck.pdf",
        "enterpriseEngagement": "Two pilots with regional hospital networks",
        "capitalSought": "1m-3m",
        "accuracyConfirm": True,
        "understandingConfirm": True,
        "signature": "Jane Doe",
    }


@pytest.fixture
def investor_payload() -> dict[str, Any]:
    """Aplicação de investidor 506(b) válida."""
    return {
        "applicationKind": "investor",
        "mode": "506b",
        "fullName": "John Smith",
        "email": "john.smith@example.com",
        "country": "US",
        "state": "CA",
        "investorType": "individual",
        "accreditationStatus": "yes",
        "checkSize": "25k-50k",
        "areasOfInterest": ["enterprise-ai", "fintech-ai"],
        "referralSource": "Conference",
        "consentConfirm": True,
        "signature": "John Smith",
    }


@pytest.fixture
def investor_506c_payload(investor_payload: dict[str, Any]) -> dict[str, Any]:
    """Aplicação de investidor 506(c) válida (entidade acreditada)."""
    return {
        **investor_payload,
        "mode": "506c",
        "investorType": "family-office",
        "checkSize": "250k-plus",
        "verificationMethod": "letter",
        "verificationFileRef": "applications/verification/2026/01/accreditation-letter.pdf",
        "entityName": "Smith Family Holdings LLC",
        "jurisdiction": "Delaware",
    }
