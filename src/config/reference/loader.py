"""Loader dos dados de referência do intake (países, estados, jurisdições).

Carregado uma vez do YAML empacotado junto ao módulo. Diferente de outros
contextos, não há fallback: validar contra listas vazias aceitaria tudo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from utils.errors import ReferenceDataError

logger = logging.getLogger(__name__)

_REFERENCE_PATH = Path(__file__).resolve().parent / "intake_reference.yaml"

# Mínimo de caracteres para jurisdição de países sem lista conhecida
MIN_GENERIC_JURISDICTION_LENGTH = 2


@dataclass(frozen=True, slots=True)
class IntakeReferenceData:
    """Listas fixas usadas pelos validadores.

    Attributes:
        supported_countries: Códigos de país aceitos.
        restricted_countries: Códigos bloqueados por compliance.
        us_states: Códigos USPS (50 estados + DC).
        jurisdictions: Nomes de jurisdição aceitos por país (minúsculas).
    """

    supported_countries: frozenset[str]
    restricted_countries: frozenset[str]
    us_states: frozenset[str]
    jurisdictions: dict[str, frozenset[str]]

    def is_jurisdiction_consistent(self, country: str, jurisdiction: str) -> bool:
        """Verifica se a jurisdição é compatível com o país.

        Para os EUA aceita também códigos de estado. Países sem lista aceitam
        qualquer valor com tamanho mínimo.
        """
        normalized = jurisdiction.strip().lower()
        country_code = country.strip().upper()
        known = self.jurisdictions.get(country_code)
        if known is None:
            return len(normalized) >= MIN_GENERIC_JURISDICTION_LENGTH
        if country_code == "US" and normalized.upper() in self.us_states:
            return True
        return normalized in known


def _as_code_set(raw: Any, key: str) -> frozenset[str]:
    if not isinstance(raw, list) or not raw:
        raise ReferenceDataError(f"Lista '{key}' ausente ou vazia em {_REFERENCE_PATH.name}")
    return frozenset(str(item).strip().upper() for item in raw)


@lru_cache(maxsize=1)
def load_reference_data() -> IntakeReferenceData:
    """Carrega dados de referência do YAML (cached).

    Returns:
        IntakeReferenceData imutável

    Raises:
        ReferenceDataError: Se o arquivo não existir ou o YAML for inválido
    """
    if not _REFERENCE_PATH.exists():
        raise ReferenceDataError(f"Arquivo de referência não encontrado: {_REFERENCE_PATH}")

    try:
        with _REFERENCE_PATH.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        logger.error("reference_data_parse_failed", extra={"error": str(exc)})
        raise ReferenceDataError("YAML de referência inválido") from exc

    if not isinstance(raw, dict):
        raise ReferenceDataError("YAML de referência deve ser um dicionário")

    jurisdictions_raw = raw.get("jurisdictions") or {}
    if not isinstance(jurisdictions_raw, dict):
        raise ReferenceDataError("'jurisdictions' deve ser um dicionário")

    data = IntakeReferenceData(
        supported_countries=_as_code_set(raw.get("supported_countries"), "supported_countries"),
        restricted_countries=frozenset(
            str(item).strip().upper() for item in raw.get("restricted_countries") or []
        ),
        us_states=_as_code_set(raw.get("us_states"), "us_states"),
        jurisdictions={
            str(country).upper(): frozenset(str(name).strip().lower() for name in names or [])
            for country, names in jurisdictions_raw.items()
        },
    )
    logger.debug(
        "reference_data_loaded",
        extra={
            "countries": len(data.supported_countries),
            "us_states": len(data.us_states),
        },
    )
    return data
