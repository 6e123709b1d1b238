"""Testes para config/reference (dados de referência do intake)."""

from __future__ import annotations

from pathlib import Path

import pytest

from config.reference import load_reference_data
from config.reference import loader as reference_loader
from utils.errors import ReferenceDataError


class TestLoadReferenceData:
    """Carga do YAML empacotado."""

    def test_bundled_data(self) -> None:
        data = load_reference_data()
        assert "US" in data.supported_countries
        assert len(data.us_states) == 51
        assert "CN" in data.restricted_countries

    def test_is_cached(self) -> None:
        assert load_reference_data() is load_reference_data()

    @pytest.mark.parametrize(
        ("country", "jurisdiction", "expected"),
        [
            ("US", "Delaware", True),
            ("US", "NY", True),
            ("US", "Bavaria", False),
            ("CA", "ontario", True),
            ("SG", "Singapore", True),
            ("SG", "X", False),
        ],
    )
    def test_jurisdiction_consistency(self, country: str, jurisdiction: str, expected: bool) -> None:
        assert load_reference_data().is_jurisdiction_consistent(country, jurisdiction) is expected

    def test_missing_file_raises(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(reference_loader, "_REFERENCE_PATH", tmp_path / "missing.yaml")
        load_reference_data.cache_clear()
        try:
            with pytest.raises(ReferenceDataError):
                load_reference_data()
        finally:
            load_reference_data.cache_clear()

    def test_empty_list_raises(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "reference.yaml"
        path.write_text("supported_countries: []\nus_states: [CA]\n", encoding="utf-8")
        monkeypatch.setattr(reference_loader, "_REFERENCE_PATH", path)
        load_reference_data.cache_clear()
        try:
            with pytest.raises(ReferenceDataError):
                load_reference_data()
        finally:
            load_reference_data.cache_clear()

    def test_invalid_yaml_raises(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        path = tmp_path / "reference.yaml"
        path.write_text("supported_countries: [US\n", encoding="utf-8")
        monkeypatch.setattr(reference_loader, "_REFERENCE_PATH", path)
        load_reference_data.cache_clear()
        try:
            with pytest.raises(ReferenceDataError):
                load_reference_data()
        finally:
            load_reference_data.cache_clear()
