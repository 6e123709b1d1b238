"""Testes do script de validação offline de payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from scripts.validate_application import main


def _write(tmp_path: Path, payload: Any) -> str:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


class TestValidateApplicationScript:
    """Códigos de saída e saída JSON."""

    def test_valid_payload_exits_zero(
        self, tmp_path: Path, founder_payload: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([_write(tmp_path, founder_payload)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"isValid": True, "errors": []}

    def test_invalid_payload_exits_one(
        self, tmp_path: Path, founder_payload: dict[str, Any], capsys: pytest.CaptureFixture[str]
    ) -> None:
        payload = {**founder_payload, "email": "not-an-email"}
        assert main([_write(tmp_path, payload), "--completion"]) == 1
        output = json.loads(capsys.readouterr().out)
        assert output["isValid"] is False
        assert [error["field"] for error in output["errors"]] == ["email"]
        assert output["completion"] == 100

    def test_unreadable_file_exits_two(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.json")]) == 2

    def test_non_object_json_exits_two(self, tmp_path: Path) -> None:
        assert main([_write(tmp_path, ["not", "an", "object"])]) == 2
