#!/usr/bin/env python3
"""Valida um payload de aplicação (JSON) sem submeter.

Uso:
    python scripts/validate_application.py aplicacao.json
    python scripts/validate_application.py aplicacao.json --completion

Imprime ``{"isValid": ..., "errors": [...]}`` e sai com código 1 quando
houver erros (2 para arquivo ilegível).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from app.services import FormValidator


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("payload", type=Path, help="Arquivo JSON com o payload da aplicação.")
    parser.add_argument(
        "--completion",
        action="store_true",
        help="Inclui o percentual de campos obrigatórios preenchidos.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        raw = json.loads(args.payload.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"payload ilegível: {exc}", file=sys.stderr)
        return 2
    if not isinstance(raw, dict):
        print("payload deve ser um objeto JSON", file=sys.stderr)
        return 2

    validator = FormValidator()
    result = validator.validate(raw)
    output = result.to_dict()
    if args.completion:
        output["completion"] = validator.completion(raw)
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
