"""Sanitização de nomes de arquivo e montagem da referência no storage.

Referência final: ``{prefix}/{uploads|verification}/{timestamp_ms}-{nome}``.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime

from app.domain.uploads import UploadPurpose

MAX_SAFE_NAME_LENGTH = 128
FALLBACK_NAME = "upload"

_UNSAFE_CHARS = re.compile(r"[^\w.\-]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")

_PURPOSE_DIRECTORIES: dict[UploadPurpose, str] = {
    UploadPurpose.PITCH_DECK: "uploads",
    UploadPurpose.VERIFICATION: "verification",
}


def sanitize_file_name(file_name: str) -> str:
    """Remove path traversal, não-ASCII e caracteres de controle.

    Exemplos:
        >>> sanitize_file_name("../../etc/passwd")
        'passwd'
        >>> sanitize_file_name("Relatório Final (v2).pdf")
        'Relatorio_Final_v2_.pdf'
    """
    base = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    base = base.replace("..", "")
    ascii_only = (
        unicodedata.normalize("NFKD", base).encode("ascii", "ignore").decode("ascii")
    )
    printable = "".join(ch for ch in ascii_only if ch.isprintable())
    safe = _UNSAFE_CHARS.sub("_", printable)
    safe = _REPEATED_UNDERSCORES.sub("_", safe).lstrip(".")

    if len(safe) > MAX_SAFE_NAME_LENGTH:
        stem, dot, suffix = safe.rpartition(".")
        if dot and len(suffix) <= 10:
            safe = stem[: MAX_SAFE_NAME_LENGTH - len(suffix) - 1] + "." + suffix
        else:
            safe = safe[:MAX_SAFE_NAME_LENGTH]

    if not safe.strip("._-"):
        return FALLBACK_NAME
    return safe


def build_file_ref(
    prefix: str,
    purpose: UploadPurpose | str,
    safe_name: str,
    now: datetime,
) -> str:
    """Monta a referência namespaced e com timestamp (evita colisão)."""
    directory = _PURPOSE_DIRECTORIES[UploadPurpose(purpose)]
    timestamp_ms = int(now.timestamp() * 1000)
    return f"{prefix.strip('/')}/{directory}/{timestamp_ms}-{safe_name}"
