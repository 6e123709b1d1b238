"""Restrições de tipo e tamanho por finalidade de upload.

- pitch_deck: PDF, JPEG ou PNG, até 25 MB
- verification: apenas PDF, até 10 MB

O tipo é checado antes do tamanho: um arquivo de tipo inválido é
rejeitado como INVALID_FILE_TYPE independentemente do tamanho. Não há
inspeção de conteúdo (magic bytes); MIME e extensão são declarativos.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from app.domain.uploads import UploadConstraints, UploadErrorCode, UploadPurpose
from config.settings import UploadSettings, get_upload_settings
from utils.errors import FileUploadError

if TYPE_CHECKING:
    from app.domain.uploads import AttachedFile

MAX_FILE_NAME_LENGTH = 255

# Extensão -> MIME correspondente
EXTENSION_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def constraints_for(
    purpose: UploadPurpose | str,
    settings: UploadSettings | None = None,
) -> UploadConstraints:
    """Restrições aplicáveis à finalidade.

    Args:
        purpose: pitch_deck ou verification.
        settings: UploadSettings (usa o cache de env se omitido).
    """
    settings = settings or get_upload_settings()
    if UploadPurpose(purpose) is UploadPurpose.VERIFICATION:
        return UploadConstraints(
            allowed_mime_types=("application/pdf",),
            allowed_extensions=(".pdf",),
            max_size_bytes=settings.verification_max_bytes,
            label="verification document",
        )
    return UploadConstraints(
        allowed_mime_types=("application/pdf", "image/jpeg", "image/png"),
        allowed_extensions=(".pdf", ".jpg", ".jpeg", ".png"),
        max_size_bytes=settings.pitch_deck_max_bytes,
        label="pitch deck",
    )


def check_upload_constraints(
    file_name: str,
    mime_type: str,
    size_bytes: int,
    constraints: UploadConstraints,
) -> None:
    """Valida nome, tipo e tamanho declarados.

    Raises:
        FileUploadError: INVALID_FILE_NAME, INVALID_FILE_TYPE, EMPTY_FILE
            ou FILE_TOO_LARGE (nesta ordem de precedência).
    """
    if not file_name.strip() or len(file_name) > MAX_FILE_NAME_LENGTH:
        raise FileUploadError(
            UploadErrorCode.INVALID_FILE_NAME,
            f"File name must be between 1 and {MAX_FILE_NAME_LENGTH} characters",
        )

    normalized_mime = mime_type.strip().lower()
    extension = PurePosixPath(file_name.strip().lower().replace("\\", "/")).suffix
    expected_mime = EXTENSION_MIME_TYPES.get(extension)
    if (
        normalized_mime not in constraints.allowed_mime_types
        or extension not in constraints.allowed_extensions
        or expected_mime != normalized_mime
    ):
        raise FileUploadError(UploadErrorCode.INVALID_FILE_TYPE, _type_message(constraints))

    if size_bytes <= 0:
        raise FileUploadError(UploadErrorCode.EMPTY_FILE, "The selected file is empty")

    if size_bytes > constraints.max_size_bytes:
        raise FileUploadError(
            UploadErrorCode.FILE_TOO_LARGE,
            f"The {constraints.label} must be {_format_megabytes(constraints.max_size_bytes)} or smaller",
        )


def check_attached_file(file: AttachedFile, constraints: UploadConstraints) -> None:
    """Atalho de ``check_upload_constraints`` para arquivo anexado."""
    check_upload_constraints(file.file_name, file.content_type, file.size_bytes, constraints)


def _type_message(constraints: UploadConstraints) -> str:
    if constraints.allowed_mime_types == ("application/pdf",):
        return f"Only PDF files are allowed for the {constraints.label}"
    return f"The {constraints.label} must be a PDF, JPEG or PNG file"


def _format_megabytes(size_bytes: int) -> str:
    megabytes = size_bytes / (1024 * 1024)
    return f"{megabytes:g}MB"
