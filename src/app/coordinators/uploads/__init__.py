"""Coordenação de upload seguro de arquivos (pitch deck e verificação)."""

from app.coordinators.uploads.constraints import (
    check_attached_file,
    check_upload_constraints,
    constraints_for,
)
from app.coordinators.uploads.coordinator import FileUploadCoordinator
from app.coordinators.uploads.file_names import build_file_ref, sanitize_file_name

__all__ = [
    "FileUploadCoordinator",
    "build_file_ref",
    "check_attached_file",
    "check_upload_constraints",
    "constraints_for",
    "sanitize_file_name",
]
