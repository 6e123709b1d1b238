"""Connectors HTTP dos colaboradores do intake (persistência e upload)."""

from api.connectors.intake.applications_client import HttpApplicationStore
from api.connectors.intake.http_base import HttpClientConfig, IntakeHttpClient
from api.connectors.intake.uploads_client import HttpUploadClient

__all__ = [
    "HttpApplicationStore",
    "HttpClientConfig",
    "HttpUploadClient",
    "IntakeHttpClient",
]
