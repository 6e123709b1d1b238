"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    FileUploadError,
    IntakeError,
    InvalidPayloadError,
    NetworkError,
    PermanentServerError,
    RateLimitedError,
    ReferenceDataError,
    SpamRejectedError,
    TransientServerError,
)

__all__ = [
    "FileUploadError",
    "IntakeError",
    "InvalidPayloadError",
    "NetworkError",
    "PermanentServerError",
    "RateLimitedError",
    "ReferenceDataError",
    "SpamRejectedError",
    "TransientServerError",
]
