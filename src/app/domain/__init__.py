"""Modelos de domínio do intake de aplicações."""

from app.domain.applications import (
    ApplicationPayload,
    FounderApplication,
    InvestorApplication,
    ValidationContext,
    parse_application_payload,
)
from app.domain.enums import ApplicationKind, InvestorMode
from app.domain.idempotency import derive_idempotency_key
from app.domain.submission import (
    ApplicationSubmittedEvent,
    ErrorCategory,
    SubmissionStatus,
)
from app.domain.uploads import (
    AttachedFile,
    FileUploadTicket,
    UploadPurpose,
    UploadResult,
)
from app.domain.validation import (
    FormValidationResult,
    ValidationCode,
    ValidationError,
)

__all__ = [
    "ApplicationKind",
    "ApplicationPayload",
    "ApplicationSubmittedEvent",
    "AttachedFile",
    "ErrorCategory",
    "FileUploadTicket",
    "FormValidationResult",
    "FounderApplication",
    "InvestorApplication",
    "InvestorMode",
    "SubmissionStatus",
    "UploadPurpose",
    "UploadResult",
    "ValidationCode",
    "ValidationContext",
    "ValidationError",
    "derive_idempotency_key",
    "parse_application_payload",
]
