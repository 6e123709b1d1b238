"""Use cases de submissão de aplicações (founder e investidor)."""

from app.use_cases.applications.backoff_policy import BackoffPolicy
from app.use_cases.applications.submission_orchestrator import (
    StatusStream,
    SubmissionOrchestrator,
)

__all__ = ["BackoffPolicy", "StatusStream", "SubmissionOrchestrator"]
