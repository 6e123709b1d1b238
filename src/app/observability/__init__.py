"""Observabilidade: correlation id por tentativa e métricas via logs.

Uso:
    from app.observability import correlation_scope, get_correlation_id
    from app.observability import record_latency, record_submission_outcome
"""

from app.observability.correlation import (
    correlation_scope,
    generate_attempt_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_notification,
    record_submission_outcome,
    record_upload,
)

__all__ = [
    "correlation_scope",
    "generate_attempt_id",
    "get_correlation_id",
    "record_latency",
    "record_notification",
    "record_submission_outcome",
    "record_upload",
    "reset_correlation_id",
    "set_correlation_id",
]
