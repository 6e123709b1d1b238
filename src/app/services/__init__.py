"""Serviços de aplicação.

Validação (campo, relações, formulário), detecção de spam e a fachada
exposta do intake. Sem IO direto; implementações de IO ficam em app/infra/.
"""

from app.services.application_intake import ApplicationIntakeService
from app.services.cross_field_validator import CrossFieldValidator
from app.services.field_validator import FieldValidator
from app.services.form_validator import FormValidator
from app.services.spam_detector import SpamCheckResult, SpamDetector

__all__ = [
    "ApplicationIntakeService",
    "CrossFieldValidator",
    "FieldValidator",
    "FormValidator",
    "SpamCheckResult",
    "SpamDetector",
]
