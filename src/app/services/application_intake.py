"""Superfície exposta do motor de intake.

Operações:
- validate_field: validação inline de um campo (sem IO)
- validate_form: validação do formulário completo (sem IO)
- submit: submissão completa com status terminal
- upload_file: upload isolado em duas fases (nunca lança)
- form_completion: percentual de campos obrigatórios preenchidos
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.domain.applications import ValidationContext
from app.domain.enums import ApplicationKind

if TYPE_CHECKING:
    from app.coordinators.uploads import FileUploadCoordinator
    from app.domain.applications import FounderApplication, InvestorApplication
    from app.domain.submission import SubmissionStatus
    from app.domain.uploads import AttachedFile, UploadPurpose, UploadResult
    from app.domain.validation import FormValidationResult, ValidationError
    from app.services.form_validator import FormValidator
    from app.use_cases.applications import StatusStream, SubmissionOrchestrator


class ApplicationIntakeService:
    """Fachada do intake para a camada de apresentação.

    Uma instância por formulário: o orquestrador garante single-flight
    das submissões deste formulário.

    Args:
        form_validator: Validador de formulário (inclui o de campo).
        uploads: Coordenador de upload.
        orchestrator: Orquestrador de submissão.
    """

    def __init__(
        self,
        *,
        form_validator: FormValidator,
        uploads: FileUploadCoordinator,
        orchestrator: SubmissionOrchestrator,
    ) -> None:
        self._forms = form_validator
        self._uploads = uploads
        self._orchestrator = orchestrator

    @property
    def orchestrator(self) -> SubmissionOrchestrator:
        return self._orchestrator

    def validate_field(
        self,
        field: str,
        value: Any,
        context: ValidationContext | dict[str, Any] | None = None,
    ) -> list[ValidationError]:
        """Valida um campo isolado.

        Args:
            field: Nome do campo (snake_case).
            value: Valor bruto.
            context: ValidationContext ou dict com application_kind,
                mode e country.
        """
        if isinstance(context, dict):
            kind = context.get("application_kind")
            context = ValidationContext(
                application_kind=ApplicationKind(kind) if kind else None,
                mode=context.get("mode"),
                country=context.get("country"),
            )
        return self._forms.field_validator.validate(field, value, context)

    def validate_form(
        self, payload: FounderApplication | InvestorApplication | dict[str, Any]
    ) -> FormValidationResult:
        return self._forms.validate(payload)

    def form_completion(
        self, payload: FounderApplication | InvestorApplication | dict[str, Any]
    ) -> int:
        return self._forms.completion(payload)

    async def submit(
        self, payload: FounderApplication | InvestorApplication | dict[str, Any]
    ) -> SubmissionStatus:
        """Submete a aplicação e retorna o status terminal."""
        return await self._orchestrator.submit(payload)

    def watch(self) -> StatusStream:
        """Stream de status da próxima submissão (ou da atual)."""
        return self._orchestrator.watch()

    async def upload_file(
        self, file: AttachedFile, purpose: UploadPurpose | str
    ) -> UploadResult:
        return await self._uploads.upload_file(file, purpose)
