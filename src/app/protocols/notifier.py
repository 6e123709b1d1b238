"""Protocolo de notificação pós-submissão (fire-and-forget)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.submission import ApplicationSubmittedEvent


class NotifierProtocol(Protocol):
    """Contrato mínimo de notificação.

    Falhas são logadas pelo agendador de efeitos colaterais e nunca
    afetam o resultado da submissão.
    """

    @property
    def name(self) -> str: ...

    async def notify(self, event: ApplicationSubmittedEvent) -> None: ...
