"""Fake de notificador pós-submissão."""

from __future__ import annotations

from app.domain.submission import ApplicationSubmittedEvent


class FakeNotifier:
    """Registra eventos recebidos; opcionalmente falha."""

    def __init__(self, name: str = "fake", error: Exception | None = None) -> None:
        self._name = name
        self._error = error
        self.events: list[ApplicationSubmittedEvent] = []

    @property
    def name(self) -> str:
        return self._name

    async def notify(self, event: ApplicationSubmittedEvent) -> None:
        self.events.append(event)
        if self._error is not None:
            raise self._error
