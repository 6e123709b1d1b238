"""Política de retry com backoff exponencial e jitter.

delay(n) = min(base * 2^(n-1), max) * (1 ± jitter), para a tentativa n
que falhou (n >= 1). Sleep e random são injetáveis para testes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from config.settings import IntakeSettings


@dataclass(frozen=True, slots=True)
class BackoffPolicy:
    """Parâmetros de retry da persistência.

    Attributes:
        max_attempts: Total de tentativas (inclui a primeira).
        base_seconds: Delay antes da segunda tentativa.
        max_seconds: Teto do delay.
        jitter: Fração aleatória aplicada ao delay (0.2 = ±20%).
    """

    max_attempts: int = 3
    base_seconds: float = 1.0
    max_seconds: float = 8.0
    jitter: float = 0.2

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_seconds < 0 or self.max_seconds < self.base_seconds:
            raise ValueError("expected 0 <= base_seconds <= max_seconds")
        if not 0.0 <= self.jitter <= 1.0:
            raise ValueError("jitter must be between 0 and 1")

    @classmethod
    def from_settings(cls, settings: IntakeSettings) -> BackoffPolicy:
        return cls(
            max_attempts=settings.max_attempts,
            base_seconds=settings.backoff_base_seconds,
            max_seconds=settings.backoff_max_seconds,
            jitter=settings.backoff_jitter,
        )

    def should_retry(self, attempt: int) -> bool:
        """Indica se há nova tentativa após a tentativa ``attempt`` falhar."""
        return attempt < self.max_attempts

    def delay_for(self, attempt: int, rng: Callable[[], float] = random.random) -> float:
        """Delay antes da tentativa ``attempt + 1``.

        Args:
            attempt: Tentativa que falhou (1-based).
            rng: Fonte uniforme em [0, 1).

        Returns:
            Delay em segundos (>= 0).
        """
        raw = min(self.base_seconds * (2 ** max(attempt - 1, 0)), self.max_seconds)
        spread = raw * self.jitter * (2 * rng() - 1)
        return max(0.0, raw + spread)
