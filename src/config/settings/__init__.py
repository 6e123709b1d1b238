"""Agregador de settings do Arena Intake.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)
from config.settings.intake import (
    IntakeSettings,
    StoreBackend,
    get_intake_settings,
)
from config.settings.notifications import (
    NotificationSettings,
    get_notification_settings,
)
from config.settings.uploads import (
    UploadSettings,
    get_upload_settings,
)

__all__ = [
    "BaseSettings",
    "Environment",
    "FirestoreSettings",
    "IntakeSettings",
    "NotificationSettings",
    "StoreBackend",
    "UploadSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_intake_settings",
    "get_notification_settings",
    "get_upload_settings",
]
