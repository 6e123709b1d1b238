"""Protocolos e contratos do core da aplicação."""

from .application_store import ApplicationStoreProtocol
from .notifier import NotifierProtocol
from .upload_client import UploadClientProtocol

__all__ = [
    "ApplicationStoreProtocol",
    "NotifierProtocol",
    "UploadClientProtocol",
]
