"""Service orchestrators."""

from .auth_service import AuthService
from .document_service import DocumentService
from .ingestion_service import IngestionService, build_simulated_advance
from .user_service import UserService

__all__ = [
    "AuthService",
    "DocumentService",
    "IngestionService",
    "UserService",
    "build_simulated_advance",
]
