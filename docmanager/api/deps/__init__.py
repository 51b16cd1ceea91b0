"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_auth_service,
    get_blob_store,
    get_current_actor,
    get_document_service,
    get_ingestion_service,
    get_scheduler,
    get_service_cache,
    get_session_factory,
    get_settings_dependency,
    get_token_issuer,
    get_user_service,
)

__all__ = [
    "get_auth_service",
    "get_blob_store",
    "get_current_actor",
    "get_document_service",
    "get_ingestion_service",
    "get_scheduler",
    "get_service_cache",
    "get_session_factory",
    "get_settings_dependency",
    "get_token_issuer",
    "get_user_service",
]
