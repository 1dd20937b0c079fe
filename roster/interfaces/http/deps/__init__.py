"""Reusable FastAPI dependencies."""

from .database import get_app_container, get_db_session
from .account import (
    IDENTITY_HEADER,
    get_account_repository,
    get_account_service,
    get_credential_store,
    get_current_account_id,
    get_federated_resolver,
    get_schema_capabilities,
    get_token_verifier,
)

__all__ = [
    "IDENTITY_HEADER",
    "get_app_container",
    "get_db_session",
    "get_account_repository",
    "get_account_service",
    "get_credential_store",
    "get_current_account_id",
    "get_federated_resolver",
    "get_schema_capabilities",
    "get_token_verifier",
]
