"""Account related dependency providers."""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.container import ApplicationContainer
from roster.infrastructure.database.repositories import SqlAccountRepository
from roster.modules.accounts import (
    AccountService,
    CredentialStore,
    FederatedIdentityResolver,
    GoogleTokenVerifier,
    HeaderIdentityResolver,
    SchemaCapabilities,
)

from .database import get_app_container, get_db_session

IDENTITY_HEADER = "X-User-Email"


async def get_schema_capabilities(
    container: ApplicationContainer = Depends(get_app_container),
) -> SchemaCapabilities:
    return await container.schema_detector.detect()


def get_account_repository(
    db: AsyncSession = Depends(get_db_session),
    capabilities: SchemaCapabilities = Depends(get_schema_capabilities),
    container: ApplicationContainer = Depends(get_app_container),
) -> SqlAccountRepository:
    return SqlAccountRepository(
        db,
        capabilities.column_set,
        timeout=container.settings.database.operation_timeout,
    )


def get_credential_store(
    repository: SqlAccountRepository = Depends(get_account_repository),
    container: ApplicationContainer = Depends(get_app_container),
) -> CredentialStore:
    return CredentialStore(repository, container.password_hasher)


def get_account_service(
    credentials: CredentialStore = Depends(get_credential_store),
    container: ApplicationContainer = Depends(get_app_container),
) -> AccountService:
    return AccountService(credentials, container.settings.min_password_length)


def get_federated_resolver(
    repository: SqlAccountRepository = Depends(get_account_repository),
    capabilities: SchemaCapabilities = Depends(get_schema_capabilities),
) -> FederatedIdentityResolver:
    return FederatedIdentityResolver(repository, capabilities)


def get_token_verifier(
    container: ApplicationContainer = Depends(get_app_container),
) -> GoogleTokenVerifier:
    return container.token_verifier


async def get_current_account_id(
    caller_email: Optional[str] = Header(default=None, alias=IDENTITY_HEADER),
    repository: SqlAccountRepository = Depends(get_account_repository),
) -> int:
    """Resolve the trusted caller email header to an account id."""
    return await HeaderIdentityResolver(repository).resolve(caller_email)


__all__ = [
    "IDENTITY_HEADER",
    "get_account_repository",
    "get_account_service",
    "get_credential_store",
    "get_current_account_id",
    "get_federated_resolver",
    "get_schema_capabilities",
    "get_token_verifier",
]
