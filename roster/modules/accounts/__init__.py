"""Account domain services and models."""

from .credentials import CredentialStore
from .exceptions import (
    AccountError,
    AccountNotFoundError,
    AuthenticationFailed,
    ClaimsMissing,
    DuplicateEmail,
    FederationUpsertFailed,
    IdentityProviderNotConfigured,
    IdentityProviderUnavailable,
    StorageUnavailable,
    TokenInvalid,
    Unauthenticated,
    ValidationFailed,
    ValidationReason,
)
from .federation import FederatedIdentityResolver
from .identity import GoogleTokenVerifier, HeaderIdentityResolver
from .models import (
    UNSET,
    Account,
    AccountColumnSet,
    FederatedIdentity,
    ProfileUpdateInput,
    SchemaCapabilities,
)
from .service import AccountService

__all__ = [
    "Account",
    "AccountColumnSet",
    "AccountError",
    "AccountNotFoundError",
    "AccountService",
    "AuthenticationFailed",
    "ClaimsMissing",
    "CredentialStore",
    "DuplicateEmail",
    "FederatedIdentity",
    "FederatedIdentityResolver",
    "FederationUpsertFailed",
    "GoogleTokenVerifier",
    "HeaderIdentityResolver",
    "IdentityProviderNotConfigured",
    "IdentityProviderUnavailable",
    "ProfileUpdateInput",
    "SchemaCapabilities",
    "StorageUnavailable",
    "TokenInvalid",
    "UNSET",
    "Unauthenticated",
    "ValidationFailed",
    "ValidationReason",
]
