"""Account domain specific exceptions."""

from __future__ import annotations

import enum


class AccountError(Exception):
    """Base class for account domain errors."""


class ValidationReason(str, enum.Enum):
    NAME_TOO_SHORT = "name_too_short"
    EMAIL_REQUIRED = "email_required"
    EMAIL_MALFORMED = "email_malformed"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_TOO_LONG = "password_too_long"
    PASSWORD_CONTAINS_WHITESPACE = "password_contains_whitespace"


class ValidationFailed(AccountError):
    """Raised when an input field does not satisfy its rule."""

    def __init__(self, field: str, reason: ValidationReason, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.message = message


class DuplicateEmail(AccountError):
    """Raised when registering an email that already belongs to an account."""


class AuthenticationFailed(AccountError):
    """Raised for an unknown email or a wrong password; the two are not distinguished."""


class Unauthenticated(AccountError):
    """Raised when the caller identity is missing or maps to no account."""


class TokenInvalid(AccountError):
    """Raised when an identity token fails signature, issuer or audience checks."""


class ClaimsMissing(AccountError):
    """Raised when a valid identity token lacks the subject or email claim."""


class IdentityProviderNotConfigured(AccountError):
    """Raised when federated sign-in is attempted without an expected audience."""


class IdentityProviderUnavailable(AccountError):
    """Raised when the identity provider cannot be reached to check a token."""


class FederationUpsertFailed(AccountError):
    """Raised when a federated find-or-create cannot be completed.

    The underlying cause is chained as ``__cause__``.
    """


class StorageUnavailable(AccountError):
    """Raised when the account store fails or exceeds its time budget."""


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""
