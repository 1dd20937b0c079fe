"""Translation of domain errors into HTTP responses.

Each error kind maps to one short, stable message. Failures that could carry
storage or provider internals are logged and answered generically.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from roster.modules.accounts.exceptions import (
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
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "internal server error"

ERROR_RESPONSES: dict[type[AccountError], tuple[int, str]] = {
    DuplicateEmail: (status.HTTP_409_CONFLICT, "email already registered"),
    AuthenticationFailed: (status.HTTP_401_UNAUTHORIZED, "invalid email or password"),
    Unauthenticated: (status.HTTP_401_UNAUTHORIZED, "not authenticated"),
    AccountNotFoundError: (status.HTTP_401_UNAUTHORIZED, "not authenticated"),
    TokenInvalid: (status.HTTP_401_UNAUTHORIZED, "invalid identity token"),
    ClaimsMissing: (status.HTTP_401_UNAUTHORIZED, "identity token is missing required claims"),
    FederationUpsertFailed: (status.HTTP_500_INTERNAL_SERVER_ERROR, "google sign-in failed"),
    IdentityProviderNotConfigured: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
    IdentityProviderUnavailable: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
    StorageUnavailable: (status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR),
}


def _lookup(exc: AccountError) -> tuple[int, str]:
    for cls in type(exc).__mro__:
        if cls in ERROR_RESPONSES:
            return ERROR_RESPONSES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    if isinstance(exc, ValidationFailed):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message, "field": exc.field},
        )

    status_code, message = _lookup(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed with %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc_info=exc,
        )
    return JSONResponse(status_code=status_code, content={"detail": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first offending field as a 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [part for part in first.get("loc", ()) if part != "body"]
    field = str(loc[-1]) if loc else None
    if first.get("type") == "missing":
        message = f"{field} is required" if field else "field is required"
    elif first.get("type") in ("json_invalid", "model_attributes_type", "dict_type"):
        message = "invalid JSON"
        field = None
    else:
        message = first.get("msg", "invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message, "field": field},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


__all__ = ["ERROR_RESPONSES", "register_exception_handlers"]
