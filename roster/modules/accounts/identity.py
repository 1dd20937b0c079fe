"""Caller identity resolution.

Two trust boundaries exist:

* Google sign-in presents a signed ID token that is verified here against the
  configured audience.
* Every later request carries the caller's email in a header set by the
  already-authenticated client; it is only mapped to an account id, never
  re-verified.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from threading import RLock
from typing import Any, Iterator, Optional

import cachecontrol
import google.auth.exceptions
import google.auth.transport.requests
import google.oauth2.id_token
import requests

from .exceptions import (
    ClaimsMissing,
    IdentityProviderNotConfigured,
    IdentityProviderUnavailable,
    TokenInvalid,
    Unauthenticated,
)
from .models import FederatedIdentity
from .repository import AccountRepository

logger = logging.getLogger(__name__)

_sess: Optional[requests.Session] = None
"""Session that caches Google's signing certificates between verifications."""

_lock = RLock()
"""The cached session is not safe to share between threads."""


@contextmanager
def locked_session() -> Iterator[requests.Session]:
    global _sess
    with _lock:
        if _sess is None:
            _sess = cachecontrol.CacheControl(requests.session())
        yield _sess


class GoogleTokenVerifier:
    """Validates Google ID tokens and extracts the identity claims."""

    def __init__(self, audience: str, *, clock_skew_seconds: int = 60) -> None:
        self.audience = audience.strip()
        self.clock_skew_seconds = clock_skew_seconds

    async def verify(self, token: str) -> FederatedIdentity:
        if not self.audience:
            raise IdentityProviderNotConfigured("google client id is not configured")
        claims = await asyncio.to_thread(self._verify_sync, token)
        return self.identity_from_claims(claims)

    def _verify_sync(self, token: str) -> dict[str, Any]:
        try:
            with locked_session() as session:
                request = google.auth.transport.requests.Request(session=session)
                claims = google.oauth2.id_token.verify_oauth2_token(
                    token,
                    request,
                    self.audience,
                    clock_skew_in_seconds=self.clock_skew_seconds,
                )
        except google.auth.exceptions.TransportError as exc:
            logger.warning("Google signing certificates unavailable: %s", exc)
            raise IdentityProviderUnavailable("identity provider unreachable") from exc
        except (ValueError, google.auth.exceptions.GoogleAuthError) as exc:
            # Provider messages stay in the log, never in the response.
            logger.info("Rejected Google ID token: %s", exc)
            raise TokenInvalid("invalid identity token") from exc
        if not claims:
            raise TokenInvalid("invalid identity token")
        return claims

    @staticmethod
    def identity_from_claims(claims: dict[str, Any]) -> FederatedIdentity:
        subject = str(claims.get("sub") or "").strip()
        email = str(claims.get("email") or "").strip().lower()
        if not subject or not email:
            raise ClaimsMissing("identity token is missing required claims")
        name = str(claims.get("name") or "").strip() or email
        return FederatedIdentity(
            subject=subject,
            email=email,
            name=name,
            picture=str(claims.get("picture") or "").strip(),
        )


class HeaderIdentityResolver:
    """Maps a caller-supplied email to an account id."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    async def resolve(self, raw_email: Optional[str]) -> int:
        email = (raw_email or "").strip().lower()
        if not email:
            raise Unauthenticated("missing caller identity")
        account = await self._repository.get_by_email(email)
        if account is None:
            raise Unauthenticated("unknown caller identity")
        return account.id


__all__ = ["GoogleTokenVerifier", "HeaderIdentityResolver", "locked_session"]
