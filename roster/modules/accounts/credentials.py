"""Password credentials: hashing, verification and uniqueness checks."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from roster.core.crypto import PasswordHasher

from .exceptions import AuthenticationFailed
from .models import Account
from .repository import AccountRepository


@dataclass(slots=True)
class CredentialStore:
    repository: AccountRepository
    hasher: PasswordHasher

    async def exists(self, email: str) -> bool:
        return await self.repository.email_exists(email)

    async def create(self, display_name: str, email: str, password_hash: str) -> int:
        """Insert a password account; ``DuplicateEmail`` if the store rejects the email."""
        return await self.repository.create_account(
            display_name=display_name,
            email=email,
            password_hash=password_hash,
        )

    async def verify(self, email: str, password: str) -> Account:
        account = await self.repository.get_by_email(email)
        # Unknown and password-less accounts cost one comparison like a real mismatch.
        if account is None or not account.has_local_password:
            await asyncio.to_thread(self.hasher.burn, password)
            raise AuthenticationFailed()
        matches = await asyncio.to_thread(self.hasher.verify_password, password, account.password_hash)
        if not matches:
            raise AuthenticationFailed()
        return account

    async def hash(self, password: str) -> str:
        # bcrypt is CPU bound; keep it off the event loop.
        return await asyncio.to_thread(self.hasher.hash_password, password)


__all__ = ["CredentialStore"]
