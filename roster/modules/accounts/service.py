"""Domain services for account management."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from . import normalizer
from .credentials import CredentialStore
from .exceptions import AccountNotFoundError, DuplicateEmail
from .models import UNSET, Account, ProfileUpdateInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AccountService:
    """Encapsulates the password-path account use cases.

    Inputs are re-validated here even when the HTTP layer already did so.
    """

    credentials: CredentialStore
    min_password_length: int = 8

    @property
    def repository(self) -> AccountRepository:
        return self.credentials.repository

    async def register(self, name: str, email: str, password: str) -> int:
        display_name = normalizer.normalize_name(name)
        email = normalizer.normalize_email(email)
        normalizer.validate_password(password, self.min_password_length)

        if await self.credentials.exists(email):
            raise DuplicateEmail(email)

        password_hash = await self.credentials.hash(password)
        account_id = await self.credentials.create(display_name, email, password_hash)
        await self.repository.commit()
        logger.info("Registered account %s", account_id)
        return account_id

    async def login(self, email: str, password: str) -> Account:
        email = normalizer.normalize_email(email)
        return await self.credentials.verify(email, password or "")

    async def get_profile(self, account_id: int) -> Account:
        account = await self.repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def update_profile(self, account_id: int, payload: ProfileUpdateInput) -> None:
        display_name = normalizer.normalize_name(payload.display_name)

        avatar_url = None
        if payload.avatar_url is not UNSET and payload.avatar_url is not None:
            avatar_url = payload.avatar_url.strip()

        password_hash = None
        if payload.password is not UNSET and payload.password and payload.password.strip():
            normalizer.validate_password(payload.password, self.min_password_length)
            password_hash = await self.credentials.hash(payload.password)

        updated = await self.repository.update_profile(
            account_id,
            display_name=display_name,
            avatar_url=avatar_url,
            password_hash=password_hash,
        )
        if not updated:
            raise AccountNotFoundError(account_id)
        await self.repository.commit()

    async def set_tutorial_seen(self, account_id: int, seen: bool = True) -> None:
        if not await self.repository.set_tutorial_seen(account_id, seen):
            raise AccountNotFoundError(account_id)
        await self.repository.commit()
