"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Optional, Protocol

from .models import Account, AccountColumnSet


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence.

    Email lookups are case-insensitive. Every method raises
    ``StorageUnavailable`` when the store fails or times out.
    """

    column_set: AccountColumnSet

    async def get_by_id(self, account_id: int) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def get_by_subject(self, subject_id: str) -> Account | None:
        ...

    async def email_exists(self, email: str) -> bool:
        ...

    async def create_account(
        self,
        *,
        display_name: str,
        email: str,
        password_hash: str,
        federated_subject_id: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> int:
        """Insert a row and return its id; raises ``DuplicateEmail`` on a unique violation."""
        ...

    async def link_subject(self, account_id: int, subject_id: str) -> bool:
        """Set the federated subject only where none is linked yet."""
        ...

    async def set_avatar_url(self, account_id: int, avatar_url: str) -> None:
        ...

    async def update_profile(
        self,
        account_id: int,
        *,
        display_name: str,
        avatar_url: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> bool:
        ...

    async def set_tutorial_seen(self, account_id: int, seen: bool) -> bool:
        ...

    async def commit(self) -> None:
        ...
