"""Find-or-create of local accounts from federated identities."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from roster.core.crypto import NO_PASSWORD

from .exceptions import AccountError, FederationUpsertFailed
from .models import Account, SchemaCapabilities
from .repository import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FederatedIdentityResolver:
    """Maps a verified third-party identity onto exactly one local account.

    Lookup order is subject id, then email, then insert. The whole resolution
    commits once at the end, so a failure leaves no partial link behind. When
    two resolutions race on a new email the storage unique constraint lets one
    insert through and the other surfaces ``FederationUpsertFailed``; callers
    retry the whole resolution.
    """

    repository: AccountRepository
    capabilities: SchemaCapabilities

    async def resolve(
        self,
        display_name: str,
        email: str,
        subject_id: str,
        avatar_url: str = "",
    ) -> Account:
        email = email.strip().lower()
        subject_id = (subject_id or "").strip()
        avatar_url = (avatar_url or "").strip()
        try:
            account = await self._resolve(display_name, email, subject_id, avatar_url)
            await self.repository.commit()
        except AccountError as exc:
            logger.error("Federated upsert for %s failed: %r", email, exc, exc_info=exc)
            raise FederationUpsertFailed("federated sign-in failed") from exc
        return account

    async def _resolve(self, display_name: str, email: str, subject_id: str, avatar_url: str) -> Account:
        if self.capabilities.supports_federated_id and subject_id:
            account = await self.repository.get_by_subject(subject_id)
            if account is not None:
                return account

        account = await self.repository.get_by_email(email)
        if account is not None:
            return await self._claim(account, subject_id, avatar_url)

        name = display_name.strip() or email
        account_id = await self.repository.create_account(
            display_name=name,
            email=email,
            password_hash=NO_PASSWORD,
            federated_subject_id=subject_id if self.capabilities.supports_federated_id else None,
            avatar_url=avatar_url if self.capabilities.supports_avatar else None,
        )
        logger.info("Created federated account %s for %s", account_id, email)
        return Account(
            id=account_id,
            display_name=name,
            email=email,
            password_hash=NO_PASSWORD,
            federated_subject_id=(subject_id or None) if self.capabilities.supports_federated_id else None,
            avatar_url=avatar_url if self.capabilities.supports_avatar else "",
        )

    async def _claim(self, account: Account, subject_id: str, avatar_url: str) -> Account:
        """Attach this identity to an account found by email."""
        if self.capabilities.supports_federated_id and subject_id and not account.federated_subject_id:
            if await self.repository.link_subject(account.id, subject_id):
                account.federated_subject_id = subject_id
                logger.info("Linked federated subject to account %s", account.id)

        if self.capabilities.supports_avatar and avatar_url and avatar_url != account.avatar_url:
            await self.repository.set_avatar_url(account.id, avatar_url)
            account.avatar_url = avatar_url
        return account


__all__ = ["FederatedIdentityResolver"]
