"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from sqlalchemy import exists, func, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.infrastructure.database.models import accounts_table as accounts
from roster.modules.accounts.exceptions import AccountError, DuplicateEmail, StorageUnavailable
from roster.modules.accounts.models import Account, AccountColumnSet
from roster.modules.accounts.repository import AccountRepository

_BASE_COLUMNS = (
    accounts.c.id,
    accounts.c.display_name,
    accounts.c.email,
    accounts.c.password_hash,
    accounts.c.tutorial_seen,
)

SELECT_COLUMNS: dict[AccountColumnSet, tuple] = {
    AccountColumnSet.BASIC: _BASE_COLUMNS,
    AccountColumnSet.WITH_SUBJECT: _BASE_COLUMNS + (accounts.c.federated_subject_id,),
    AccountColumnSet.WITH_AVATAR: _BASE_COLUMNS + (accounts.c.avatar_url,),
    AccountColumnSet.FULL: _BASE_COLUMNS + (accounts.c.federated_subject_id, accounts.c.avatar_url),
}


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy Core statements.

    Every statement only names the columns of ``column_set`` so the same code
    runs against each migration revision of the table.
    """

    def __init__(
        self,
        session: AsyncSession,
        column_set: AccountColumnSet = AccountColumnSet.FULL,
        *,
        timeout: float = 5.0,
    ) -> None:
        self._session = session
        self.column_set = column_set
        self._timeout = timeout

    async def get_by_id(self, account_id: int) -> Account | None:
        stmt = select(*SELECT_COLUMNS[self.column_set]).where(accounts.c.id == account_id)
        return await self._fetch_one(stmt)

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(*SELECT_COLUMNS[self.column_set]).where(func.lower(accounts.c.email) == email.lower())
        return await self._fetch_one(stmt)

    async def get_by_subject(self, subject_id: str) -> Account | None:
        if not self.column_set.has_subject:
            return None
        stmt = select(*SELECT_COLUMNS[self.column_set]).where(accounts.c.federated_subject_id == subject_id)
        return await self._fetch_one(stmt)

    async def email_exists(self, email: str) -> bool:
        stmt = select(exists().where(func.lower(accounts.c.email) == email.lower()))
        result = await self._execute(stmt)
        return bool(result.scalar())

    async def create_account(
        self,
        *,
        display_name: str,
        email: str,
        password_hash: str,
        federated_subject_id: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> int:
        subject = federated_subject_id or None
        avatar = avatar_url or None
        if self.column_set is AccountColumnSet.FULL:
            stmt = insert(accounts).values(
                display_name=display_name,
                email=email,
                password_hash=password_hash,
                federated_subject_id=subject,
                avatar_url=avatar,
            )
        elif self.column_set is AccountColumnSet.WITH_SUBJECT:
            stmt = insert(accounts).values(
                display_name=display_name,
                email=email,
                password_hash=password_hash,
                federated_subject_id=subject,
            )
        elif self.column_set is AccountColumnSet.WITH_AVATAR:
            stmt = insert(accounts).values(
                display_name=display_name,
                email=email,
                password_hash=password_hash,
                avatar_url=avatar,
            )
        else:
            stmt = insert(accounts).values(
                display_name=display_name,
                email=email,
                password_hash=password_hash,
            )

        result = await self._execute(stmt, conflict=DuplicateEmail(email))
        return int(result.inserted_primary_key[0])

    async def link_subject(self, account_id: int, subject_id: str) -> bool:
        if not self.column_set.has_subject:
            return False
        stmt = (
            update(accounts)
            .where(accounts.c.id == account_id, accounts.c.federated_subject_id.is_(None))
            .values(federated_subject_id=subject_id)
        )
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def set_avatar_url(self, account_id: int, avatar_url: str) -> None:
        if not self.column_set.has_avatar:
            return
        stmt = update(accounts).where(accounts.c.id == account_id).values(avatar_url=avatar_url)
        await self._execute(stmt)

    async def update_profile(
        self,
        account_id: int,
        *,
        display_name: str,
        avatar_url: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> bool:
        values: dict[str, Any] = {"display_name": display_name}
        if avatar_url is not None and self.column_set.has_avatar:
            values["avatar_url"] = avatar_url
        if password_hash is not None:
            values["password_hash"] = password_hash
        stmt = update(accounts).where(accounts.c.id == account_id).values(**values)
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def set_tutorial_seen(self, account_id: int, seen: bool) -> bool:
        stmt = update(accounts).where(accounts.c.id == account_id).values(tutorial_seen=seen)
        result = await self._execute(stmt)
        return result.rowcount > 0

    async def commit(self) -> None:
        try:
            await asyncio.wait_for(self._session.commit(), timeout=self._timeout)
        except (SQLAlchemyError, asyncio.TimeoutError) as exc:
            raise StorageUnavailable("commit failed") from exc

    async def _execute(self, stmt: Any, *, conflict: AccountError | None = None) -> Any:
        """Run ``stmt`` within the time budget.

        A constraint violation raises ``conflict`` when one is given; every
        other failure becomes ``StorageUnavailable``.
        """
        try:
            return await asyncio.wait_for(self._session.execute(stmt), timeout=self._timeout)
        except IntegrityError as exc:
            if conflict is not None:
                raise conflict from exc
            raise StorageUnavailable("constraint violation") from exc
        except asyncio.TimeoutError as exc:
            raise StorageUnavailable("storage operation timed out") from exc
        except SQLAlchemyError as exc:
            raise StorageUnavailable("storage operation failed") from exc

    async def _fetch_one(self, stmt: Any) -> Account | None:
        result = await self._execute(stmt)
        return self._to_domain(result.first())

    @staticmethod
    def _to_domain(row: Row | None) -> Account | None:
        if row is None:
            return None
        mapping = row._mapping
        return Account(
            id=int(mapping["id"]),
            display_name=mapping["display_name"] or "",
            email=mapping["email"],
            password_hash=mapping["password_hash"] or "",
            federated_subject_id=mapping.get("federated_subject_id"),
            avatar_url=mapping.get("avatar_url") or "",
            tutorial_seen=bool(mapping["tutorial_seen"]),
        )
