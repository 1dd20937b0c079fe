"""Shared fixtures.

Every test gets its own SQLite file so concurrent sessions behave like
separate connections to one database.
"""
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport
from sqlalchemy import text

from roster.core.config import DatabaseSettings, GoogleSettings, SecuritySettings, Settings
from roster.core.container import ApplicationContainer
from roster.core.crypto import PasswordHasher
from roster.infrastructure.database import init_db
from roster.infrastructure.database.repositories import SqlAccountRepository
from roster.main import create_app
from roster.modules.accounts import AccountColumnSet, CredentialStore

GOOGLE_CLIENT_ID = "test-client"

# First migration revision: no federated_subject_id, no avatar_url.
LEGACY_ACCOUNTS_DDL = """
CREATE TABLE accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    display_name VARCHAR(100) NOT NULL,
    email VARCHAR(200) NOT NULL UNIQUE,
    password_hash VARCHAR(255) NOT NULL DEFAULT '',
    tutorial_seen BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME
)
"""


def make_settings(db_path: Path, client_id: str = GOOGLE_CLIENT_ID) -> Settings:
    return Settings(
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{db_path}"),
        security=SecuritySettings(bcrypt_rounds=4),
        google=GoogleSettings(client_id=client_id),
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path / "roster.db")


@pytest_asyncio.fixture
async def container(settings):
    container = ApplicationContainer(settings=settings)
    await init_db(container.engine)
    yield container
    await container.dispose()


@pytest_asyncio.fixture
async def legacy_container(tmp_path: Path):
    container = ApplicationContainer(settings=make_settings(tmp_path / "legacy.db"))
    async with container.engine.begin() as conn:
        await conn.execute(text(LEGACY_ACCOUNTS_DDL))
    yield container
    await container.dispose()


@pytest_asyncio.fixture
async def session(container):
    async with container.session_factory() as session:
        yield session


@pytest.fixture
def repository(session) -> SqlAccountRepository:
    return SqlAccountRepository(session, AccountColumnSet.FULL)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def credentials(repository, hasher) -> CredentialStore:
    return CredentialStore(repository, hasher)


@pytest_asyncio.fixture
async def client(container):
    app = create_app(container)
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
