"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from roster.core.config import Settings, get_settings
from roster.core.crypto import PasswordHasher
from roster.infrastructure.database import (
    SchemaCapabilityDetector,
    build_engine,
    build_session_factory,
)
from roster.modules.accounts import GoogleTokenVerifier


@dataclass(slots=True)
class ApplicationContainer:
    """Process-wide singletons shared by every request."""

    settings: Settings
    engine: AsyncEngine = field(init=False)
    session_factory: async_sessionmaker[AsyncSession] = field(init=False)
    schema_detector: SchemaCapabilityDetector = field(init=False)
    password_hasher: PasswordHasher = field(init=False)
    token_verifier: GoogleTokenVerifier = field(init=False)

    def __post_init__(self) -> None:
        self.engine = build_engine(self.settings)
        self.session_factory = build_session_factory(self.engine)
        self.schema_detector = SchemaCapabilityDetector(
            self.engine,
            timeout=self.settings.database.operation_timeout,
        )
        self.password_hasher = PasswordHasher(rounds=self.settings.security.bcrypt_rounds)
        self.token_verifier = GoogleTokenVerifier(
            self.settings.google_client_id,
            clock_skew_seconds=self.settings.google.clock_skew_seconds,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer(settings=get_settings())


__all__ = ["ApplicationContainer", "get_container"]
