"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./roster.db"
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # Seconds before a pooled connection is recycled.
    pool_recycle: int = 1800
    # Upper bound for a single lookup/insert/update, in seconds.
    operation_timeout: float = Field(default=5.0, gt=0)


class SecuritySettings(BaseModel):
    min_password_length: int = Field(default=8, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)


class GoogleSettings(BaseModel):
    """Google Identity Services sign-in."""

    # Expected "aud" claim of incoming ID tokens.
    client_id: str = ""
    clock_skew_seconds: int = Field(default=60, ge=0)


class CorsSettings(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_headers: list[str] = Field(default_factory=lambda: ["Content-Type", "X-User-Email"])
    max_age: int = 86400


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "School Roster API"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    google: GoogleSettings = GoogleSettings()
    cors: CorsSettings = CorsSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def min_password_length(self) -> int:
        return self.security.min_password_length

    @property
    def google_client_id(self) -> str:
        return self.google.client_id.strip()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
