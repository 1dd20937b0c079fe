"""Pydantic schemas used across the project.

Request validators run the shared normalizer rules so the HTTP edge and the
account services reject exactly the same inputs.
"""
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from roster.core.config import get_settings
from roster.modules.accounts import normalizer
from roster.modules.accounts.exceptions import ValidationFailed


def _apply_rule(func: Callable[..., Any], *args: Any) -> Any:
    try:
        return func(*args)
    except ValidationFailed as exc:
        raise PydanticCustomError(exc.reason.value, exc.message) from exc


def _first_non_blank(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value is not None and value.strip():
            return value.strip()
    return None


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        return _apply_rule(normalizer.normalize_name, value)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return _apply_rule(normalizer.normalize_email, value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        _apply_rule(normalizer.validate_password, value, get_settings().min_password_length)
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return _apply_rule(normalizer.normalize_email, value)


class GoogleLoginRequest(BaseModel):
    """Google Identity Services posts the token under different names."""

    model_config = ConfigDict(populate_by_name=True)

    id_token: Optional[str] = None
    id_token_camel: Optional[str] = Field(default=None, alias="idToken")
    credential: Optional[str] = None

    @model_validator(mode="after")
    def _require_token(self) -> "GoogleLoginRequest":
        if self.token is None:
            raise PydanticCustomError("token_required", "id token is required")
        return self

    @property
    def token(self) -> Optional[str]:
        return _first_non_blank(self.id_token_camel, self.id_token, self.credential)


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    avatar_url: Optional[str] = None
    avatar_url_camel: Optional[str] = Field(default=None, alias="avatarUrl")
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        return _apply_rule(normalizer.normalize_name, value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        _apply_rule(normalizer.validate_password, value, get_settings().min_password_length)
        return value

    @property
    def resolved_avatar_url(self) -> Optional[str]:
        """Snake-case field wins; ``None`` when neither spelling was sent."""
        if self.avatar_url is None and self.avatar_url_camel is None:
            return None
        return _first_non_blank(self.avatar_url, self.avatar_url_camel) or ""


class TutorialUpdateRequest(BaseModel):
    tutorial_seen: Optional[bool] = None


class OkResponse(BaseModel):
    ok: bool = True


class LoginResponse(BaseModel):
    id: int
    name: str
    email: str
    avatar_url: str = Field(default="", serialization_alias="avatarUrl")


class GoogleLoginResponse(BaseModel):
    id: int
    name: str
    email: str


class AccountProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    avatar_url: str = Field(default="", serialization_alias="avatarUrl")
    tutorial_seen: bool = False
