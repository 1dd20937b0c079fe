"""Domain models for accounts."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True)
class Account:
    id: int
    display_name: str
    email: str
    password_hash: str = field(default="", repr=False)
    federated_subject_id: Optional[str] = None
    avatar_url: str = ""
    tutorial_seen: bool = False

    @property
    def has_local_password(self) -> bool:
        return bool(self.password_hash)


@dataclass(frozen=True, slots=True)
class FederatedIdentity:
    """Claims taken from a verified third-party identity token."""

    subject: str
    email: str
    name: str = ""
    picture: str = ""


@dataclass(frozen=True, slots=True)
class SchemaCapabilities:
    """Optional ``accounts`` columns present in the connected database."""

    supports_federated_id: bool = False
    supports_avatar: bool = False

    @classmethod
    def none(cls) -> "SchemaCapabilities":
        return cls(False, False)

    @property
    def column_set(self) -> "AccountColumnSet":
        return AccountColumnSet.for_capabilities(self)


class AccountColumnSet(enum.Enum):
    """Closed set of column layouts the account queries are written against."""

    BASIC = (False, False)
    WITH_SUBJECT = (True, False)
    WITH_AVATAR = (False, True)
    FULL = (True, True)

    @property
    def has_subject(self) -> bool:
        return self.value[0]

    @property
    def has_avatar(self) -> bool:
        return self.value[1]

    @classmethod
    def for_capabilities(cls, capabilities: SchemaCapabilities) -> "AccountColumnSet":
        return cls((capabilities.supports_federated_id, capabilities.supports_avatar))


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProfileUpdateInput:
    display_name: str
    avatar_url: Optional[str] | object = UNSET
    password: Optional[str] | object = UNSET
