"""Input normalization shared by the HTTP schemas and the account services.

Both layers evaluate the same ``RULES`` table so they cannot drift apart.
Every function here is pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationFailed, ValidationReason

NAME_MIN_LENGTH = 2
# bcrypt only looks at the first 72 bytes of its input.
PASSWORD_MAX_BYTES = 72

MESSAGES: dict[ValidationReason, str] = {
    ValidationReason.NAME_TOO_SHORT: "name is too short",
    ValidationReason.EMAIL_REQUIRED: "email is required",
    ValidationReason.EMAIL_MALFORMED: "email is invalid",
    ValidationReason.PASSWORD_TOO_SHORT: "password is too short",
    ValidationReason.PASSWORD_TOO_LONG: "password is too long",
    ValidationReason.PASSWORD_CONTAINS_WHITESPACE: "password must not contain spaces",
}


@dataclass(frozen=True, slots=True)
class Policy:
    min_password_length: int = 8


@dataclass(frozen=True, slots=True)
class Rule:
    check: Callable[[str, Policy], bool]
    reason: ValidationReason


def _has_whitespace(value: str) -> bool:
    return any(ch.isspace() for ch in value)


def _parses_as_address(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


RULES: dict[str, tuple[Rule, ...]] = {
    "name": (
        Rule(lambda v, _: len(v) >= NAME_MIN_LENGTH, ValidationReason.NAME_TOO_SHORT),
    ),
    "email": (
        Rule(lambda v, _: v != "", ValidationReason.EMAIL_REQUIRED),
        Rule(lambda v, _: not _has_whitespace(v), ValidationReason.EMAIL_MALFORMED),
        Rule(lambda v, _: _parses_as_address(v), ValidationReason.EMAIL_MALFORMED),
    ),
    "password": (
        Rule(lambda v, p: len(v) >= p.min_password_length, ValidationReason.PASSWORD_TOO_SHORT),
        Rule(lambda v, _: len(v.encode("utf-8")) <= PASSWORD_MAX_BYTES, ValidationReason.PASSWORD_TOO_LONG),
        Rule(lambda v, _: not _has_whitespace(v), ValidationReason.PASSWORD_CONTAINS_WHITESPACE),
    ),
}


def check(field: str, value: str, policy: Policy = Policy()) -> None:
    """Raise ``ValidationFailed`` for the first rule of ``field`` that ``value`` breaks."""
    for rule in RULES[field]:
        if not rule.check(value, policy):
            raise ValidationFailed(field, rule.reason, MESSAGES[rule.reason])


def normalize_name(raw: str | None) -> str:
    name = (raw or "").strip()
    check("name", name)
    return name


def normalize_email(raw: str | None) -> str:
    email = (raw or "").strip()
    check("email", email)
    return email.lower()


def validate_password(raw: str | None, min_length: int) -> None:
    check("password", raw or "", Policy(min_password_length=min_length))


__all__ = [
    "MESSAGES",
    "NAME_MIN_LENGTH",
    "PASSWORD_MAX_BYTES",
    "Policy",
    "RULES",
    "Rule",
    "check",
    "normalize_email",
    "normalize_name",
    "validate_password",
]
