"""Utilities for password hashing and verification."""

from __future__ import annotations

from dataclasses import dataclass, field

import bcrypt

# Stored in place of a hash for accounts that have no local password.
NO_PASSWORD = ""


@dataclass(slots=True)
class PasswordHasher:
    """bcrypt hashing with a configurable work factor."""

    rounds: int = 12
    _dummy_hash: str | None = field(default=None, init=False, repr=False)

    def hash_password(self, password: str) -> str:
        """Hash plain text password using bcrypt."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plain text password against a stored bcrypt hash.

        An empty stored hash never matches.
        """
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False

    def burn(self, plain_password: str) -> None:
        """Run one comparison against a throwaway hash.

        Used when the account does not exist so the response takes as long as
        a real mismatch.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.hash_password("dummy-password")
        self.verify_password(plain_password, self._dummy_hash)


__all__ = ["NO_PASSWORD", "PasswordHasher"]
