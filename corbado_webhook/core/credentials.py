"""Credential store for webhook Basic Authentication.

Only SHA-256 digests of the configured username and password are kept.
Candidates are hashed to the same fixed size before comparison so that
hmac.compare_digest runs in time independent of where they differ.
"""

import hashlib
import hmac
from dataclasses import dataclass, field

from .errors import ConfigurationError


def _digest(value: str) -> bytes:
    return hashlib.sha256(value.encode("utf-8")).digest()


@dataclass(frozen=True)
class Credentials:
    """Digests of the expected Basic-Auth username and password."""

    username_digest: bytes = field(repr=False)
    password_digest: bytes = field(repr=False)

    def __post_init__(self) -> None:
        """Validate digest sizes on creation."""
        if len(self.username_digest) != 32 or len(self.password_digest) != 32:
            raise ValueError("credential digests must be 32 bytes")

    @classmethod
    def from_plaintext(cls, username: str, password: str) -> "Credentials":
        """Hash plaintext credentials.

        Raises:
            ConfigurationError: If username or password is empty.
        """
        missing = [
            name
            for name, value in (("username", username), ("password", password))
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)

        return cls(
            username_digest=_digest(username),
            password_digest=_digest(password),
        )

    def matches(self, username: str, password: str) -> bool:
        """Check a candidate pair against the stored digests.

        Both comparisons always run; a partial match is a mismatch.
        """
        username_match = hmac.compare_digest(self.username_digest, _digest(username))
        password_match = hmac.compare_digest(self.password_digest, _digest(password))

        return username_match & password_match
