"""Domain models for the webhook receiver.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class Action(Enum):
    """Values accepted in the X-Corbado-Action header."""

    AUTH_METHODS = "authMethods"
    PASSWORD_VERIFY = "passwordVerify"


class AuthMethodsStatus(Enum):
    """Whether a username is known to the host application."""

    EXISTS = "exists"
    NOT_EXISTS = "not_exists"


# ============================================================================
# REQUEST / RESPONSE DTOs
# ============================================================================


@dataclass(frozen=True)
class AuthMethodsRequest:
    """Payload of an 'authMethods' webhook call."""

    id: str
    project_id: str
    action: str
    username: str


@dataclass(frozen=True)
class PasswordVerifyRequest:
    """Payload of a 'passwordVerify' webhook call."""

    id: str
    project_id: str
    action: str
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class AuthMethodsResponse:
    """Answer to an 'authMethods' call.

    The response_id is free text used for correlation in the webhook log;
    it is not validated.
    """

    response_id: str
    status: AuthMethodsStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "responseID": self.response_id,
            "data": {"status": self.status.value},
        }


@dataclass(frozen=True)
class PasswordVerifyResponse:
    """Answer to a 'passwordVerify' call."""

    response_id: str
    success: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "responseID": self.response_id,
            "data": {"success": self.success},
        }


# ============================================================================
# GENERIC HTTP DESCRIPTORS
# ============================================================================


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive view over HTTP request headers.

    Accepts a mapping or a sequence of (name, value) pairs, so adapters can
    hand over repeated headers as received.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ):
        if headers is None:
            headers = ()
        elif isinstance(headers, Mapping):
            headers = headers.items()

        self._items: dict[str, tuple[str, str]] = {}
        for name, value in headers:
            # First occurrence wins
            self._items.setdefault(name.lower(), (name, value))

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __iter__(self):
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"


def _no_body() -> bytes:
    return b""


@dataclass(frozen=True)
class WebhookRequest:
    """Framework-independent view of an inbound HTTP request.

    Adapters translate their runtime's request object into this shape.
    The body is read lazily through read_body so that I/O errors surface
    inside the dispatcher, after authentication.
    """

    method: str
    path: str = ""
    headers: Mapping[str, str] | Iterable[tuple[str, str]] = field(
        default_factory=Headers
    )
    read_body: Callable[[], bytes] = _no_body

    def __post_init__(self) -> None:
        """Wrap plain headers in a case-insensitive view."""
        if not isinstance(self.headers, Headers):
            object.__setattr__(self, "headers", Headers(self.headers))


@dataclass(frozen=True)
class WebhookResponse:
    """Framework-independent HTTP response produced by the dispatcher."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        """Freeze headers into a read-only proxy."""
        if isinstance(self.headers, dict):
            object.__setattr__(self, "headers", MappingProxyType(self.headers))

    @property
    def text(self) -> str:
        """Body decoded as UTF-8."""
        return self.body.decode("utf-8")
