"""Core domain logic for the Corbado webhook receiver.

This package contains zero external dependencies and represents
the pure request handling logic. HTTP runtimes and logging backends
are handled by the adapters package.
"""

from .dispatcher import ActionDispatcher
from .models import (
    Action,
    AuthMethodsRequest,
    AuthMethodsResponse,
    AuthMethodsStatus,
    PasswordVerifyRequest,
    PasswordVerifyResponse,
    WebhookRequest,
    WebhookResponse,
)

__all__ = [
    "Action",
    "ActionDispatcher",
    "AuthMethodsRequest",
    "AuthMethodsResponse",
    "AuthMethodsStatus",
    "PasswordVerifyRequest",
    "PasswordVerifyResponse",
    "WebhookRequest",
    "WebhookResponse",
]
