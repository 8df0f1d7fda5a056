"""Corbado webhook receiver.

Authenticates Corbado webhook calls with HTTP Basic Authentication and
answers the 'authMethods' and 'passwordVerify' actions through callbacks
supplied by the host application.
"""

from corbado_webhook.adapters.logger import NullLogger, StandardLogger
from corbado_webhook.core.errors import ConfigurationError
from corbado_webhook.core.models import AuthMethodsStatus
from corbado_webhook.webhook import Webhook, WebhookConfig

__all__ = [
    "AuthMethodsStatus",
    "ConfigurationError",
    "NullLogger",
    "StandardLogger",
    "Webhook",
    "WebhookConfig",
]
