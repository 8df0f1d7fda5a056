"""Public entry point for embedding the webhook in an application.

Usage:

    webhook = Webhook(
        WebhookConfig(
            logger=StandardLogger(),
            username="corbado",
            password="secret",
            auth_methods_callback=auth_methods,
            password_verify_callback=password_verify,
        )
    )
    handler_class = webhook.standard_handler()
"""

from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler

from corbado_webhook.adapters.webhook.aiohttp_handler import AiohttpWebhookHandler
from corbado_webhook.adapters.webhook.http_server import make_webhook_handler
from corbado_webhook.core.credentials import Credentials
from corbado_webhook.core.dispatcher import ActionDispatcher
from corbado_webhook.core.errors import ConfigurationError
from corbado_webhook.core.ports import (
    AuthMethodsCallback,
    LoggerPort,
    PasswordVerifyCallback,
)


@dataclass(frozen=True)
class WebhookConfig:
    """Everything a Webhook needs, validated as a whole on creation.

    Raises:
        ConfigurationError: Naming every missing parameter at once.
    """

    logger: LoggerPort | None
    username: str
    password: str = field(repr=False)
    auth_methods_callback: AuthMethodsCallback | None
    password_verify_callback: PasswordVerifyCallback | None

    def __post_init__(self) -> None:
        """Collect all missing parameters before failing."""
        missing = []
        if self.logger is None:
            missing.append("logger")
        if not self.username:
            missing.append("username")
        if not self.password:
            missing.append("password")
        if not callable(self.auth_methods_callback):
            missing.append("auth_methods_callback")
        if not callable(self.password_verify_callback):
            missing.append("password_verify_callback")

        if missing:
            raise ConfigurationError(missing)


class Webhook:
    """Builds the dispatcher and hands out framework handlers for it."""

    def __init__(self, config: WebhookConfig):
        self.dispatcher = ActionDispatcher(
            logger=config.logger,
            credentials=Credentials.from_plaintext(config.username, config.password),
            auth_methods_callback=config.auth_methods_callback,
            password_verify_callback=config.password_verify_callback,
        )

    def standard_handler(self, path: str | None = None) -> type[BaseHTTPRequestHandler]:
        """Return a request handler class for http.server servers."""
        return make_webhook_handler(self.dispatcher, path)

    def aiohttp_handler(self) -> AiohttpWebhookHandler:
        """Return a handler whose handle() coroutine fits an aiohttp route."""
        return AiohttpWebhookHandler(self.dispatcher)


__all__ = ["ConfigurationError", "Webhook", "WebhookConfig"]
