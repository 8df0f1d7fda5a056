"""Composition root for the example webhook application.

Wires configuration, logging, the placeholder callbacks and the selected
HTTP server together. Applications embedding the webhook replace the
callbacks below with their own user lookup.

Module Structure:
- Configuration loading via config module
- Logging setup
- Webhook construction
- Server selection (standard library or aiohttp)
"""

import asyncio
import logging
import sys

from corbado_webhook.adapters.logger import StandardLogger
from corbado_webhook.adapters.webhook.aiohttp_handler import AiohttpWebhookServer
from corbado_webhook.adapters.webhook.http_server import WebhookHTTPServer
from corbado_webhook.config import Settings, load_settings
from corbado_webhook.core.models import AuthMethodsStatus
from corbado_webhook.webhook import Webhook, WebhookConfig


def auth_methods_callback(username: str) -> AuthMethodsStatus:
    """Answer the 'authMethods' action.

    Placeholder: reports every user as existing.
    """
    return AuthMethodsStatus.EXISTS


def password_verify_callback(username: str, password: str) -> bool:
    """Answer the 'passwordVerify' action.

    Placeholder: rejects every password.
    """
    return False


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_webhook(settings: Settings) -> Webhook:
    """Create the webhook from settings and the placeholder callbacks.

    Raises:
        ConfigurationError: If the webhook credentials are not configured.
    """
    return Webhook(
        WebhookConfig(
            logger=StandardLogger(),
            username=settings.webhook_username,
            password=settings.webhook_password,
            auth_methods_callback=auth_methods_callback,
            password_verify_callback=password_verify_callback,
        )
    )


def build_server(
    settings: Settings, webhook: Webhook
) -> WebhookHTTPServer | AiohttpWebhookServer:
    """Create the HTTP server selected by settings.server_backend."""
    if settings.server_backend == "aiohttp":
        return AiohttpWebhookServer(
            dispatcher=webhook.dispatcher,
            host=settings.webhook_host,
            port=settings.webhook_port,
            path=settings.webhook_path,
        )
    return WebhookHTTPServer(
        dispatcher=webhook.dispatcher,
        host=settings.webhook_host,
        port=settings.webhook_port,
        path=settings.webhook_path,
    )


async def bootstrap() -> None:
    """Load configuration, wire the webhook, and serve until cancelled.

    Raises:
        ConfigurationError: If credentials are missing.
        asyncio.CancelledError: On graceful shutdown signal
    """
    settings = load_settings()

    configure_logging("DEBUG" if settings.debug else settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Starting Corbado webhook...")

    webhook = build_webhook(settings)
    server = build_server(settings, webhook)
    logger.info(f"Server backend: {settings.server_backend}")

    await server.start()
    try:
        while True:
            await asyncio.sleep(1)
    finally:
        await server.stop()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
