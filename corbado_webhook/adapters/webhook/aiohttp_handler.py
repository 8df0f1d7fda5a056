"""aiohttp adapter for the webhook endpoint.

AiohttpWebhookHandler.handle can be registered on any aiohttp router.
AiohttpWebhookServer is a small standalone server built around it.
"""

import logging

from aiohttp import web

from corbado_webhook.core.dispatcher import ActionDispatcher
from corbado_webhook.core.models import Headers, WebhookRequest, WebhookResponse

logger = logging.getLogger(__name__)


def _buffered_body(body: bytes, error: Exception | None):
    """Body reader replaying a body read (or failed) ahead of dispatch."""

    def read_body() -> bytes:
        if error is not None:
            raise error
        return body

    return read_body


class AiohttpWebhookHandler:
    """Translates aiohttp requests to and from the dispatcher."""

    def __init__(self, dispatcher: ActionDispatcher):
        self.dispatcher = dispatcher

    async def handle(self, request: web.Request) -> web.Response:
        """Handle the Corbado webhook request.

        Args:
            request: aiohttp request object

        Returns:
            Response rendered from the dispatcher's WebhookResponse
        """
        headers = Headers(request.headers.items())

        # The dispatcher reads synchronously, so buffer the body here, but
        # only for callers that pass authentication.
        body = b""
        read_error: Exception | None = None
        if self.dispatcher.is_authenticated(headers):
            try:
                body = await request.read()
            except Exception as e:
                read_error = e

        webhook_request = WebhookRequest(
            method=request.method,
            path=request.path_qs,
            headers=headers,
            read_body=_buffered_body(body, read_error),
        )
        return self._to_response(self.dispatcher.handle(webhook_request))

    @staticmethod
    def _to_response(response: WebhookResponse) -> web.Response:
        headers = dict(response.headers)
        # aiohttp wants content type and charset separately from other headers
        content_type = headers.pop("Content-Type", None)
        if content_type is None:
            return web.Response(status=response.status, headers=headers, body=response.body)

        mime, _, params = content_type.partition(";")
        charset = params.partition("=")[2].strip() or None
        return web.Response(
            status=response.status,
            headers=headers,
            body=response.body,
            content_type=mime.strip(),
            charset=charset,
        )


def create_app(
    dispatcher: ActionDispatcher, path: str = "/corbadoWebhook"
) -> web.Application:
    """Build an aiohttp application serving the webhook on path.

    Every method is routed to the handler so that the dispatcher answers
    non-POST requests itself.
    """
    app = web.Application()
    app.router.add_route("*", path, AiohttpWebhookHandler(dispatcher).handle)
    return app


class AiohttpWebhookServer:
    """Webhook HTTP server running on aiohttp."""

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        host: str = "localhost",
        port: int = 8000,
        path: str = "/corbadoWebhook",
    ):
        self.dispatcher = dispatcher
        self.host = host
        self.port = port
        self.path = path

        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None

    @property
    def is_running(self) -> bool:
        """Check if server is running."""
        return self._site is not None

    async def start(self) -> None:
        """Start listening for webhook requests."""
        if self.is_running:
            logger.warning("Webhook server already running")
            return

        self._runner = web.AppRunner(create_app(self.dispatcher, self.path))
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        logger.info(f"Webhook server started on http://{self.host}:{self.port}{self.path}")

    async def stop(self) -> None:
        """Stop the webhook server."""
        if self._runner:
            await self._runner.cleanup()

        self._runner = None
        self._site = None
        logger.info("Webhook server stopped")
