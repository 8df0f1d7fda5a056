"""HTTP server adapter for the standard library.

Provides the webhook endpoint using Python's built-in http.server module.
The request handler translates BaseHTTPRequestHandler state into a
WebhookRequest, runs the dispatcher, and writes back the WebhookResponse.
"""

import asyncio
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from corbado_webhook.core.dispatcher import ActionDispatcher
from corbado_webhook.core.models import WebhookRequest, WebhookResponse

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1024 * 1024


def make_webhook_handler(
    dispatcher: ActionDispatcher,
    path: str | None = None,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create a WebhookHTTPHandler class bound to a dispatcher.

    Creates a handler class with closure-captured dependencies instead of
    class-level mutable state.

    Args:
        dispatcher: Dispatcher that handles every request.
        path: Optional URL path to serve. If None, every path is served,
            which suits mounting the handler behind another router.

    Returns:
        A WebhookHTTPHandler class usable with any http.server server.
    """

    class WebhookHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for the Corbado webhook endpoint."""

        def _read_body(self) -> bytes:
            content_length = int(self.headers.get("Content-Length") or 0)
            if content_length < 0:
                raise ValueError(f"invalid Content-Length {content_length}")
            if content_length > MAX_BODY_SIZE:
                raise ValueError(
                    f"request body of {content_length} bytes exceeds {MAX_BODY_SIZE}"
                )
            return self.rfile.read(content_length) if content_length > 0 else b""

        def _handle(self, write_body: bool = True) -> None:
            if path is not None and self.path.split("?", 1)[0] != path:
                self.send_error(404, "Not found")
                return

            request = WebhookRequest(
                method=self.command,
                path=self.path,
                headers=self.headers.items(),
                read_body=self._read_body,
            )
            self._send(dispatcher.handle(request), write_body)

        def do_HEAD(self) -> None:
            self._handle(write_body=False)

        do_POST = _handle
        do_GET = _handle
        do_PUT = _handle
        do_PATCH = _handle
        do_DELETE = _handle
        do_OPTIONS = _handle

        def _send(self, response: WebhookResponse, write_body: bool = True) -> None:
            """Write a WebhookResponse to the client."""
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(response.body)))
            self.end_headers()
            if write_body and response.body:
                self.wfile.write(response.body)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request."""
            logger.debug(f"HTTP {self.client_address[0]}: {format % args}")

    return WebhookHTTPHandler


class WebhookHTTPServer:
    """Standard-library webhook HTTP server.

    Serves one dispatcher on host:port, running the blocking server loop
    in a worker thread so it can be started and stopped from asyncio code.
    """

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        host: str = "localhost",
        port: int = 8000,
        path: str | None = "/corbadoWebhook",
    ):
        """Initialize the HTTP server.

        Args:
            dispatcher: ActionDispatcher instance to handle requests.
            host: Host to listen on (default localhost).
            port: Port to listen on (default 8000, 0 picks a free port).
            path: URL path of the webhook endpoint, None to serve all paths.
        """
        self.dispatcher = dispatcher
        self.host = host
        self.port = port
        self.path = path
        self.server: ThreadingHTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def server_port(self) -> int:
        """Port actually bound, useful when started with port 0."""
        if self.server is None:
            return self.port
        return self.server.server_address[1]

    async def start(self) -> None:
        """Start the HTTP server."""
        handler_class = make_webhook_handler(self.dispatcher, self.path)

        self.server = ThreadingHTTPServer((self.host, self.port), handler_class)

        self._server_task = asyncio.create_task(self._run_server())
        logger.info(
            f"Webhook HTTP server listening on {self.host}:{self.server_port}"
        )

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"Webhook HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("Webhook HTTP server stopped")
