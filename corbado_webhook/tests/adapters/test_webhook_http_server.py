"""Integration tests for the standard-library webhook HTTP server."""

import asyncio
import base64
import json
from http.client import HTTPConnection

import pytest

from corbado_webhook.adapters.logger import NullLogger
from corbado_webhook.adapters.webhook.http_server import WebhookHTTPServer
from corbado_webhook.core.credentials import Credentials
from corbado_webhook.core.dispatcher import ActionDispatcher
from corbado_webhook.tests.fakes import FakeAuthMethodsCallback, FakePasswordVerifyCallback

USERNAME = "webhookUsername"
PASSWORD = "webhookPassword"


def auth_headers(username: str = USERNAME, password: str = PASSWORD) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def dispatcher() -> ActionDispatcher:
    return ActionDispatcher(
        logger=NullLogger(),
        credentials=Credentials.from_plaintext(USERNAME, PASSWORD),
        auth_methods_callback=FakeAuthMethodsCallback(existing={"existing@existing.com"}),
        password_verify_callback=FakePasswordVerifyCallback(
            accounts={"existing@existing.com": "supersecret"}
        ),
    )


@pytest.fixture
async def server(dispatcher):
    """Create and start a webhook server on a free port."""
    server = WebhookHTTPServer(
        dispatcher=dispatcher,
        host="127.0.0.1",
        port=0,
        path="/webhook",
    )

    await server.start()
    # Wait for server to be ready
    await asyncio.sleep(0.1)
    yield server
    await server.stop()


async def send(
    server: WebhookHTTPServer,
    method: str,
    path: str = "/webhook",
    headers: dict[str, str] | None = None,
    body: bytes | None = None,
) -> tuple[int, dict[str, str], bytes]:
    """Send one request from a worker thread and return status, headers, body."""

    def _send() -> tuple[int, dict[str, str], bytes]:
        conn = HTTPConnection("127.0.0.1", server.server_port, timeout=5)
        try:
            conn.request(method, path, body=body, headers=headers or {})
            response = conn.getresponse()
            return response.status, dict(response.getheaders()), response.read()
        finally:
            conn.close()

    return await asyncio.to_thread(_send)


class TestWebhookHTTPServer:
    """End-to-end requests against the standard-library server."""

    async def test_missing_authentication(self, server):
        status, headers, body = await send(server, "POST")

        assert status == 401
        assert headers["WWW-Authenticate"] == 'Basic realm="restricted", charset="UTF-8"'
        assert body == b"Unauthorized"

    async def test_invalid_authentication(self, server):
        status, _, _ = await send(
            server, "POST", headers=auth_headers("invalidUsername", "invalidPassword")
        )

        assert status == 401

    async def test_invalid_method(self, server):
        status, _, body = await send(server, "GET", headers=auth_headers())

        assert status == 400
        assert body == b"Invalid method 'GET', only POST is allowed"

    async def test_missing_action(self, server):
        status, _, body = await send(server, "POST", headers=auth_headers())

        assert status == 400
        assert body == b"X-Corbado-Action header missing or empty"

    async def test_empty_body(self, server):
        headers = {**auth_headers(), "X-Corbado-Action": "authMethods"}

        status, _, body = await send(server, "POST", headers=headers)

        assert status == 400
        assert body == b"Empty body, provide JSON request"

    async def test_invalid_action(self, server):
        headers = {**auth_headers(), "X-Corbado-Action": "invalidAction"}

        status, _, body = await send(server, "POST", headers=headers, body=b"{}")

        assert status == 400
        assert body == b"Invalid action given in X-Corbado-Action header ('invalidAction')"

    async def test_auth_methods_success(self, server):
        headers = {
            **auth_headers(),
            "X-Corbado-Action": "authMethods",
            "Content-Type": "application/json",
        }
        body = json.dumps(
            {
                "id": "who-1234567890",
                "projectID": "pro-1234567890",
                "action": "authMethods",
                "data": {"username": "existing@existing.com"},
            }
        ).encode()

        status, response_headers, response_body = await send(
            server, "POST", headers=headers, body=body
        )

        assert status == 200
        assert response_headers["Content-Type"] == "application/json; charset=utf-8"
        assert response_body == b'{"responseID":"","data":{"status":"exists"}}'

    async def test_password_verify_success(self, server):
        headers = {**auth_headers(), "X-Corbado-Action": "passwordVerify"}
        body = json.dumps(
            {
                "id": "who-1234567890",
                "projectID": "pro-1234567890",
                "action": "passwordVerify",
                "data": {"username": "existing@existing.com", "password": "supersecret"},
            }
        ).encode()

        status, _, response_body = await send(server, "POST", headers=headers, body=body)

        assert status == 200
        assert response_body == b'{"responseID":"","data":{"success":true}}'

    async def test_internal_error_has_no_body(self, server):
        headers = {**auth_headers(), "X-Corbado-Action": "authMethods"}

        status, _, body = await send(server, "POST", headers=headers, body=b"{broken")

        assert status == 500
        assert body == b""

    @pytest.mark.parametrize("method", ["HEAD", "OPTIONS"])
    async def test_unauthenticated_head_and_options_are_challenged(self, server, method):
        """Should answer every method with the 401 challenge before anything else."""
        status, headers, _ = await send(server, method)

        assert status == 401
        assert headers["WWW-Authenticate"] == 'Basic realm="restricted", charset="UTF-8"'

    async def test_authenticated_options_is_invalid_method(self, server):
        status, _, body = await send(server, "OPTIONS", headers=auth_headers())

        assert status == 400
        assert body == b"Invalid method 'OPTIONS', only POST is allowed"

    async def test_authenticated_head_is_invalid_method_without_body(self, server):
        """Should send the 400 status and length for HEAD but no body."""
        status, headers, body = await send(server, "HEAD", headers=auth_headers())

        assert status == 400
        assert headers["Content-Length"] == str(
            len(b"Invalid method 'HEAD', only POST is allowed")
        )
        assert body == b""

    async def test_repeated_header_uses_first_value(self, server):
        """Should route on the first X-Corbado-Action when it is sent twice."""
        body = json.dumps(
            {
                "id": "who-1234567890",
                "projectID": "pro-1234567890",
                "action": "authMethods",
                "data": {"username": "existing@existing.com"},
            }
        ).encode()

        def _send() -> tuple[int, bytes]:
            conn = HTTPConnection("127.0.0.1", server.server_port, timeout=5)
            try:
                conn.putrequest("POST", "/webhook")
                for name, value in auth_headers().items():
                    conn.putheader(name, value)
                conn.putheader("X-Corbado-Action", "authMethods")
                conn.putheader("X-Corbado-Action", "foo")
                conn.putheader("Content-Length", str(len(body)))
                conn.endheaders(body)
                response = conn.getresponse()
                return response.status, response.read()
            finally:
                conn.close()

        status, response_body = await asyncio.to_thread(_send)

        assert status == 200
        assert response_body == b'{"responseID":"","data":{"status":"exists"}}'

    async def test_unknown_path(self, server):
        status, _, _ = await send(server, "POST", path="/other", headers=auth_headers())

        assert status == 404


class TestWebhookHTTPServerLifecycle:
    """Tests for server configuration and lifecycle."""

    def test_defaults(self, dispatcher):
        server = WebhookHTTPServer(dispatcher=dispatcher)

        assert server.host == "localhost"
        assert server.port == 8000
        assert server.path == "/corbadoWebhook"
        assert server.server is None

    async def test_port_zero_binds_free_port(self, dispatcher):
        server = WebhookHTTPServer(dispatcher=dispatcher, host="127.0.0.1", port=0)

        await server.start()
        try:
            assert server.server_port != 0
        finally:
            await server.stop()
