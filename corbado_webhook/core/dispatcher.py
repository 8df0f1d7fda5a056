"""Action dispatcher: the framework-independent webhook request handler.

One call to ActionDispatcher.handle runs a single request through:

1. Authenticate (Basic Auth against the credential store)
2. Method check (POST only)
3. Read the X-Corbado-Action selector
4. Read the body
5. Route to the action: decode, call back, encode
6. Respond

Each step either hands over to the next or ends the request with a
DispatchError, which is rendered into exactly one WebhookResponse.
"""

import base64
import binascii
from collections.abc import Mapping

from .codec import (
    decode_auth_methods_request,
    decode_password_verify_request,
    encode_auth_methods_response,
    encode_password_verify_response,
)
from .credentials import Credentials
from .errors import (
    BadRequestError,
    CodecError,
    ConfigurationError,
    DispatchError,
    InternalError,
    UnauthenticatedError,
)
from .models import Action, WebhookRequest, WebhookResponse
from .ports import AuthMethodsCallback, LoggerPort, PasswordVerifyCallback

ACTION_HEADER = "X-Corbado-Action"
AUTHENTICATE_CHALLENGE = 'Basic realm="restricted", charset="UTF-8"'

_TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
_JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def parse_basic_auth(header: str | None) -> tuple[str, str] | None:
    """Extract username and password from a Basic Authorization header.

    Returns:
        (username, password), or None if the header is missing or malformed.
    """
    prefix = "Basic "
    if not header or len(header) < len(prefix):
        return None
    if header[: len(prefix)].lower() != prefix.lower():
        return None

    try:
        decoded = base64.b64decode(header[len(prefix):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, separator, password = decoded.partition(":")
    if not separator:
        return None
    return username, password


class ActionDispatcher:
    """Authenticates and routes webhook requests to the host callbacks.

    Holds no per-request state; handle() may be called concurrently.
    """

    def __init__(
        self,
        logger: LoggerPort,
        credentials: Credentials,
        auth_methods_callback: AuthMethodsCallback,
        password_verify_callback: PasswordVerifyCallback,
    ):
        """Initialize the dispatcher.

        Args:
            logger: Sink for debug lines and internal errors.
            credentials: Expected Basic-Auth credentials.
            auth_methods_callback: Decides whether a username exists.
            password_verify_callback: Decides whether a password is valid.

        Raises:
            ConfigurationError: If any parameter is missing.
        """
        missing = [
            name
            for name, value in (
                ("logger", logger),
                ("credentials", credentials),
                ("auth_methods_callback", auth_methods_callback),
                ("password_verify_callback", password_verify_callback),
            )
            if value is None
        ]
        if missing:
            raise ConfigurationError(missing)

        self.logger = logger
        self.credentials = credentials
        self.auth_methods_callback = auth_methods_callback
        self.password_verify_callback = password_verify_callback

    def handle(self, request: WebhookRequest) -> WebhookResponse:
        """Run one webhook request to completion.

        Never raises: every failure becomes a 401, 400 or 500 response.
        """
        self.logger.debug("%s %s", request.method, request.path)

        try:
            return self._dispatch(request)
        except UnauthenticatedError:
            return WebhookResponse(
                status=401,
                headers={
                    "WWW-Authenticate": AUTHENTICATE_CHALLENGE,
                    "Content-Type": _TEXT_CONTENT_TYPE,
                },
                body=b"Unauthorized",
            )
        except BadRequestError as e:
            return WebhookResponse(
                status=400,
                headers={"Content-Type": _TEXT_CONTENT_TYPE},
                body=e.message.encode("utf-8"),
            )
        except DispatchError as e:
            self.logger.error(e)
            return WebhookResponse(status=e.status)
        except Exception as e:
            self.logger.error(e)
            return WebhookResponse(status=500)

    def _dispatch(self, request: WebhookRequest) -> WebhookResponse:
        self._authenticate(request)

        if request.method != "POST":
            raise BadRequestError(
                f"Invalid method '{request.method}', only POST is allowed"
            )

        action = request.headers.get(ACTION_HEADER, "")
        if not action:
            raise BadRequestError(f"{ACTION_HEADER} header missing or empty")

        try:
            body = request.read_body()
        except Exception as e:
            raise InternalError(f"reading request body failed: {e}", e) from e

        if not body:
            raise BadRequestError("Empty body, provide JSON request")

        if action == Action.AUTH_METHODS.value:
            payload = self._handle_auth_methods(body)
        elif action == Action.PASSWORD_VERIFY.value:
            payload = self._handle_password_verify(body)
        else:
            raise BadRequestError(
                f"Invalid action given in {ACTION_HEADER} header ('{action}')"
            )

        return WebhookResponse(
            status=200,
            headers={"Content-Type": _JSON_CONTENT_TYPE},
            body=payload,
        )

    def is_authenticated(self, headers: Mapping[str, str]) -> bool:
        """Check the Basic Authorization header against the credentials.

        Lets adapters that must buffer the body up front skip doing so for
        callers that will be rejected anyway.
        """
        candidate = parse_basic_auth(headers.get("Authorization"))
        if candidate is None:
            return False

        return self.credentials.matches(*candidate)

    def _authenticate(self, request: WebhookRequest) -> None:
        if not self.is_authenticated(request.headers):
            raise UnauthenticatedError()

    def _handle_auth_methods(self, body: bytes) -> bytes:
        try:
            req = decode_auth_methods_request(body)
        except CodecError as e:
            raise InternalError(f"decoding authMethods request failed: {e}", e) from e

        if not req.username:
            raise BadRequestError("username must not be empty")

        try:
            status = self.auth_methods_callback(req.username)
        except Exception as e:
            raise InternalError(f"authMethods callback failed: {e}", e) from e

        try:
            return encode_auth_methods_response("", status)
        except CodecError as e:
            raise InternalError(f"encoding authMethods response failed: {e}", e) from e

    def _handle_password_verify(self, body: bytes) -> bytes:
        try:
            req = decode_password_verify_request(body)
        except CodecError as e:
            raise InternalError(
                f"decoding passwordVerify request failed: {e}", e
            ) from e

        if not req.username:
            raise BadRequestError("username must not be empty")

        if not req.password:
            raise BadRequestError("password must not be empty")

        try:
            success = self.password_verify_callback(req.username, req.password)
        except Exception as e:
            raise InternalError(f"passwordVerify callback failed: {e}", e) from e

        try:
            return encode_password_verify_response("", success)
        except CodecError as e:
            raise InternalError(
                f"encoding passwordVerify response failed: {e}", e
            ) from e
