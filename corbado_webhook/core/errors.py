"""Exception hierarchy for the webhook receiver.

Three families of errors exist:

1. **ConfigurationError**: raised while wiring the webhook, never at
   request time.
2. **CodecError**: raised by the request codec when a body cannot be
   decoded or a response cannot be constructed.
3. **DispatchError**: terminal outcomes of a single request, each mapped
   to exactly one HTTP status by the dispatcher.
"""

from collections.abc import Sequence


class WebhookError(Exception):
    """Base class for all webhook receiver errors."""


class ConfigurationError(WebhookError):
    """Raised when required construction parameters are missing or invalid.

    Lists every missing parameter, not only the first one found.
    """

    def __init__(self, missing: Sequence[str]):
        self.missing = tuple(missing)
        super().__init__(
            f"missing required parameters: {', '.join(self.missing)}"
        )


# ============================================================================
# CODEC ERRORS
# ============================================================================


class CodecError(WebhookError):
    """Base class for request decoding and response encoding failures."""


class EmptyBodyError(CodecError):
    """Raised when a request body has zero length."""

    def __init__(self) -> None:
        super().__init__("passed empty body")


class MalformedJSONError(CodecError):
    """Raised when a body is not JSON or does not have the expected shape."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"json.loads() failed: {detail}")


class ValidationFailedError(CodecError):
    """Raised when a decoded request breaks one or more field rules."""

    def __init__(self, violations: Sequence[str]):
        self.violations = tuple(violations)
        super().__init__(f"validation failed: {', '.join(self.violations)}")


class ConstructionError(CodecError):
    """Raised when a response DTO is built from an invalid value."""


# ============================================================================
# DISPATCH ERRORS
# ============================================================================


class DispatchError(WebhookError):
    """A terminal failure of one webhook request.

    Attributes:
        status: HTTP status code the failure maps to.
    """

    status: int = 500


class UnauthenticatedError(DispatchError):
    """Basic-Auth credentials are missing, malformed or wrong."""

    status = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class BadRequestError(DispatchError):
    """Caller-induced failure, reported with a human-readable message."""

    status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InternalError(DispatchError):
    """Server-side failure; details are logged, never sent to the caller."""

    status = 500

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


__all__ = [
    "BadRequestError",
    "CodecError",
    "ConfigurationError",
    "ConstructionError",
    "DispatchError",
    "EmptyBodyError",
    "InternalError",
    "MalformedJSONError",
    "UnauthenticatedError",
    "ValidationFailedError",
    "WebhookError",
]
