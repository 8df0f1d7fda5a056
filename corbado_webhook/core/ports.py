"""Port interfaces for the webhook receiver.

These define the boundaries between the core dispatch logic and the
host application.

1. **Driven Ports** (core calls out to the host)
   - LoggerPort: Debug and error reporting
   - AuthMethodsCallback: Does a username exist?
   - PasswordVerifyCallback: Is a username/password pair valid?

The callbacks are plain callables. A callback signals failure by raising;
the dispatcher turns any exception into an internal server error.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeAlias

from .models import AuthMethodsStatus

AuthMethodsCallback: TypeAlias = Callable[[str], AuthMethodsStatus]
"""Called with the username of an 'authMethods' request."""

PasswordVerifyCallback: TypeAlias = Callable[[str, str], bool]
"""Called with the username and password of a 'passwordVerify' request."""


class LoggerPort(ABC):
    """Port for reporting what the dispatcher does.

    Implementations must never raise; a broken log sink must not change
    the outcome of a webhook request.
    """

    @abstractmethod
    def debug(self, message: str, *args: object) -> None:
        """Log a debug message using %-style formatting arguments."""

    @abstractmethod
    def error(self, err: BaseException) -> None:
        """Log an error together with its traceback."""
