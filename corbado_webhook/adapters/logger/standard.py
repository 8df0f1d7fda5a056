"""Logger adapter backed by the standard logging module.

Implements LoggerPort by forwarding to a logging.Logger, so webhook
output follows whatever handlers and levels the host application has
configured.
"""

import logging

from corbado_webhook.core.ports import LoggerPort


class StandardLogger(LoggerPort):
    """Forwards dispatcher logs to a logging.Logger."""

    def __init__(self, logger: logging.Logger | None = None):
        """Initialize the adapter.

        Args:
            logger: Target logger. Defaults to the 'corbado_webhook' logger.
        """
        self.logger = logger or logging.getLogger("corbado_webhook")

    def debug(self, message: str, *args: object) -> None:
        """Log a debug message."""
        self.logger.debug(message, *args)

    def error(self, err: BaseException) -> None:
        """Log an error with the traceback of its cause chain."""
        self.logger.error(
            "%s", err, exc_info=(type(err), err, err.__traceback__)
        )
