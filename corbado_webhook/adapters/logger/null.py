"""Null logger adapter.

Discards everything. Useful in unit tests and for hosts that do not
want webhook output.
"""

from corbado_webhook.core.ports import LoggerPort


class NullLogger(LoggerPort):
    """LoggerPort implementation that does nothing."""

    def debug(self, message: str, *args: object) -> None:
        pass

    def error(self, err: BaseException) -> None:
        pass
