"""Fake LoggerPort implementation for testing."""

from corbado_webhook.core.ports import LoggerPort


class RecordingLogger(LoggerPort):
    """In-memory logger capturing everything for test assertions."""

    def __init__(self) -> None:
        """Initialize with empty history."""
        self.debug_messages: list[str] = []
        self.errors: list[BaseException] = []

    def debug(self, message: str, *args: object) -> None:
        """Record a formatted debug message."""
        self.debug_messages.append(message % args if args else message)

    def error(self, err: BaseException) -> None:
        """Record an error."""
        self.errors.append(err)

    def get_last_error(self) -> BaseException | None:
        """Get the most recent error, if any."""
        if self.errors:
            return self.errors[-1]
        return None
