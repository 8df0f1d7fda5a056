"""Fake implementations of core ports for testing.

- RecordingLogger: Captures debug lines and errors for assertion
- FakeAuthMethodsCallback: Configurable set of existing usernames
- FakePasswordVerifyCallback: Configurable username/password pairs
"""

from .callbacks import FakeAuthMethodsCallback, FakePasswordVerifyCallback
from .logger import RecordingLogger

__all__ = [
    "FakeAuthMethodsCallback",
    "FakePasswordVerifyCallback",
    "RecordingLogger",
]
