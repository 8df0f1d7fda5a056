"""Logger adapters implementing LoggerPort.

- StandardLogger: forwards to the logging module
- NullLogger: discards everything
"""

from .null import NullLogger
from .standard import StandardLogger

__all__ = ["NullLogger", "StandardLogger"]
