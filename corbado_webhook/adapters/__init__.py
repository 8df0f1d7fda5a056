"""External adapters for the Corbado webhook receiver.

This package contains all external dependencies (HTTP runtimes, logging
backends) and provides implementations of the core port interfaces.

Adapter Organization:

- logger/: LoggerPort implementations (logging module, null)
- webhook/: HTTP bindings for the dispatcher (http.server, aiohttp)
"""
