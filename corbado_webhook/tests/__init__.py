"""Test suite for the Corbado webhook receiver.

Organized into three categories:

1. core/: Unit tests for credentials, codec and dispatcher
   - No HTTP server, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for the HTTP and logger adapters
   - Real sockets for http.server, aiohttp test client for aiohttp

3. fakes/: Port implementations for testing
   - Recording logger and configurable callbacks
"""
