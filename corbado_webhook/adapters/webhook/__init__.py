"""Webhook HTTP adapters.

Thin bindings translating an HTTP runtime's request and response objects
to and from the core dispatcher:
- http_server: standard library http.server
- aiohttp_handler: aiohttp web applications
"""
