"""Middleware — plain functions from Handler to Handler.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Built-in middleware:
    strip_slashes -- Drop a trailing slash before routing
    RequestLogger -- One log line per request with status and timing
"""

from roost.middleware.builtin import RequestLogger, strip_slashes
from roost.middleware.chain import chain
from roost.middleware.protocol import Handler, Middleware

__all__ = [
    "Handler",
    "Middleware",
    "RequestLogger",
    "chain",
    "strip_slashes",
]
