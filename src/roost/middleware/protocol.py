"""Handler protocol and Middleware type alias.

A handler is any callable matching::

    def handler(request: Request) -> Response: ...

A middleware is a function from one handler to another::

    def timing(next: Handler) -> Handler:
        def handler(request: Request) -> Response:
            start = time.monotonic()
            response = next(request)
            return response.with_header("X-Time", f"{time.monotonic() - start:.3f}")
        return handler

No base class required. Plain functions, closures returned by middleware,
``Router`` and ``ServeMux`` all satisfy ``Handler`` by shape.
"""

from collections.abc import Callable
from typing import Protocol, TypeAlias

from roost.http.request import Request
from roost.http.response import Response


class Handler(Protocol):
    """Protocol for anything that can answer a request."""

    def __call__(self, request: Request) -> Response: ...


# Wraps a handler with cross-cutting behaviour
Middleware: TypeAlias = Callable[[Handler], Handler]
