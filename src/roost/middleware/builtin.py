"""Built-in middleware: trailing-slash stripping and request logging."""

import logging
import time

from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Handler


def strip_slashes(next: Handler) -> Handler:
    """Remove one trailing slash from the request path before delegating.

    Installed with ``use()`` it runs ahead of the pattern lookup, so a
    request for ``/a/`` reaches a handler registered at ``/a``::

        router.use(strip_slashes)
    """

    def handler(request: Request) -> Response:
        path = request.path
        if len(path) > 1 and path.endswith("/"):
            request = request.with_path(path[:-1])
        return next(request)

    return handler


class RequestLogger:
    """Log one line per request after the inner handler returns.

    Usage::

        router.use(RequestLogger())
        router.use(RequestLogger(logging.getLogger("myapp.access"), level=logging.DEBUG))
    """

    __slots__ = ("level", "logger")

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("roost.access")
        self.level = level

    def __call__(self, next: Handler) -> Handler:
        def handler(request: Request) -> Response:
            start = time.perf_counter()
            response = next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.logger.log(
                self.level,
                "%s %s %d %.1fms",
                request.method,
                request.url,
                response.status,
                elapsed_ms,
            )
            return response

        return handler
