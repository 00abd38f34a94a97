"""Middleware composition."""

from collections.abc import Sequence

from roost.middleware.protocol import Handler, Middleware


def chain(middlewares: Sequence[Middleware], handler: Handler) -> Handler:
    """Wrap *handler* so the first middleware is the outermost.

    ``chain([m1, m2, m3], h)`` is ``m1(m2(m3(h)))``: ``m1`` runs first on
    the way in and last on the way out.
    """
    for middleware in reversed(middlewares):
        handler = middleware(handler)
    return handler
