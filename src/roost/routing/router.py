"""Composable router tree.

A ``Router`` pairs a path prefix with two middleware scopes and a
``ServeMux``. Nested ``route()`` calls build child routers mounted as
opaque handlers in their parent's table; ``with_middleware()`` and
``group()`` produce scoped clones that register into the same table.

Usage::

    router = Router()
    router.use(request_id)                      # runs on every request
    router.handle("GET /health", health)

    router.with_middleware(auth).handle("POST /posts", create_post)

    def admin(sub: Router) -> None:
        sub.use(require_admin)                  # runs on every /admin/ request
        sub.handle("/users", list_users)

    router.route("/admin", admin)

Middleware order is fixed when a handler is registered, not when a
request arrives, so ``use()`` after ``handle()`` on the same router is a
configuration error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from roost.config import MuxConfig
from roost.errors import ConfigurationError
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.chain import chain
from roost.middleware.protocol import Handler, Middleware
from roost.routing.mux import ServeMux
from roost.routing.path import join_method_and_pattern, join_prefix_and_pattern, split_method_and_pattern

logger = logging.getLogger("roost.routing")


class RouterState(Enum):
    """Where a router value is in its registration lifecycle."""

    FRESH = "fresh"
    REGISTERING = "registering"
    SCOPED = "scoped"
    SCOPED_REGISTERING = "scoped_registering"


# Transition taken when route() or handle() runs
_AFTER_REGISTRATION: dict[RouterState, RouterState] = {
    RouterState.FRESH: RouterState.REGISTERING,
    RouterState.REGISTERING: RouterState.REGISTERING,
    RouterState.SCOPED: RouterState.SCOPED_REGISTERING,
    RouterState.SCOPED_REGISTERING: RouterState.SCOPED_REGISTERING,
}

_SCOPED_STATES = frozenset({RouterState.SCOPED, RouterState.SCOPED_REGISTERING})

# Default for handle() when used as a decorator
_DECORATE: Any = object()


class Router:
    """A path-scoped handler table with subtree and handler middleware.

    ``use()`` on a router adds *subtree* middleware: it wraps the table and
    runs for every request reaching this router, matched or not. On a
    scoped clone (from ``with_middleware()``/``group()``) it adds
    *handler* middleware instead, captured by each later ``handle()``.
    """

    __slots__ = (
        "_handler_middlewares",
        "_mux",
        "_state",
        "_subrouter_middlewares",
        "prefix",
    )

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.prefix = ""
        self._handler_middlewares: list[Middleware] = []
        self._subrouter_middlewares: list[Middleware] = []
        self._mux = ServeMux(config)
        self._state = RouterState.FRESH

    @classmethod
    def _child(cls, prefix: str, config: MuxConfig) -> Router:
        child = cls(config)
        child.prefix = prefix
        return child

    def _clone(self) -> Router:
        clone = object.__new__(type(self))
        clone.prefix = self.prefix
        clone._handler_middlewares = list(self._handler_middlewares)
        # Shared with the origin, never appended to through the clone
        clone._subrouter_middlewares = self._subrouter_middlewares
        clone._mux = self._mux
        clone._state = RouterState.SCOPED
        return clone

    # -- Introspection --

    @property
    def mux(self) -> ServeMux:
        """The pattern table, shared with every scoped clone."""
        return self._mux

    @property
    def config(self) -> MuxConfig:
        return self._mux.config

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def registered(self) -> bool:
        """True once ``route()`` or ``handle()`` has run on this value."""
        return self._state in (RouterState.REGISTERING, RouterState.SCOPED_REGISTERING)

    @property
    def is_scoped(self) -> bool:
        """True for values produced by ``with_middleware()`` or ``group()``."""
        return self._state in _SCOPED_STATES

    def __repr__(self) -> str:
        return f"Router(prefix={self.prefix!r}, state={self._state.value})"

    # -- Middleware scopes --

    def use(self, *middlewares: Middleware) -> None:
        """Append middleware to this router's stack.

        On a router, the middleware wraps the whole table and runs before
        the pattern lookup, which gives it a chance to respond early or
        rewrite the request. On a scoped clone, it is applied to handlers
        registered through the clone from now on.

        Raises ``ConfigurationError`` if this router has already
        registered routes.
        """
        if self._state is RouterState.REGISTERING:
            msg = "all middlewares must be defined before routes on a router"
            raise ConfigurationError(msg)
        if self.is_scoped:
            self._handler_middlewares.extend(middlewares)
        else:
            self._subrouter_middlewares.extend(middlewares)

    def with_middleware(self, *middlewares: Middleware) -> Router:
        """Return a scoped clone whose handlers also get *middlewares*.

        The clone shares this router's table and subtree middleware; the
        origin is left untouched::

            router.with_middleware(auth).handle("POST /posts", create_post)
        """
        clone = self._clone()
        clone._handler_middlewares.extend(middlewares)
        return clone

    def group(self, fn: Callable[[Router], None] | None) -> None:
        """Call *fn* with a scoped clone of this router.

        ``use()`` inside *fn* affects only handlers registered through the
        clone, not sibling registrations on this router.
        """
        clone = self.with_middleware()
        if fn is not None:
            fn(clone)

    # -- Registration --

    def route(self, pattern: str, fn: Callable[[Router], None]) -> None:
        """Mount a new child router at *pattern*.

        *fn* populates the child; the child is then registered as a
        subtree handler, so its own ``use()`` middleware runs for every
        request under the prefix. A trailing slash is added to *pattern*
        if missing.
        """
        if fn is None:
            msg = f"sub router function cannot be None on {pattern!r}"
            raise ConfigurationError(msg)
        if not pattern:
            msg = "sub router pattern cannot be empty"
            raise ConfigurationError(msg)
        if not pattern.endswith("/"):
            pattern += "/"

        child = self._child(join_prefix_and_pattern(self.prefix, pattern), self.config)
        fn(child)
        self._mux.handle(child.prefix, child)
        logger.debug("mounted router at %r", child.prefix)

        self._state = _AFTER_REGISTRATION[self._state]

    def handle(self, pattern: str, handler: Handler = _DECORATE) -> Callable[[Handler], Handler] | None:
        """Register *handler* for *pattern* under this router's prefix.

        The handler middleware in effect right now is baked into the
        registered handler. Raises ``ConfigurationError`` if *handler* is
        ``None``. Without *handler*, returns a decorator::

            @router.handle("GET /users/{id}")
            def show_user(request: Request) -> Response:
                return Response(request.path_value("id"))
        """
        if handler is _DECORATE:

            def decorator(fn: Handler) -> Handler:
                self.handle(pattern, fn)
                return fn

            return decorator

        if handler is None:
            msg = f"no handler for pattern {pattern!r}"
            raise ConfigurationError(msg)

        method, path = split_method_and_pattern(pattern)
        full_pattern = join_method_and_pattern(method, join_prefix_and_pattern(self.prefix, path))
        self._mux.handle(full_pattern, chain(self._handler_middlewares, handler))
        logger.debug(
            "registered %r with %d handler middleware(s)",
            full_pattern,
            len(self._handler_middlewares),
        )

        self._state = _AFTER_REGISTRATION[self._state]
        return None

    handle_func = handle

    # -- Dispatch --

    def __call__(self, request: Request) -> Response:
        """Run subtree middleware, then dispatch through the table."""
        return chain(self._subrouter_middlewares, self._mux)(request)
