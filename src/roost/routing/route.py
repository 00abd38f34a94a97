"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from roost.middleware.protocol import Handler
from roost.routing.pattern import Pattern


@dataclass(frozen=True, slots=True)
class Route:
    """A pattern bound to the handler registered for it.

    The handler is already wrapped with any handler-scoped middleware,
    or is a child router mounted at a subtree pattern.
    """

    pattern: Pattern
    handler: Handler


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    route: Route
    path_params: dict[str, str]
