"""Roost — composable router trees for Python HTTP handlers.

Build a tree of path-scoped handlers and middleware stacks; each request
runs through exactly the middleware its position in the tree implies.

Basic usage::

    from roost import Response, Router

    router = Router()
    router.use(request_logger)

    @router.handle("GET /")
    def index(request):
        return Response("Hello, World!")

    def api(sub: Router) -> None:
        sub.use(require_token)
        sub.handle("GET /users/{id}", show_user)

    router.route("/api", api)

Serve it with any ASGI server::

    from roost.server import ASGIHandler
    app = ASGIHandler(router)
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "Handler",
    "MethodNotAllowed",
    "Middleware",
    "MuxConfig",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "RoostError",
    "Router",
    "ServeMux",
    "chain",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import roost`` fast while providing a clean top-level API.
    """
    if name in ("Router", "ServeMux"):
        from roost import routing as _routing

        return getattr(_routing, name)

    if name == "MuxConfig":
        from roost.config import MuxConfig

        return MuxConfig

    if name == "Request":
        from roost.http.request import Request

        return Request

    if name == "Response":
        from roost.http.response import Response

        return Response

    if name in ("Handler", "Middleware", "chain"):
        from roost import middleware as _mw

        return getattr(_mw, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "Redirect",
        "RoostError",
    ):
        from roost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
