"""Roost exception hierarchy.

Shared across Router, ServeMux, the ASGI handler, and middleware so every
module raises and catches the same types.
"""

from dataclasses import dataclass

from roost.http.response import Response


class RoostError(Exception):
    """Base for all roost-specific errors."""


class ConfigurationError(RoostError):
    """Raised when the router tree is built inconsistently.

    Covers ``use()`` after routes on the same router, ``route()`` without
    a callback, and invalid or conflicting patterns. Raised during setup,
    never per request.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoostError):
    """An outcome that maps directly to an HTTP status code.

    Raised by ``ServeMux.match()`` and optionally by handlers. The mux and
    the ASGI handler turn these into responses with ``error_response()``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no pattern matched the request."""

    def __init__(self, detail: str = "404 page not found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path matched, but not for this HTTP method.

    Includes an ``Allow`` header listing the methods that would match.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "Method Not Allowed") -> None:
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", ", ".join(sorted(allowed))),),
        )

    @property
    def allowed(self) -> tuple[str, ...]:
        """The methods advertised in the ``Allow`` header."""
        return tuple(self.headers[0][1].split(", "))


class Redirect(HTTPError):  # noqa: N818
    """301 — the request should be repeated at ``location``.

    Produced for subtree paths requested without their trailing slash
    and for unclean paths such as ``/a//b``.
    """

    def __init__(self, location: str, status: int = 301) -> None:
        super().__init__(
            status=status,
            detail="Moved Permanently",
            headers=(("Location", location),),
        )

    @property
    def location(self) -> str:
        return self.headers[0][1]


def error_response(exc: HTTPError) -> Response:
    """Render an ``HTTPError`` as a plain-text response."""
    body = f"{exc.detail}\n" if exc.detail else ""
    return Response(
        body=body,
        status=exc.status,
        content_type="text/plain; charset=utf-8",
        headers=exc.headers,
    )
