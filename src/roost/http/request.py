"""Immutable HTTP request.

Frozen metadata plus the fully-read body. Middleware that needs to change
what the router sees (e.g. the path) builds a new request with
``with_path()`` and passes that inward.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from roost.http.headers import Headers
from roost.http.query import QueryParams


def strip_host_port(host: str) -> str:
    """Drop a trailing ``:port`` from *host*, keeping IPv6 brackets intact."""
    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else host
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name
    return host


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` is filled in by the ``ServeMux`` that selected the
    handler; the innermost router's match wins.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    body: bytes = b""

    # -- Computed properties --

    @property
    def host(self) -> str:
        """Request host without port, lowercased.

        Taken from the ``Host`` header, falling back to the server address.
        """
        raw = self.headers.get("host")
        if raw is None and self.server is not None:
            raw = self.server[0]
        return strip_host_port(raw or "").lower()

    @property
    def url(self) -> str:
        """Path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs}"
        return self.path

    def path_value(self, name: str) -> str:
        """Return the value captured by wildcard ``{name}``, or ``""``."""
        return self.path_params.get(name, "")

    # -- Derived requests --

    def with_path(self, path: str) -> Request:
        """Return a copy of this request with a different path."""
        return replace(self, path=path)

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy of this request with different path parameters."""
        return replace(self, path_params=path_params)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], body: bytes = b"") -> Request:
        """Create a Request from an ASGI scope and an already-read body."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            body=body,
        )
