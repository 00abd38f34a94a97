"""Pattern table with trie-based path matching.

``ServeMux`` owns one trie per (host, method) pair. Patterns are inserted
during setup; afterwards the table is only read, so concurrent dispatch
needs no locking.
"""

from __future__ import annotations

import logging

from roost.config import MuxConfig
from roost.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound, Redirect, error_response
from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Handler
from roost.routing.path import clean_path, escape_path
from roost.routing.pattern import SegmentKind, parse_pattern
from roost.routing.route import Route, RouteMatch

logger = logging.getLogger("roost.routing")


class _TrieNode:
    """A node in a route trie. Mutable during registration only."""

    __slots__ = ("children", "multi_route", "route", "wildcard_child")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node ("" is the {$} anchor)
        self.children: dict[str, _TrieNode] = {}
        # Single {name} wildcard child (names live on the pattern)
        self.wildcard_child: _TrieNode | None = None
        # Route ending in {name...} or a trailing slash at this depth
        self.multi_route: Route | None = None
        # Route ending exactly at this node
        self.route: Route | None = None


def _split(path: str) -> list[str]:
    """Split a request path into segments; ``"/a/"`` -> ``["a", ""]``."""
    return path.removeprefix("/").split("/")


def _match_node(
    node: _TrieNode,
    parts: list[str],
    index: int,
    captures: list[str],
) -> tuple[Route, list[str]] | None:
    """Recursively match path parts: literal, then wildcard, then multi."""
    if index == len(parts):
        if node.route is not None:
            return node.route, captures
        return None

    part = parts[index]

    # 1. Literal child
    child = node.children.get(part)
    if child is not None:
        result = _match_node(child, parts, index + 1, captures)
        if result is not None:
            return result

    # 2. Single wildcard (never matches an empty segment)
    if node.wildcard_child is not None and part:
        result = _match_node(node.wildcard_child, parts, index + 1, [*captures, part])
        if result is not None:
            return result

    # 3. Multi wildcard consumes the rest
    if node.multi_route is not None:
        return node.multi_route, [*captures, "/".join(parts[index:])]

    return None


def _is_exact(found: tuple[Route, list[str]] | None) -> bool:
    """True if *found* matched without a trailing multi wildcard eating anything."""
    if found is None:
        return False
    route, captures = found
    if not route.pattern.is_subtree:
        return True
    return captures[-1] == ""


class ServeMux:
    """Request multiplexer keyed by ``[METHOD ]host/path`` patterns.

    Usage::

        mux = ServeMux()
        mux.handle("GET /users/{id}", show_user)
        mux.handle("/static/", static_files)
        response = mux(request)

    Precedence: patterns for the request's host before host-less ones;
    the exact method, then GET for HEAD, then method-less; within a trie a
    literal segment beats ``{name}``, which beats ``{name...}``.
    """

    __slots__ = ("_routes", "_tries", "config")

    def __init__(self, config: MuxConfig | None = None) -> None:
        self.config = config or MuxConfig()
        # host -> method -> trie root ("" means any host / any method)
        self._tries: dict[str, dict[str, _TrieNode]] = {}
        self._routes: list[Route] = []

    # -- Registration --

    def handle(self, pattern: str, handler: Handler) -> None:
        """Register *handler* for *pattern*.

        Raises ``ConfigurationError`` for invalid patterns or when an
        equivalent pattern is already registered.
        """
        if handler is None:
            msg = f"no handler for pattern {pattern!r}"
            raise ConfigurationError(msg)
        parsed = parse_pattern(pattern)
        route = Route(pattern=parsed, handler=handler)

        node = self._tries.setdefault(parsed.host, {}).setdefault(parsed.method, _TrieNode())
        for seg in parsed.segments:
            if seg.kind is SegmentKind.MULTI:
                if node.multi_route is not None:
                    self._conflict(parsed.raw, node.multi_route)
                node.multi_route = route
                break
            if seg.kind is SegmentKind.WILDCARD:
                if node.wildcard_child is None:
                    node.wildcard_child = _TrieNode()
                node = node.wildcard_child
            else:
                node = node.children.setdefault(seg.value, _TrieNode())
        else:
            if node.route is not None:
                self._conflict(parsed.raw, node.route)
            node.route = route

        self._routes.append(route)
        logger.debug("registered pattern %r", parsed.raw)

    @staticmethod
    def _conflict(pattern: str, existing: Route) -> None:
        msg = f"pattern {pattern!r} conflicts with pattern {existing.pattern.raw!r}"
        raise ConfigurationError(msg)

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def patterns(self) -> list[str]:
        """All registered pattern strings, in registration order."""
        return [route.pattern.raw for route in self._routes]

    # -- Matching --

    def _hosts_for(self, host: str) -> list[str]:
        if host and host in self._tries:
            return [host, ""]
        return [""]

    def _methods_for(self, method: str) -> list[str]:
        methods = [method]
        if method == "HEAD" and self.config.head_matches_get:
            methods.append("GET")
        methods.append("")
        return methods

    def _lookup(self, method: str, host: str, parts: list[str]) -> tuple[Route, list[str]] | None:
        for h in self._hosts_for(host):
            tries = self._tries.get(h)
            if not tries:
                continue
            for m in self._methods_for(method):
                root = tries.get(m)
                if root is None:
                    continue
                found = _match_node(root, parts, 0, [])
                if found is not None:
                    return found
        return None

    def _allowed_methods(self, host: str, parts: list[str]) -> frozenset[str]:
        allowed: set[str] = set()
        for h in self._hosts_for(host):
            for m, root in self._tries.get(h, {}).items():
                if m and _match_node(root, parts, 0, []) is not None:
                    allowed.add(m)
        if "GET" in allowed and self.config.head_matches_get:
            allowed.add("HEAD")
        return frozenset(allowed)

    def match(self, method: str, host: str, path: str, query: str = "") -> RouteMatch:
        """Select the route for a request.

        Returns a ``RouteMatch`` on success.
        Raises ``Redirect`` when the path must gain a trailing slash or be cleaned.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        Raises ``NotFound`` otherwise.
        """
        cfg = self.config
        cleaned = clean_path(path) if cfg.clean_path else path
        suffix = f"?{query}" if query else ""

        found = self._lookup(method, host, _split(cleaned))

        if cfg.redirect_trailing_slash and not cleaned.endswith("/") and not _is_exact(found):
            with_slash = cleaned + "/"
            if _is_exact(self._lookup(method, host, _split(with_slash))):
                logger.debug("redirecting %s to %s", path, with_slash)
                raise Redirect(escape_path(with_slash) + suffix, status=cfg.redirect_status)

        if cleaned != path:
            logger.debug("redirecting %s to %s", path, cleaned)
            raise Redirect(escape_path(cleaned) + suffix, status=cfg.redirect_status)

        if found is None:
            allowed = self._allowed_methods(host, _split(cleaned))
            if allowed:
                raise MethodNotAllowed(allowed)
            raise NotFound(cfg.not_found_body)

        route, captures = found
        params = {
            name: value
            for name, value in zip(route.pattern.wildcard_names, captures, strict=True)
            if name
        }
        return RouteMatch(route=route, path_params=params)

    # -- Dispatch --

    def __call__(self, request: Request) -> Response:
        """Dispatch *request* to the matching handler.

        Not-found, method-mismatch and redirect outcomes become plain
        responses; nothing is raised to the caller.
        """
        try:
            match = self.match(request.method, request.host, request.path, request.query.raw)
        except HTTPError as exc:
            return error_response(exc)
        return match.route.handler(request.with_path_params(match.path_params))
