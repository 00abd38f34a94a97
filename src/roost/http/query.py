"""Request query string.

The router never interprets the query: it only appends it, unchanged, to
redirect locations. Handlers that want individual values use ``get``.
"""

from urllib.parse import parse_qsl


class QueryParams:
    """The raw query string of a request, with on-demand value lookup."""

    __slots__ = ("raw",)

    def __init__(self, query_string: bytes = b"") -> None:
        # Kept undecoded (latin-1 round-trips every byte)
        self.raw = query_string.decode("latin-1")

    def __bool__(self) -> bool:
        return bool(self.raw)

    def __repr__(self) -> str:
        return f"QueryParams({self.raw!r})"

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first decoded value for *key*, or *default*."""
        for name, value in parse_qsl(self.raw, keep_blank_values=True):
            if name == key:
                return value
        return default
