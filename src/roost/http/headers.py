"""Request headers, looked up by case-insensitive name.

The router only consults ``Host``; everything else is carried through for
handlers and middleware.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class Headers:
    """Request headers, read-only once built.

    Built from the ``(name, value)`` byte pairs of an ASGI scope. Names are
    folded to lowercase once, at construction. Repeated headers keep every
    value; ``get`` returns the first.
    """

    __slots__ = ("_values",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        values: dict[str, tuple[str, ...]] = {}
        for name, value in raw:
            key = name.decode("latin-1").lower()
            values[key] = (*values.get(key, ()), value.decode("latin-1"))
        self._values = values

    @classmethod
    def from_dict(cls, headers: Mapping[str, str] | None) -> Headers:
        """Build headers from a plain ``str -> str`` mapping."""
        return cls(
            (name.encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value sent for *name*, or *default*."""
        values = self._values.get(name.lower())
        return values[0] if values else default
