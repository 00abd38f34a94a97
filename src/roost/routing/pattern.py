"""Registration pattern parsing.

A pattern string ``[METHOD ]host/path`` is parsed once, at registration,
into a frozen ``Pattern`` the mux can insert into its trie.
"""

import re
from dataclasses import dataclass
from enum import Enum

from roost.errors import ConfigurationError
from roost.routing.path import clean_path, split_method_and_pattern

# RFC 9110 token characters
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


class SegmentKind(Enum):
    LITERAL = "literal"
    WILDCARD = "wildcard"
    MULTI = "multi"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed path segment.

    Literal:  ``users``     (kind=LITERAL, value="users")
    Anchor:   ``{$}``       (kind=LITERAL, value="") — the empty segment after a trailing slash
    Wildcard: ``{id}``      (kind=WILDCARD, name="id")
    Multi:    ``{rest...}`` (kind=MULTI, name="rest")
    Subtree:  trailing ``/`` (kind=MULTI, name="")
    """

    kind: SegmentKind
    value: str = ""
    name: str = ""


@dataclass(frozen=True, slots=True)
class Pattern:
    """A parsed registration pattern."""

    raw: str
    method: str
    host: str
    segments: tuple[Segment, ...]

    @property
    def is_subtree(self) -> bool:
        """True when the pattern ends in a multi wildcard (named or not)."""
        return bool(self.segments) and self.segments[-1].kind is SegmentKind.MULTI

    @property
    def wildcard_names(self) -> tuple[str, ...]:
        """Names of all capturing segments, in order (anonymous ones as ``""``)."""
        return tuple(s.name for s in self.segments if s.kind is not SegmentKind.LITERAL)

    def __str__(self) -> str:
        return self.raw


def _parse_segment(part: str, *, last: bool, raw: str) -> Segment:
    if not (part.startswith("{") and part.endswith("}")):
        if "{" in part or "}" in part:
            msg = f"bad wildcard segment {part!r} in {raw!r}: must be an entire segment"
            raise ConfigurationError(msg)
        return Segment(SegmentKind.LITERAL, value=part)

    inner = part[1:-1]
    if inner == "$":
        if not last:
            msg = f"{{$}} not at end of {raw!r}"
            raise ConfigurationError(msg)
        return Segment(SegmentKind.LITERAL, value="")

    kind = SegmentKind.WILDCARD
    if inner.endswith("..."):
        if not last:
            msg = f"{{...}} wildcard not at end of {raw!r}"
            raise ConfigurationError(msg)
        inner = inner[:-3]
        kind = SegmentKind.MULTI
    if not inner.isidentifier():
        msg = f"bad wildcard name {inner!r} in {raw!r}"
        raise ConfigurationError(msg)
    return Segment(kind, name=inner)


def parse_pattern(raw: str) -> Pattern:
    """Parse and validate a registration pattern.

    Raises ``ConfigurationError`` for anything the mux could never match.

    Examples::

        "/a/"            -> segments [a, <subtree>]
        "/a/{$}"         -> segments [a, ""]
        "POST /a/{id}"   -> method "POST", segments [a, {id}]
        "example.com/a"  -> host "example.com", segments [a]
    """
    if not raw:
        msg = "empty pattern"
        raise ConfigurationError(msg)

    method, rest = split_method_and_pattern(raw)
    if method and not _METHOD_RE.fullmatch(method):
        msg = f"invalid method {method!r} in {raw!r}"
        raise ConfigurationError(msg)

    slash = rest.find("/")
    if slash == -1:
        msg = f"host/path missing / in {raw!r}"
        raise ConfigurationError(msg)
    host, path = rest[:slash], rest[slash:]

    if clean_path(path) != path:
        msg = f"pattern {raw!r} has an unclean path and can never match"
        raise ConfigurationError(msg)

    parts = path[1:].split("/")
    segments: list[Segment] = []
    seen: set[str] = set()
    for i, part in enumerate(parts):
        last = i == len(parts) - 1
        if last and part == "":
            segments.append(Segment(SegmentKind.MULTI))
            break
        seg = _parse_segment(part, last=last, raw=raw)
        if seg.name:
            if seg.name in seen:
                msg = f"duplicate wildcard name {seg.name!r} in {raw!r}"
                raise ConfigurationError(msg)
            seen.add(seg.name)
        segments.append(seg)

    return Pattern(raw=raw, method=method, host=host.lower(), segments=tuple(segments))
