"""String helpers for registration patterns and request paths.

Patterns have the shape ``[METHOD ]host/path``. Routers split off the
method, prefix the host/path part with their mount point, and put the
method back before handing the key to the mux.
"""

import posixpath
from urllib.parse import quote

_BLANKS = " \t"

# Sub-delims plus ":" and "@" stay literal in a path (RFC 3986 pchar)
_PATH_SAFE = "/:@!$&'()*+,;="


def split_method_and_pattern(pattern: str) -> tuple[str, str]:
    """Split a registration pattern into ``(method, host_and_path)``.

    Any run of spaces or tabs separates the two::

        "POST   /a"  -> ("POST", "/a")
        "/a"         -> ("", "/a")
    """
    for i, ch in enumerate(pattern):
        if ch in _BLANKS:
            return pattern[:i], pattern[i + 1 :].lstrip(_BLANKS)
    return "", pattern


def join_method_and_pattern(method: str, pattern: str) -> str:
    """Inverse of ``split_method_and_pattern``."""
    if not method:
        return pattern
    return f"{method} {pattern}"


def join_prefix_and_pattern(prefix: str, pattern: str) -> str:
    """Concatenate a router prefix and a child pattern.

    Doubled slashes are collapsed in a single pass, so ``"///"`` becomes
    ``"//"`` rather than ``"/"``.
    """
    return (prefix + pattern).replace("//", "/")


def clean_path(path: str) -> str:
    """Return the canonical form of a request path.

    Adds a leading slash, resolves ``.`` and ``..``, collapses repeated
    slashes, and keeps a trailing slash when the input had one.
    """
    if not path:
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    cleaned = posixpath.normpath(path)
    # normpath keeps a leading "//" (POSIX allows it to be special)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


def escape_path(path: str) -> str:
    """Percent-encode a decoded request path for use in a ``Location`` header.

    ``/日本/`` becomes ``/%E6%97%A5%E6%9C%AC/``, and a literal ``?`` becomes
    ``%3F`` so it is not read back as the start of a query string.
    """
    return quote(path, safe=_PATH_SAFE)
