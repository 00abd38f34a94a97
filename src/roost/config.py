"""Router configuration.

MuxConfig is a frozen dataclass — immutable after creation, shared by
every router in a tree, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Pattern table configuration. Immutable after creation.

    All fields default to the standard multiplexer behaviour. Override
    what you need::

        config = MuxConfig(redirect_trailing_slash=False)
        router = Router(config=config)
    """

    # Redirect "/tree" to "/tree/" when only the subtree pattern exists
    redirect_trailing_slash: bool = True

    # Redirect unclean paths ("/a//b", "/a/../b") to their cleaned form
    clean_path: bool = True

    # HEAD requests fall back to GET patterns
    head_matches_get: bool = True

    # Status used for both kinds of redirect
    redirect_status: int = 301

    not_found_body: str = "404 page not found"
