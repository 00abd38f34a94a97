"""Routing — composable router tree over a trie-based pattern table.

Routers are built during setup and only read while serving.
"""

from roost.routing.mux import ServeMux
from roost.routing.router import Router, RouterState

__all__ = ["Router", "RouterState", "ServeMux"]
