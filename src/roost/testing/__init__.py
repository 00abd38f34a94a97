"""Test utilities for roost routers.

Provides a synchronous test client and assertions for routing outcomes::

    from roost.testing import TestClient, assert_redirect
"""

from roost.testing.assertions import assert_allow, assert_redirect, assert_status
from roost.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_allow",
    "assert_redirect",
    "assert_status",
]
