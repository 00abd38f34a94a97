"""ASGI entry point for roost handler trees."""

from roost.server.handler import ASGIHandler

__all__ = ["ASGIHandler"]
