"""Shared fixtures: a call log plus handler and middleware factories."""

from collections.abc import Callable

import pytest

from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.protocol import Handler, Middleware


class CallLog:
    """Records the order in which handlers and middleware run."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def handler(self, name: str) -> Handler:
        def handler(request: Request) -> Response:
            self.events.append(f"{name}h{request.path_value('id')}{request.path_value('id2')}")
            return Response(name)

        return handler

    def middleware(self, name: str) -> Middleware:
        def middleware(next: Handler) -> Handler:
            def handler(request: Request) -> Response:
                self.events.append(f"{name}1")
                response = next(request)
                self.events.append(f"{name}2")
                return response

            return handler

        return middleware

    @property
    def joined(self) -> str:
        return "".join(self.events)


@pytest.fixture
def log() -> CallLog:
    return CallLog()


@pytest.fixture
def h(log: CallLog) -> Callable[[str], Handler]:
    return log.handler


@pytest.fixture
def m(log: CallLog) -> Callable[[str], Middleware]:
    return log.middleware
