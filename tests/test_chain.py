"""Tests for roost.middleware.chain — onion ordering."""

from roost.http.request import Request
from roost.http.response import Response
from roost.middleware.chain import chain


class TestChain:
    def test_no_middleware_returns_handler(self, h) -> None:
        handler = h("x")
        assert chain([], handler) is handler

    def test_first_registered_is_outermost(self, log, h, m) -> None:
        composed = chain([m("a"), m("b"), m("c")], h("x"))
        composed(Request("GET", "/"))
        assert log.events == ["a1", "b1", "c1", "xh", "c2", "b2", "a2"]

    def test_middleware_can_short_circuit(self, log, h, m) -> None:
        def deny(next):
            def handler(request: Request) -> Response:
                return Response("denied", status=403)

            return handler

        composed = chain([m("a"), deny, m("b")], h("x"))
        response = composed(Request("GET", "/"))
        assert response.status == 403
        assert log.events == ["a1", "a2"]

    def test_middleware_can_rewrite_request(self) -> None:
        seen: list[str] = []

        def rewrite(next):
            def handler(request: Request) -> Response:
                return next(request.with_path("/rewritten"))

            return handler

        def record(request: Request) -> Response:
            seen.append(request.path)
            return Response()

        chain([rewrite], record)(Request("GET", "/original"))
        assert seen == ["/rewritten"]

    def test_chain_does_not_mutate_input(self, h, m) -> None:
        middlewares = [m("a"), m("b")]
        chain(middlewares, h("x"))
        assert len(middlewares) == 2
