"""Tests for roost.http — Headers, QueryParams, Request, Response."""

import pytest

from roost.http.headers import Headers
from roost.http.query import QueryParams
from roost.http.request import Request, strip_host_port
from roost.http.response import Response


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Content-Type", "text/plain"))
        assert h.get("content-type") == "text/plain"
        assert h.get("CONTENT-TYPE") == "text/plain"

    def test_missing_returns_default(self) -> None:
        h = _h(("Accept", "*/*"))
        assert h.get("x-missing") is None
        assert h.get("x-missing", "fallback") == "fallback"

    def test_contains(self) -> None:
        h = _h(("Host", "example.com"))
        assert "HOST" in h
        assert "accept" not in h
        assert 42 not in h  # type: ignore[operator]

    def test_repeated_header_first_value_wins(self) -> None:
        h = _h(("Host", "a.test"), ("host", "b.test"))
        assert h.get("host") == "a.test"

    def test_from_dict(self) -> None:
        h = Headers.from_dict({"Host": "example.com", "X-Trace": "1"})
        assert h.get("host") == "example.com"
        assert h.get("x-trace") == "1"
        assert "content-type" not in Headers.from_dict(None)


class TestQueryParams:
    def test_raw_is_kept_unchanged(self) -> None:
        assert QueryParams(b"a=1&b=%20x").raw == "a=1&b=%20x"
        assert QueryParams().raw == ""

    def test_bool(self) -> None:
        assert QueryParams(b"a=1")
        assert not QueryParams()

    def test_get_first_decoded_value(self) -> None:
        q = QueryParams(b"tag=python&tag=go&q=hello+world&empty=")
        assert q.get("tag") == "python"
        assert q.get("q") == "hello world"
        assert q.get("empty") == ""
        assert q.get("missing") is None
        assert q.get("missing", "x") == "x"


class TestStripHostPort:
    @pytest.mark.parametrize(
        ("host", "expected"),
        [
            ("example.com", "example.com"),
            ("example.com:8080", "example.com"),
            ("[::1]:8000", "[::1]"),
            ("[::1]", "[::1]"),
            ("", ""),
        ],
    )
    def test_strip(self, host: str, expected: str) -> None:
        assert strip_host_port(host) == expected


class TestRequest:
    def test_host_from_header(self) -> None:
        request = Request("GET", "/", headers=Headers.from_dict({"Host": "Example.COM:443"}))
        assert request.host == "example.com"

    def test_host_falls_back_to_server(self) -> None:
        request = Request("GET", "/", server=("api.local", 80))
        assert request.host == "api.local"

    def test_host_empty_without_header_or_server(self) -> None:
        assert Request("GET", "/").host == ""

    def test_path_value(self) -> None:
        request = Request("GET", "/users/42", path_params={"id": "42"})
        assert request.path_value("id") == "42"
        assert request.path_value("missing") == ""

    def test_url_includes_query(self) -> None:
        request = Request("GET", "/search", query=QueryParams(b"q=roost"))
        assert request.url == "/search?q=roost"
        assert Request("GET", "/search").url == "/search"

    def test_with_path_returns_copy(self) -> None:
        original = Request("GET", "/a/")
        changed = original.with_path("/a")
        assert changed.path == "/a"
        assert original.path == "/a/"

    def test_with_path_params_returns_copy(self) -> None:
        original = Request("GET", "/a")
        changed = original.with_path_params({"x": "1"})
        assert changed.path_params == {"x": "1"}
        assert original.path_params == {}

    def test_frozen(self) -> None:
        request = Request("GET", "/")
        with pytest.raises(AttributeError):
            request.path = "/other"  # type: ignore[misc]

    def test_from_asgi(self) -> None:
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/items",
            "query_string": b"draft=1",
            "headers": [(b"host", b"example.com"), (b"content-type", b"application/json")],
            "server": ("example.com", 80),
            "client": ("127.0.0.1", 5000),
            "http_version": "2",
        }
        request = Request.from_asgi(scope, b'{"a": 1}')
        assert request.method == "POST"
        assert request.path == "/items"
        assert request.query.get("draft") == "1"
        assert request.headers.get("content-type") == "application/json"
        assert request.server == ("example.com", 80)
        assert request.client == ("127.0.0.1", 5000)
        assert request.http_version == "2"
        assert request.body == b'{"a": 1}'
        assert request.path_params == {}


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.body == ""
        assert r.status == 200
        assert r.content_type == "text/plain; charset=utf-8"
        assert r.headers == ()

    def test_chaining_returns_new_objects(self) -> None:
        r1 = Response("ok")
        r2 = r1.with_status(201).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert r1.status == 200
        assert r1.headers == ()
        assert r2.status == 201
        assert r2.headers == (("X-A", "1"), ("X-B", "2"))

    def test_with_content_type(self) -> None:
        r = Response().with_content_type("application/json")
        assert r.content_type == "application/json"

    def test_header_lookup_is_case_insensitive(self) -> None:
        r = Response().with_header("Location", "/a/")
        assert r.header("location") == "/a/"
        assert r.header("Allow") is None
        assert r.header("Allow", "GET") == "GET"

    def test_body_conversions(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"bytes").text == "bytes"
