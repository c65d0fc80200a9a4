"""Tests for cloak.http.response — chainable immutable Response."""

from cloak.http.cookies import SetCookie
from cloak.http.response import Response


class TestResponseTransformations:
    def test_with_status(self) -> None:
        r = Response("x")
        assert r.with_status(201).status == 201
        assert r.status == 200

    def test_with_header(self) -> None:
        r = Response().with_header("X-Test", "1")
        assert r.headers == (("X-Test", "1"),)

    def test_set_cookie_header_becomes_directive(self) -> None:
        r = Response().with_header("Set-Cookie", "a=b; Path=/")

        assert r.headers == ()
        assert r.cookies == (SetCookie(name="a", value="b", path="/", httponly=False, samesite=""),)

    def test_with_headers_routes_set_cookie(self) -> None:
        r = Response().with_headers({"X-A": "1", "set-cookie": "a=b"})

        assert r.headers == (("X-A", "1"),)
        assert [c.name for c in r.cookies] == ["a"]

    def test_with_cookie_appends(self) -> None:
        r = Response().with_cookie("a", "1").with_cookie("a", "2")
        assert [c.value for c in r.cookies] == ["1", "2"]

    def test_without_cookie(self) -> None:
        (c,) = Response().without_cookie("session").cookies
        assert c.max_age == 0
        assert c.value == ""

    def test_with_cookies_replaces_list(self) -> None:
        r = Response("body", status=404).with_header("X", "y").with_cookie("a", "1")

        replaced = r.with_cookies((SetCookie("b", "2"),))

        assert [c.name for c in replaced.cookies] == ["b"]
        assert (replaced.body, replaced.status, replaced.headers) == ("body", 404, (("X", "y"),))
        assert [c.name for c in r.cookies] == ["a"]

    def test_cookie_lookup_returns_last(self) -> None:
        r = Response().with_cookie("a", "1").with_cookie("a", "2")
        assert r.cookie("a").value == "2"
        assert r.cookie("missing") is None


class TestResponseBody:
    def test_text_and_bytes(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()
        assert Response(b"abc").text == "abc"

    def test_json(self) -> None:
        assert Response('{"ok": true}').json() == {"ok": True}
