"""Tests for the cloak exception hierarchy and top-level exports."""

import pytest

import cloak
from cloak.errors import (
    CloakError,
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    TamperError,
)


class TestHierarchy:
    @pytest.mark.parametrize("exc_type", [ConfigurationError, TamperError, HTTPError])
    def test_subclasses_cloak_error(self, exc_type: type) -> None:
        assert issubclass(exc_type, CloakError)

    def test_http_error_str(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"
        assert str(HTTPError(status=500)) == "500"

    def test_not_found_defaults(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"

    def test_method_not_allowed_sorted_allow(self) -> None:
        exc = MethodNotAllowed(frozenset({"PUT", "GET"}))
        assert exc.headers == (("Allow", "GET, PUT"),)
        assert "GET, PUT" in exc.detail


class TestLazyExports:
    def test_public_names_resolve(self) -> None:
        for name in cloak.__all__:
            assert getattr(cloak, name) is not None

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            cloak.does_not_exist  # noqa: B018
