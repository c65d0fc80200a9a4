"""Cloak exception hierarchy.

Shared across the cipher, middleware, and server so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class CloakError(Exception):
    """Base for all cloak-specific errors."""


class ConfigurationError(CloakError):
    """Raised when configuration is invalid.

    Typically raised at construction time (bad cipher key, empty key).
    """


class TamperError(CloakError):
    """A ciphertext could not be authenticated or decoded.

    Covers a wrong key, a modified or truncated token, an expired token,
    and input that is not a token at all.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(CloakError):
    """An error that maps directly to an HTTP status code.

    Raised by routing or handlers. The ASGI handler catches these and
    turns them into a plain response with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
