"""Cookie parsing and SetCookie serialization.

Consolidates the read side (parse_cookies, used by Request) and the
write side (SetCookie, used by Response) in one module.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive attached to a Response."""

    name: str
    value: str
    max_age: int | None = None
    expires: str | None = None
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"

    def with_value(self, value: str) -> SetCookie:
        """Return a copy with a different value; every attribute is kept."""
        return replace(self, value=value)

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.expires:
            parts.append(f"Expires={self.expires}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


def parse_set_cookie(header: str) -> SetCookie:
    """Parse a raw ``Set-Cookie`` header value into a SetCookie.

    Attributes missing from the header stay missing (no default path,
    HttpOnly, or SameSite is added), so re-serializing reproduces the
    directive. Unknown attributes are dropped.

    Raises:
        ValueError: If the header has no ``name=value`` pair.
    """
    first, *attrs = header.split(";")
    if "=" not in first:
        msg = f"Set-Cookie header has no name=value pair: {header!r}"
        raise ValueError(msg)
    name, _, value = first.partition("=")

    max_age: int | None = None
    expires: str | None = None
    path = ""
    domain: str | None = None
    secure = False
    httponly = False
    samesite = ""
    for attr in attrs:
        key, _, attr_value = attr.strip().partition("=")
        key = key.strip().lower()
        attr_value = attr_value.strip()
        if key == "max-age":
            try:
                max_age = int(attr_value)
            except ValueError:
                continue
        elif key == "expires":
            expires = attr_value
        elif key == "path":
            path = attr_value
        elif key == "domain":
            domain = attr_value
        elif key == "secure":
            secure = True
        elif key == "httponly":
            httponly = True
        elif key == "samesite":
            samesite = attr_value

    return SetCookie(
        name=name.strip(),
        value=value.strip(),
        max_age=max_age,
        expires=expires,
        path=path,
        domain=domain,
        secure=secure,
        httponly=httponly,
        samesite=samesite,
    )
