"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    EncryptCookiesMiddleware -- Authenticated encryption of cookie values
"""

from cloak.middleware.encrypt_cookies import EncryptCookiesConfig, EncryptCookiesMiddleware
from cloak.middleware.protocol import Middleware, Next

__all__ = [
    "EncryptCookiesConfig",
    "EncryptCookiesMiddleware",
    "Middleware",
    "Next",
]
