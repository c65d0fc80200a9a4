"""Encrypted cookie middleware.

Decrypts the cookies of every incoming request and encrypts the
Set-Cookie directives of every outgoing response, so handlers only
ever deal in plaintext while the client only ever holds ciphertext.

A cookie that fails to decrypt (wrong key, modified, expired, or not
ciphertext at all) reaches the handler as an empty string. Cookies named
in ``bypassed`` are left alone in both directions.
"""

import logging
from dataclasses import dataclass

from cloak.crypto import CookieCipher
from cloak.errors import ConfigurationError, TamperError
from cloak.http.request import Request
from cloak.http.response import Response
from cloak.middleware.protocol import Next

logger = logging.getLogger("cloak.middleware")


# -- Configuration --


@dataclass(frozen=True, slots=True)
class EncryptCookiesConfig:
    """Encrypted cookie middleware configuration.

    ``key`` is a Fernet key (see ``cloak.crypto.generate_key``).
    ``ttl`` optionally bounds the age of accepted cookies, in seconds.
    """

    key: str | bytes
    bypassed: tuple[str, ...] = ()
    ttl: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.bypassed, str):
            msg = (
                "EncryptCookiesConfig.bypassed must be a collection of cookie names, "
                f"not a string (did you mean bypassed=({self.bypassed!r},)?)"
            )
            raise ConfigurationError(msg)


# -- Middleware --


class EncryptCookiesMiddleware:
    """Transparent cookie encryption.

    Usage::

        from cloak.crypto import generate_key
        from cloak.middleware.encrypt_cookies import (
            EncryptCookiesConfig,
            EncryptCookiesMiddleware,
        )

        app.add_middleware(EncryptCookiesMiddleware(EncryptCookiesConfig(
            key=generate_key(),
            bypassed=("csrf_token",),
        )))

    Holds only read-only state, so one instance can serve any number of
    concurrent requests.
    """

    __slots__ = ("_bypassed", "_cipher")

    def __init__(self, config: EncryptCookiesConfig) -> None:
        self._cipher = CookieCipher(config.key, ttl=config.ttl)
        self._bypassed: frozenset[str] = frozenset(config.bypassed)

    @property
    def bypassed(self) -> frozenset[str]:
        """Cookie names exempt from encryption."""
        return self._bypassed

    def _decrypt(self, name: str, value: str) -> str:
        try:
            return self._cipher.decrypt(value)
        except TamperError:
            logger.debug("Rejected cookie %r: failed decryption", name)
            return ""

    def decrypt_cookies(self, request: Request) -> Request:
        """Return a new Request with every non-bypassed cookie decrypted."""
        decrypted = {
            name: value if name in self._bypassed else self._decrypt(name, value)
            for name, value in request.cookies.items()
        }
        return request.with_cookies(decrypted)

    def encrypt_cookies(self, response: Response) -> Response:
        """Return a new Response with every non-bypassed Set-Cookie encrypted.

        Directive order and count are preserved. Encryption errors propagate.
        """
        if not response.cookies:
            return response
        encrypted = tuple(
            cookie
            if cookie.name in self._bypassed
            else cookie.with_value(self._cipher.encrypt(cookie.value))
            for cookie in response.cookies
        )
        return response.with_cookies(encrypted)

    async def __call__(self, request: Request, next: Next) -> Response:
        """Decrypt request cookies, dispatch, then encrypt response cookies."""
        response = await next(self.decrypt_cookies(request))
        return self.encrypt_cookies(response)
