"""Authenticated encryption for cookie values.

Thin wrapper around ``cryptography``'s Fernet (AES-128-CBC + HMAC-SHA256).
Tokens are url-safe base64 ASCII, so they can be used as cookie values
without further quoting.

Usage::

    from cloak.crypto import CookieCipher, generate_key

    cipher = CookieCipher(generate_key())
    token = cipher.encrypt("alice")
    cipher.decrypt(token)  # "alice"
"""

from cryptography.fernet import Fernet, InvalidToken

from cloak.errors import ConfigurationError, TamperError


def generate_key() -> str:
    """Return a fresh random key suitable for ``CookieCipher``."""
    return Fernet.generate_key().decode("ascii")


class CookieCipher:
    """Encrypts and authenticates string values with a static key.

    ``ttl`` (seconds), when set, makes ``decrypt`` reject tokens older
    than that; the timestamp is the one Fernet embeds at encryption time.
    """

    __slots__ = ("_fernet", "_ttl")

    def __init__(self, key: str | bytes, *, ttl: int | None = None) -> None:
        if not key:
            msg = "Cookie cipher key must not be empty."
            raise ConfigurationError(msg)
        if ttl is not None and ttl <= 0:
            msg = f"Cookie cipher ttl must be positive, got {ttl}."
            raise ConfigurationError(msg)
        try:
            self._fernet = Fernet(key)
        except (TypeError, ValueError) as exc:
            msg = f"Invalid cookie cipher key: {exc}"
            raise ConfigurationError(msg) from None
        self._ttl = ttl

    def encrypt(self, plaintext: str) -> str:
        """Encrypt *plaintext* and return the token as an ASCII string."""
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a token produced by ``encrypt``.

        Raises:
            TamperError: If the token was made with another key, was
                modified, has expired, or is not a token at all.
        """
        try:
            data = self._fernet.decrypt(ciphertext.encode("ascii"), ttl=self._ttl)
            return data.decode("utf-8")
        except (InvalidToken, UnicodeError) as exc:
            msg = "Cookie value failed authentication"
            raise TamperError(msg) from exc
