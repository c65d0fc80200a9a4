"""Cloak — transparent authenticated encryption for HTTP cookies.

Handlers read and write plaintext cookie values; everything that crosses
the wire is Fernet-encrypted. A forged, stale, or corrupt cookie shows up
as an empty string instead of an error.

Basic usage::

    from cloak import App, EncryptCookiesConfig, EncryptCookiesMiddleware, generate_key

    app = App()
    app.add_middleware(EncryptCookiesMiddleware(EncryptCookiesConfig(
        key=generate_key(),
        bypassed=("csrf_token",),
    )))

    @app.route("/")
    def index(request):
        return f"Hello, {request.cookies.get('name') or 'stranger'}"
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "CloakError",
    "ConfigurationError",
    "CookieCipher",
    "EncryptCookiesConfig",
    "EncryptCookiesMiddleware",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "SetCookie",
    "TamperError",
    "generate_key",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cloak`` fast (no ``cryptography`` import) while
    providing a clean top-level API.
    """
    if name == "App":
        from cloak.app import App

        return App

    if name == "AppConfig":
        from cloak.config import AppConfig

        return AppConfig

    if name in ("CookieCipher", "generate_key"):
        from cloak import crypto as _crypto

        return getattr(_crypto, name)

    if name in ("EncryptCookiesConfig", "EncryptCookiesMiddleware"):
        from cloak.middleware import encrypt_cookies as _ec

        return getattr(_ec, name)

    if name in ("Middleware", "Next"):
        from cloak.middleware import protocol as _mw

        return getattr(_mw, name)

    if name == "Request":
        from cloak.http.request import Request

        return Request

    if name == "Response":
        from cloak.http.response import Response

        return Response

    if name == "SetCookie":
        from cloak.http.cookies import SetCookie

        return SetCookie

    if name in (
        "CloakError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "TamperError",
    ):
        from cloak import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
