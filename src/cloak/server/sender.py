"""ASGI response sending — translates a cloak Response to ASGI messages."""

from cloak._internal.asgi import Send
from cloak.http.response import Response

# RFC 9110: 1xx, 204, and 304 responses do not include a message body.
_NO_BODY_STATUSES = frozenset({204, 304})


def _body_allowed(status: int) -> bool:
    return status >= 200 and status not in _NO_BODY_STATUSES


def encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    """Build the raw ASGI header list for *response*.

    Each Set-Cookie directive becomes its own ``set-cookie`` header, in
    the order the response holds them.
    """
    pairs = [
        ("content-type", response.content_type),
        *((name.lower(), value) for name, value in response.headers),
        *(("set-cookie", cookie.to_header_value()) for cookie in response.cookies),
        ("content-length", str(content_length)),
    ]
    return [(name.encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* as an ``http.response.start`` + single body message.

    For ``head=True`` the Content-Length of the full body is sent, but
    the body itself is not.
    """
    body = response.body_bytes if _body_allowed(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": b"" if head else body})
