"""ASGI handler — translates ASGI scope/messages to cloak types.

The only component that touches raw HTTP scopes directly. Converts the
scope to a Request, dispatches through middleware and routing, and sends
the Response back through ASGI send().
"""

import json as json_module
from collections.abc import Callable
from typing import Any

from cloak._internal.asgi import Receive, Scope, Send
from cloak._internal.invoke import invoke
from cloak.errors import HTTPError
from cloak.http.request import Request
from cloak.http.response import Response
from cloak.middleware.protocol import Next
from cloak.routing import Router
from cloak.server.errors import handle_http_error, handle_internal_error
from cloak.server.sender import send_response


def to_response(result: Any) -> Response:
    """Convert a handler's return value into a Response.

    ``Response`` passes through; ``str``/``bytes`` become the body;
    ``dict``/``list`` are serialized as JSON.
    """
    match result:
        case Response():
            return result
        case str() | bytes():
            return Response(body=result)
        case dict() | list():
            return Response(
                body=json_module.dumps(result),
                content_type="application/json",
            )
        case None:
            return Response(status=204)
    msg = f"Handler returned unsupported type {type(result).__name__}"
    raise TypeError(msg)


def build_pipeline(
    middleware: tuple[Callable[..., Any], ...],
    dispatch: Next,
) -> Next:
    """Wrap *dispatch* in *middleware*; the first middleware runs outermost."""
    handler = dispatch
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: tuple[Callable[..., Any], ...],
    debug: bool,
    server_header: str = "",
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    async def dispatch(req: Request) -> Response:
        # HTTPErrors from routing and handlers become responses here, inside
        # the middleware chain, so their Set-Cookie directives get encrypted.
        try:
            route = router.match(req.method, req.path)
            if route.takes_request:
                result = await invoke(route.handler, req)
            else:
                result = await invoke(route.handler)
        except HTTPError as exc:
            return handle_http_error(exc, req, debug)
        return to_response(result)

    try:
        response = await build_pipeline(middleware, dispatch)(request)
    except HTTPError as exc:
        # Raised by a middleware: nothing downstream can encrypt cookies now
        response = handle_http_error(exc, request, debug, allow_cookies=False)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    if server_header:
        response = response.with_header("Server", server_header)

    head = request.method == "HEAD"
    try:
        await send_response(response, send, head=head)
    except UnicodeEncodeError as exc:
        # Headers are encoded before the first send(), so nothing went out yet
        await send_response(handle_internal_error(exc, request, debug), send, head=head)
