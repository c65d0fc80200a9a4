"""Error handling for cloak requests.

Maps HTTPError exceptions and unexpected failures to fresh Response
objects. Nothing from the failed handler's response survives, cookies
included.
"""

import logging
import traceback

from cloak.errors import HTTPError
from cloak.http.request import Request
from cloak.http.response import Response

logger = logging.getLogger("cloak.server")


def handle_http_error(
    exc: HTTPError,
    request: Request,
    debug: bool,
    *,
    allow_cookies: bool = True,
) -> Response:
    """Map an HTTPError to a plain-text Response with its status.

    With ``allow_cookies=False`` any ``Set-Cookie`` in ``exc.headers`` is
    dropped: the response is built outside the middleware chain and would
    otherwise carry the cookie unencrypted.
    """
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status, content_type="text/plain; charset=utf-8")
    for name, value in exc.headers:
        if not allow_cookies and name.lower() == "set-cookie":
            logger.warning(
                "Dropped Set-Cookie from %d raised outside the handler: %s %s",
                exc.status,
                request.method,
                request.path,
            )
            continue
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, debug: bool) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
    else:
        body = "Internal Server Error"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")
