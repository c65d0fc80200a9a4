"""Call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``, and may accept the request or
nothing at all. The sync/async and arity checks live here only.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def accepts_request(handler: Any) -> bool:
    """Whether *handler* takes a positional argument for the request."""
    params = [
        p
        for p in inspect.signature(handler).parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
    ]
    return bool(params)
