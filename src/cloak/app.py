"""ASGI application.

Mutable during setup (routes, middleware, lifecycle hooks). Frozen at
first request (or at lifespan startup) into an immutable route table
and middleware tuple.
"""

import inspect
import threading
from collections.abc import Callable
from typing import Any, TypeAlias

from cloak._internal.asgi import Receive, Scope, Send
from cloak._internal.invoke import accepts_request
from cloak.config import AppConfig
from cloak.middleware.protocol import Middleware
from cloak.routing import Route, Router
from cloak.server.handler import handle_request

Handler: TypeAlias = Callable[..., Any]


class App:
    """The cloak application.

    Usage::

        from cloak.app import App
        from cloak.middleware import EncryptCookiesConfig, EncryptCookiesMiddleware

        app = App()
        app.add_middleware(EncryptCookiesMiddleware(EncryptCookiesConfig(key=KEY)))

        @app.route("/")
        def index(request):
            return f"Hello, {request.cookies.get('name', 'stranger')}"

    Serve it with any ASGI 3 server.

    The freeze transition uses a Lock + double-check so exactly one
    thread compiles the app, even when several workers call
    ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[Route] = []
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set by _freeze()
        self._router: Router | None = None
        self._middleware: tuple[Callable[..., Any], ...] = ()

    # -- Setup --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler for *path* (GET by default)."""
        self._check_not_frozen()

        def decorator(func: Handler) -> Handler:
            self._pending_routes.append(
                Route(
                    path=path,
                    handler=func,
                    methods=frozenset(m.upper() for m in (methods or ["GET"])),
                    takes_request=accepts_request(func),
                )
            )
            return func

        return decorator

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline. The first one added runs outermost."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook to run at lifespan startup (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a hook to run at lifespan shutdown (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._middleware,
            debug=self.config.debug,
            server_header=self.config.server_header,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run registered startup hooks in order."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run registered shutdown hooks in order."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile routes and middleware. MUST hold _freeze_lock."""
        router = Router()
        for route in self._pending_routes:
            router.add(route)
        self._router = router
        self._middleware = tuple(self._middleware_list)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before serving."
            )
            raise RuntimeError(msg)
