"""Exact-path routing.

Routes are registered during app setup and compiled into a frozen
lookup table the first time the app serves a request.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cloak.errors import MethodNotAllowed, NotFound


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    takes_request: bool = False


class Router:
    """Maps ``(method, path)`` to a Route."""

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, list[Route]] = {}

    def add(self, route: Route) -> None:
        existing = self._routes.setdefault(route.path, [])
        for other in existing:
            overlap = other.methods & route.methods
            if overlap:
                msg = f"Duplicate route {', '.join(sorted(overlap))} {route.path}"
                raise ValueError(msg)
        existing.append(route)

    def match(self, method: str, path: str) -> Route:
        """Return the route for *method* and *path*.

        Raises:
            NotFound: No route has this path.
            MethodNotAllowed: The path exists, but not for *method*.
        """
        candidates = self._routes.get(path)
        if not candidates:
            raise NotFound
        for route in candidates:
            if method in route.methods:
                return route
        # HEAD falls back to GET
        if method == "HEAD":
            for route in candidates:
                if "GET" in route.methods:
                    return route
        allowed = frozenset().union(*(route.methods for route in candidates))
        raise MethodNotAllowed(allowed)

    def __len__(self) -> int:
        return sum(len(routes) for routes in self._routes.values())
