"""Route registry with first-match-wins resolution.

Routes are matched in registration order: the first template that fits
an incoming URL wins, and the default route (registered with an empty
pattern) catches everything else.

Thread safety:
    Registration normally happens once at startup, but ``register`` may
    run concurrently with ``resolve``. A Lock guards the route list and
    the default route; ``resolve`` scans a snapshot taken under the lock,
    so matching itself runs without holding it.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeAlias

from linkway.errors import (
    DuplicateDefaultRoute,
    DuplicateRoute,
    InvalidPattern,
    RegistrationError,
)
from linkway.routing.matcher import RouteMatch, match_template
from linkway.routing.template import RouteTemplate, compile_template, sanitize_path
from linkway.routing.url import DeeplinkURL

logger = logging.getLogger("linkway.routing")

RegisterHook: TypeAlias = Callable[[RouteTemplate], object]


class RouteRegistry:
    """Ordered route table plus an optional default route.

    Usage::

        registry = RouteRegistry()
        registry.register("user/:id", UserScreen, route_param_names={"id"})
        registry.register(None, HomeScreen)  # default route
        match = registry.resolve("myapp://user/42")
        match.route_params  # {"id": "42"}

    Rejected registrations are logged on ``linkway.routing`` and kept in
    ``errors``; with ``strict=True`` they are raised instead.
    """

    __slots__ = ("_default_route", "_errors", "_lock", "_on_register", "_routes", "_strict")

    def __init__(
        self,
        *,
        strict: bool = False,
        on_register: RegisterHook | None = None,
    ) -> None:
        self._routes: list[RouteTemplate] = []
        self._default_route: RouteTemplate | None = None
        self._errors: list[RegistrationError] = []
        self._lock = threading.Lock()
        self._strict = strict
        self._on_register = on_register

    # -- Registration --

    def register(
        self,
        pattern: str | None,
        handler: Any,
        route_param_names: Iterable[str] = (),
        query_param_names: Iterable[str] = (),
    ) -> RouteTemplate | None:
        """Map *pattern* to *handler*.

        An empty or ``None`` pattern installs the default route. Returns
        the compiled template, or ``None`` when the registration was
        rejected as a duplicate or an invalid pattern.
        """
        key = sanitize_path(pattern)
        with self._lock:
            conflict = self._conflict(key, handler)
            if conflict is not None:
                return self._reject(conflict)
            try:
                template = compile_template(pattern, handler, route_param_names, query_param_names)
            except InvalidPattern as exc:
                return self._reject(exc)

            if template.is_default:
                self._default_route = template
                logger.debug("Mapped default route to %r", handler)
                return template
            self._routes.append(template)

        logger.debug("Mapped route %r to %r", template.pattern, handler)
        if self._on_register is not None:
            try:
                self._on_register(template)
            except Exception:
                logger.exception("Route hook failed for %r", template.pattern)
        return template

    def _conflict(self, key: str, handler: Any) -> RegistrationError | None:
        # Caller holds the lock
        if not key:
            return DuplicateDefaultRoute(handler) if self._default_route is not None else None
        if self._find(key) is not None:
            return DuplicateRoute(key, handler)
        return None

    def _find(self, key: str) -> RouteTemplate | None:
        # Caller holds the lock
        lowered = key.lower()
        for route in self._routes:
            if route.key == lowered:
                return route
        return None

    def _reject(self, error: RegistrationError) -> None:
        # Caller holds the lock
        if self._strict:
            raise error
        logger.error("%s", error)
        self._errors.append(error)

    # -- Lookup --

    def exists(self, pattern: str | None) -> bool:
        """Whether *pattern* is already mapped.

        An empty or ``None`` pattern asks about the default route.
        Comparison is case-insensitive on the sanitized pattern.
        """
        key = sanitize_path(pattern)
        with self._lock:
            if not key:
                return self._default_route is not None
            return self._find(key) is not None

    def lookup(self, pattern: str | None) -> RouteTemplate | None:
        """Return the template registered under *pattern*, if any.

        An empty or ``None`` pattern returns the default route.
        """
        key = sanitize_path(pattern)
        with self._lock:
            if not key:
                return self._default_route
            return self._find(key)

    def resolve(self, url: DeeplinkURL | str) -> RouteMatch | None:
        """Resolve *url* to the first matching template.

        Falls back to the default route (with no route parameters) when
        nothing matches. Returns ``None`` when there is no default either.
        """
        if isinstance(url, str):
            url = DeeplinkURL.parse(url)

        with self._lock:
            routes = tuple(self._routes)
            default_route = self._default_route

        for route in routes:
            params = match_template(route, url)
            if params is not None:
                return RouteMatch(template=route, route_params=params)

        if default_route is not None:
            return RouteMatch(template=default_route)
        return None

    # -- Introspection --

    @property
    def routes(self) -> tuple[RouteTemplate, ...]:
        """Registered non-default templates in priority order."""
        with self._lock:
            return tuple(self._routes)

    @property
    def default_route(self) -> RouteTemplate | None:
        return self._default_route

    @property
    def errors(self) -> tuple[RegistrationError, ...]:
        """Registrations rejected so far, oldest first."""
        with self._lock:
            return tuple(self._errors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes) + (self._default_route is not None)

    def __iter__(self) -> Iterator[RouteTemplate]:
        return iter(self.routes)

    def __contains__(self, pattern: object) -> bool:
        return (pattern is None or isinstance(pattern, str)) and self.exists(pattern)
