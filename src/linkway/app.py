"""Linkway application class.

Owns the configuration, the route registry, and the dispatcher. Routes
are usually declared at import time with decorators; deeplinks are then
opened through ``Linkway.open()``.
"""

from collections.abc import Callable, Iterable
from typing import Any

from linkway.binding import declared_parameters, is_destination
from linkway.config import LinkwayConfig
from linkway.deeplink import Deeplink
from linkway.dispatch import DeeplinkHandler, Dispatcher, Navigation, Navigator
from linkway.lifecycle import ForegroundDetector, ScreenEventSource
from linkway.reporting import RouteReporter
from linkway.routing.registry import RouteRegistry
from linkway.routing.template import RouteTemplate


class Linkway:
    """The linkway application.

    Usage::

        links = Linkway(LinkwayConfig(token="abc123"), navigator=navigator)

        @links.route("product/:id")
        @dataclass(frozen=True)
        class ProductScreen:
            product_id: int = route_param("id")

        @links.handle
        def track(deeplink: Deeplink) -> None:
            analytics.track("deeplink", deeplink.to_dict())

        links.open("shop://product/42?utm_campaign=spring")

    Thread safety:
        Registration and resolution may overlap; the registry and the
        dispatcher guard their own state.
    """

    __slots__ = ("config", "dispatcher", "registry", "reporter")

    def __init__(
        self,
        config: LinkwayConfig | None = None,
        *,
        navigator: Navigator | None = None,
        reporter: RouteReporter | None = None,
    ) -> None:
        self.config: LinkwayConfig = config or LinkwayConfig()
        if reporter is None and self.config.debug:
            reporter = RouteReporter.from_config(self.config)
        self.reporter = reporter
        self.registry = RouteRegistry(strict=self.config.strict, on_register=reporter)
        self.dispatcher = Dispatcher(self.registry, navigator)

    # -- Route registration --

    def map_route(
        self,
        pattern: str | None,
        handler: Any,
        route_param_names: Iterable[str] | None = None,
        query_param_names: Iterable[str] | None = None,
    ) -> RouteTemplate | None:
        """Map *pattern* to *handler*.

        When *handler* is a destination dataclass and no parameter names
        are given, they are taken from its ``route_param`` /
        ``query_param`` declarations. Returns ``None`` when the
        registration was rejected.
        """
        if is_destination(handler):
            declared_route, declared_query = declared_parameters(handler)
            if route_param_names is None:
                route_param_names = declared_route
            if query_param_names is None:
                query_param_names = declared_query
        return self.registry.register(
            pattern,
            handler,
            route_param_names or (),
            query_param_names or (),
        )

    def route(
        self,
        pattern: str,
        *,
        route_params: Iterable[str] | None = None,
        query_params: Iterable[str] | None = None,
    ) -> Callable[[Any], Any]:
        """Register a destination via decorator.

        Args:
            pattern: Route pattern. Use ``:name`` for placeholders.
            route_params: Route parameter names the destination expects.
                Defaults to its declared bindings.
            query_params: Query parameter names the destination expects.
                Defaults to its declared bindings.
        """

        def decorator(handler: Any) -> Any:
            self.map_route(pattern, handler, route_params, query_params)
            return handler

        return decorator

    def default_route(self) -> Callable[[Any], Any]:
        """Register the destination used when no route matches."""

        def decorator(handler: Any) -> Any:
            self.map_route(None, handler)
            return handler

        return decorator

    def handle(self, handler: DeeplinkHandler) -> DeeplinkHandler:
        """Register a deeplink handler via decorator."""
        return self.dispatcher.add_handler(handler)

    # -- Resolution --

    @property
    def navigator(self) -> Navigator | None:
        return self.dispatcher.navigator

    @navigator.setter
    def navigator(self, navigator: Navigator | None) -> None:
        self.dispatcher.navigator = navigator

    @property
    def routes(self) -> tuple[RouteTemplate, ...]:
        return self.registry.routes

    def open(self, url: str) -> bool:
        """Open *url*. Returns True when a destination was launched."""
        return self.dispatcher.open(url)

    def resolve(self, url: str) -> Navigation | None:
        """Where *url* would lead, without notifying handlers or navigating."""
        return self.dispatcher.resolve(url)

    def deeplink_for(self, url: str) -> Deeplink | None:
        return self.dispatcher.deeplink_for(url)

    # -- Lifecycle --

    def lifecycle(
        self,
        source: ScreenEventSource,
        *,
        is_internal: Callable[[Any], bool] | None = None,
    ) -> ForegroundDetector:
        """Create a ``ForegroundDetector`` attached to *source*.

        The caller owns the detector; releasing it ends detection.
        """
        return ForegroundDetector(
            source,
            is_internal=is_internal,
            history_limit=self.config.history_limit,
        )

    def close(self) -> None:
        """Flush and close the debug reporter, if any."""
        if self.reporter is not None:
            self.reporter.close()
