"""Deeplink dispatch — resolve, notify, then navigate.

``Dispatcher.open()`` runs the whole pipeline for one incoming URL:

1. sanitize the string into a ``DeeplinkURL``
2. resolve it against the ``RouteRegistry`` (default route as fallback)
3. build a ``Deeplink`` and hand it to every registered handler
4. ask the ``Navigator`` to materialize an action for the route
5. launch the action

Handlers always run before navigation, and only when a route was found.
The navigator is the boundary to the host platform: linkway decides
*where* to go, the navigator decides *how*.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from linkway.deeplink import Deeplink
from linkway.routing.registry import RouteRegistry
from linkway.routing.template import RouteTemplate
from linkway.routing.url import DeeplinkURL

logger = logging.getLogger("linkway.dispatch")

# Called with every resolved deeplink; the return value is ignored
DeeplinkHandler: TypeAlias = Callable[[Deeplink], object]


class Navigator(Protocol):
    """Builds and performs platform navigation for a resolved route.

    ``materialize`` returns an opaque action (an intent, a view, a
    callable) or ``None`` when the destination cannot be reached.
    ``launch`` performs it.
    """

    def materialize(self, template: RouteTemplate, deeplink: Deeplink) -> Any | None: ...

    def launch(self, action: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class Navigation:
    """Where a URL would lead, without having gone there."""

    template: RouteTemplate
    deeplink: Deeplink

    @property
    def handler(self) -> Any:
        return self.template.handler


class Dispatcher:
    """Opens deeplinks against a route registry.

    Usage::

        dispatcher = Dispatcher(registry, navigator)
        dispatcher.add_handler(lambda deeplink: analytics.track(deeplink.to_dict()))
        dispatcher.open("myapp://user/42?ref=abc")  # True

    Thread safety:
        The handler list is guarded by a Lock and copied before dispatch,
        so handlers may be added while deeplinks are being opened.
    """

    __slots__ = ("_handlers", "_lock", "navigator", "registry")

    def __init__(self, registry: RouteRegistry, navigator: Navigator | None = None) -> None:
        self.registry = registry
        self.navigator = navigator
        self._handlers: list[DeeplinkHandler] = []
        self._lock = threading.Lock()

    def add_handler(self, handler: DeeplinkHandler) -> DeeplinkHandler:
        """Register *handler* to observe every resolved deeplink.

        Handlers run in registration order. Returns *handler* so this can
        be used as a decorator.
        """
        with self._lock:
            self._handlers.append(handler)
        return handler

    def resolve(self, url: DeeplinkURL | str) -> Navigation | None:
        """Resolve *url* without notifying handlers or navigating."""
        if isinstance(url, str):
            url = DeeplinkURL.parse(url)
        match = self.registry.resolve(url)
        if match is None:
            return None
        return Navigation(template=match.template, deeplink=Deeplink.from_match(url, match))

    def deeplink_for(self, url: DeeplinkURL | str) -> Deeplink | None:
        navigation = self.resolve(url)
        return navigation.deeplink if navigation is not None else None

    def open(self, url: str) -> bool:
        """Open *url*. Returns True when a destination was launched.

        No match (and no default route) returns False without notifying
        handlers. Once the navigator produces an action it is launched
        unconditionally.
        """
        logger.debug("Opening deeplink %s", url)
        navigation = self.resolve(url)
        if navigation is None:
            logger.debug("No route for %s", url)
            return False

        self._notify(navigation.deeplink)

        if self.navigator is None:
            logger.warning("No navigator configured; cannot open %s", url)
            return False

        action = self.navigator.materialize(navigation.template, navigation.deeplink)
        if action is None:
            logger.debug("Navigator produced no action for %r", navigation.handler)
            return False

        logger.debug("Launching %r for %s", action, url)
        self.navigator.launch(action)
        return True

    def _notify(self, deeplink: Deeplink) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(deeplink)
            except Exception:
                logger.exception("Deeplink handler %r failed for %s", handler, deeplink.url)
