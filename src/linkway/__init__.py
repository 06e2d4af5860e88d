"""Linkway — deeplink routing and app lifecycle detection.

Resolves incoming deeplinks against registered route templates, hands the
resolved ``Deeplink`` to your handlers, and asks a navigator to open the
destination. Separately, tracks whether the host app is in the foreground
from per-screen lifecycle events.

Basic usage::

    from linkway import Linkway

    links = Linkway(navigator=navigator)

    @links.route("user/:id")
    class UserScreen: ...

    links.open("myapp://user/42?ref=abc")

Lifecycle detection::

    from linkway import ForegroundDetector, ScreenEvents

    events = ScreenEvents()
    detector = ForegroundDetector(events)
    detector.add_lifecycle_callback(on_background=flush, on_foreground=refresh)
"""

__version__ = "0.1.0"
__all__ = [
    "AppStatus",
    "BindingError",
    "ConfigurationError",
    "Deeplink",
    "Dispatcher",
    "DuplicateDefaultRoute",
    "DuplicateRoute",
    "ForegroundDetector",
    "InvalidPattern",
    "Linkway",
    "LinkwayConfig",
    "LinkwayError",
    "Navigator",
    "RegistrationError",
    "RouteRegistry",
    "RouteTemplate",
    "ScreenEvents",
    "bind",
    "query_param",
    "route_param",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import linkway`` fast while providing a clean top-level API.
    """
    if name == "Linkway":
        from linkway.app import Linkway

        return Linkway

    if name == "LinkwayConfig":
        from linkway.config import LinkwayConfig

        return LinkwayConfig

    if name == "Deeplink":
        from linkway.deeplink import Deeplink

        return Deeplink

    if name in ("Dispatcher", "Navigator"):
        from linkway import dispatch as _dispatch

        return getattr(_dispatch, name)

    if name == "RouteRegistry":
        from linkway.routing.registry import RouteRegistry

        return RouteRegistry

    if name == "RouteTemplate":
        from linkway.routing.template import RouteTemplate

        return RouteTemplate

    if name in ("AppStatus", "ForegroundDetector", "ScreenEvents"):
        from linkway import lifecycle as _lifecycle

        return getattr(_lifecycle, name)

    if name in ("bind", "query_param", "route_param"):
        from linkway import binding as _binding

        return getattr(_binding, name)

    if name in (
        "BindingError",
        "ConfigurationError",
        "DuplicateDefaultRoute",
        "DuplicateRoute",
        "InvalidPattern",
        "LinkwayError",
        "RegistrationError",
    ):
        from linkway import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
