"""Linkway exception hierarchy.

Shared across the registry, dispatcher, binder, and lifecycle detector so
every module raises and catches the same types.

Registration problems are *diagnostics*: the registry logs them and keeps
accepting routes unless it was built with ``strict=True``. Failing to find
a route is never an error, it is an ordinary ``None`` / ``False`` result.
"""

from typing import Any


class LinkwayError(Exception):
    """Base for all linkway-specific errors."""


class ConfigurationError(LinkwayError):
    """Raised when linkway is wired up incorrectly.

    Covers invalid ``LinkwayConfig`` values and constructing a
    ``ForegroundDetector`` without an event source to attach to.
    """


class RegistrationError(LinkwayError):
    """A route registration that was rejected.

    Carries the offending *pattern* and *handler* so diagnostics can
    point at the destination that was declared twice or malformed.
    """

    def __init__(self, pattern: str | None, handler: Any = None, detail: str = "") -> None:
        self.pattern = pattern
        self.handler = handler
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        return self.detail or f"Route {self.pattern!r} was rejected"


class DuplicateRoute(RegistrationError):  # noqa: N818 — named after the condition
    """The pattern is already registered (compared case-insensitively)."""

    def _message(self) -> str:
        return f"Route {self.pattern!r} is already mapped; ignoring {_handler_name(self.handler)}"


class DuplicateDefaultRoute(RegistrationError):  # noqa: N818 — named after the condition
    """A default route is already installed; the first one registered wins."""

    def __init__(self, handler: Any = None) -> None:
        super().__init__(None, handler)

    def _message(self) -> str:
        return (
            "A default route is already mapped; "
            f"ignoring default route for {_handler_name(self.handler)}"
        )


class InvalidPattern(RegistrationError):  # noqa: N818 — named after the condition
    """The pattern failed structural validation."""

    def _message(self) -> str:
        reason = f": {self.detail}" if self.detail else ""
        return f"Invalid route pattern {self.pattern!r}{reason}"


class BindingError(LinkwayError):
    """A deeplink could not be bound onto a destination.

    Raised when a required route or query parameter is missing or cannot
    be converted to the declared field type.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Cannot bind {field!r}: {detail}")


def _handler_name(handler: Any) -> str:
    if handler is None:
        return "<unknown handler>"
    if isinstance(handler, str):
        return handler
    return getattr(handler, "__qualname__", None) or repr(handler)
