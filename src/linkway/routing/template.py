"""PathSegment and RouteTemplate frozen dataclasses.

Templates are compiled once at registration time and never change
afterwards, so they are safe to share across threads.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from linkway.errors import InvalidPattern

PLACEHOLDER_MARKER = ":"


def sanitize_path(path: str | None) -> str:
    """Normalize a path the same way for templates and incoming URLs.

    Strips surrounding whitespace and slashes and collapses repeated
    slashes::

        " /user//42/ " -> "user/42"
        None           -> ""
    """
    if not path:
        return ""
    return "/".join(part for part in path.strip().split("/") if part)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:      ``user``  (is_param=False)
    Placeholder:  ``:id``   (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None

    def matches(self, part: str) -> bool:
        """Whether *part* fits this segment. Placeholders accept anything."""
        return self.is_param or self.value.lower() == part.lower()


@dataclass(frozen=True, slots=True)
class RouteTemplate:
    """A compiled route template.

    ``pattern`` is the sanitized pattern string; an empty pattern marks the
    default route. ``handler`` is whatever the caller registered (a class,
    a name, a factory) and is never interpreted here.
    """

    pattern: str
    handler: Any
    segments: tuple[PathSegment, ...] = ()
    route_param_names: frozenset[str] = field(default_factory=frozenset)
    query_param_names: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        return not self.pattern

    @property
    def key(self) -> str:
        """Case-insensitive comparison key for duplicate detection."""
        return self.pattern.lower()

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__qualname__", None) or str(self.handler)

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.param_name)


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a sanitized pattern string into segments.

    Examples::

        "user"          -> [PathSegment("user")]
        "user/:id"      -> [PathSegment("user"), PathSegment(":id", is_param=True, ...)]
        "user/:id/:tab" -> [..., PathSegment(":tab", is_param=True, param_name="tab")]

    Raises ``InvalidPattern`` for a bare ``:`` or a repeated placeholder name.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in pattern.split("/"):
        if not part:
            continue
        if part.startswith(PLACEHOLDER_MARKER):
            name = part[len(PLACEHOLDER_MARKER) :]
            if not name:
                raise InvalidPattern(pattern, detail="placeholder without a name")
            if name in seen:
                raise InvalidPattern(pattern, detail=f"placeholder {name!r} appears twice")
            seen.add(name)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=part))
    return segments


def compile_template(
    pattern: str | None,
    handler: Any,
    route_param_names: Iterable[str] = (),
    query_param_names: Iterable[str] = (),
) -> RouteTemplate:
    """Compile *pattern* into a ``RouteTemplate``.

    ``None`` or an empty pattern compiles to the default route, which has
    no segments and accepts no route parameters.

    Raises ``InvalidPattern`` when the pattern is malformed or declares
    route parameters that are not placeholders of the pattern.
    """
    sanitized = sanitize_path(pattern)
    route_names = frozenset(route_param_names)
    query_names = frozenset(query_param_names)

    if not sanitized:
        if route_names:
            raise InvalidPattern(
                pattern, handler, detail="the default route cannot declare route parameters"
            )
        return RouteTemplate("", handler, (), route_names, query_names)

    try:
        segments = parse_pattern(sanitized)
    except InvalidPattern as exc:
        raise InvalidPattern(pattern, handler, detail=exc.detail) from None

    placeholders = {s.param_name for s in segments if s.param_name}
    missing = route_names - placeholders
    if missing:
        raise InvalidPattern(
            pattern,
            handler,
            detail=f"route parameters {', '.join(sorted(missing))} are not in the pattern",
        )

    return RouteTemplate(sanitized, handler, tuple(segments), route_names, query_names)
