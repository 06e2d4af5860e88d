"""Structural matching of incoming URLs against route templates."""

from dataclasses import dataclass, field

from linkway.routing.template import RouteTemplate
from linkway.routing.url import DeeplinkURL


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful resolution.

    ``is_default`` is True when nothing matched and the registry fell back
    to its default route; ``route_params`` is empty in that case.
    """

    template: RouteTemplate
    route_params: dict[str, str] = field(default_factory=dict)

    @property
    def is_default(self) -> bool:
        return self.template.is_default


def match_template(template: RouteTemplate, url: DeeplinkURL | str) -> dict[str, str] | None:
    """Match *url* against *template* and extract placeholder values.

    Returns the captured parameters on success, ``None`` otherwise::

        match_template(compile_template("user/:id", h), "user/42")     -> {"id": "42"}
        match_template(compile_template("user/:id/:tab", h), "user/42") -> None

    Literal segments compare case-insensitively; placeholder segments
    accept any value. Query parameters play no part in matching. The
    default route never matches structurally.
    """
    if isinstance(url, str):
        url = DeeplinkURL.parse(url)

    if template.is_default or len(template.segments) != len(url.segments):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(template.segments, url.segments, strict=True):
        if not segment.matches(part):
            return None
        if segment.param_name:
            params[segment.param_name] = part
    return params

