"""The resolved Deeplink value handed to deeplink handlers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from linkway.routing.matcher import RouteMatch
from linkway.routing.url import DeeplinkURL


@dataclass(frozen=True, slots=True)
class Deeplink:
    """A deeplink that resolved to a route.

    ``route`` is the matched pattern, or ``None`` when the default route
    caught the URL. ``query_parameters`` always carries every query
    parameter of the incoming URL, declared or not. Both parameter
    mappings are read-only views, so handlers and the navigator all see
    the values the URL carried.
    """

    url: str
    scheme: str | None
    route: str | None
    route_parameters: Mapping[str, str] = field(default_factory=dict, hash=False)
    query_parameters: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "route_parameters", MappingProxyType(dict(self.route_parameters)))
        object.__setattr__(self, "query_parameters", MappingProxyType(dict(self.query_parameters)))

    @classmethod
    def from_match(cls, url: DeeplinkURL, match: RouteMatch) -> "Deeplink":
        """Build the deeplink for a registry match on *url*."""
        return cls(
            url=url.raw,
            scheme=url.scheme,
            route=None if match.is_default else match.template.pattern,
            route_parameters=match.route_params,
            query_parameters=url.query.to_dict(),
        )

    @property
    def is_default(self) -> bool:
        return self.route is None

    @property
    def parameters(self) -> dict[str, str]:
        """Query parameters overlaid with route parameters."""
        return {**self.query_parameters, **self.route_parameters}

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        return {
            "url": self.url,
            "scheme": self.scheme,
            "route": self.route,
            "route_parameters": dict(self.route_parameters),
            "query_parameters": dict(self.query_parameters),
        }
