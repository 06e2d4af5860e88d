"""Test helpers for linkway apps.

``RecordingNavigator`` stands in for the platform navigator and records
everything linkway asks of it::

    navigator = RecordingNavigator()
    links = Linkway(navigator=navigator)
    links.open("shop://product/42")
    assert navigator.launched[0].deeplink.route_parameters == {"id": "42"}
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from linkway.deeplink import Deeplink
from linkway.routing.template import RouteTemplate


@dataclass(frozen=True, slots=True)
class RecordedAction:
    """The action a ``RecordingNavigator`` materializes."""

    handler: Any
    deeplink: Deeplink


@dataclass(slots=True)
class RecordingNavigator:
    """Navigator that records materialized and launched actions.

    ``refuse`` decides per handler whether materialization fails (returns
    ``None``), mimicking a destination the platform cannot reach.
    ``events`` keeps a single ordered log (``"materialize"``,
    ``"launch"``) for asserting call order.
    """

    refuse: Callable[[Any], bool] | None = None
    materialized: list[RecordedAction] = field(default_factory=list)
    launched: list[RecordedAction] = field(default_factory=list)
    events: list[tuple[str, Any]] = field(default_factory=list)

    def materialize(self, template: RouteTemplate, deeplink: Deeplink) -> RecordedAction | None:
        self.events.append(("materialize", template.handler))
        if self.refuse is not None and self.refuse(template.handler):
            return None
        action = RecordedAction(handler=template.handler, deeplink=deeplink)
        self.materialized.append(action)
        return action

    def launch(self, action: RecordedAction) -> None:
        self.events.append(("launch", action.handler))
        self.launched.append(action)
