"""Debug reporting — posts registered routes to a remote service.

When ``LinkwayConfig.debug`` is set, every successfully registered
non-default route is sent to ``{report_url}/routes`` so the routes an app
actually mapped can be inspected from outside. Reporting is
fire-and-forget: requests run on daemon threads, failures are logged on
``linkway.reporting`` and never affect registration.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import httpx

from linkway.config import LinkwayConfig
from linkway.errors import ConfigurationError
from linkway.routing.template import RouteTemplate

logger = logging.getLogger("linkway.reporting")


def route_payload(template: RouteTemplate) -> dict[str, Any]:
    """JSON body describing *template*."""
    return {
        "route": {
            "path": template.pattern,
            "handler": template.handler_name,
            "route_parameters": sorted(template.route_param_names),
            "query_parameters": sorted(template.query_param_names),
        }
    }


class RouteReporter:
    """Posts route registrations, authenticated with the application token.

    Usage::

        reporter = RouteReporter(token="abc123", base_url="https://links.test/v1")
        registry = RouteRegistry(on_register=reporter)

    Pass ``background=False`` to post synchronously (tests, CLI tools),
    and ``transport`` to substitute an ``httpx`` transport.
    """

    __slots__ = ("_background", "_client", "_lock", "_threads", "base_url", "token")

    def __init__(
        self,
        token: str,
        base_url: str,
        *,
        timeout: float = 5.0,
        background: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self._background = background
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: LinkwayConfig, **kwargs: Any) -> RouteReporter:
        if not config.report_url:
            msg = "report_url is not configured"
            raise ConfigurationError(msg)
        return cls(config.token, config.report_url, timeout=config.report_timeout, **kwargs)

    def __call__(self, template: RouteTemplate) -> None:
        self.report(template)

    def report(self, template: RouteTemplate) -> None:
        """Send *template* to the reporting service."""
        if not self._background:
            self._post(template)
            return
        thread = threading.Thread(
            target=self._post,
            args=(template,),
            name=f"linkway-report-{template.pattern}",
            daemon=True,
        )
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
            thread.start()

    def _post(self, template: RouteTemplate) -> bool:
        try:
            response = self._client.post("/routes", json=route_payload(template))
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Could not report route %r: %s", template.pattern, exc)
            return False
        logger.debug("Reported route %r", template.pattern)
        return True

    def join(self, timeout: float | None = None) -> None:
        """Wait for in-flight background reports."""
        with self._lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)

    def close(self) -> None:
        self.join()
        self._client.close()
