"""Linkway configuration.

LinkwayConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from linkway.errors import ConfigurationError

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True, slots=True)
class LinkwayConfig:
    """Linkway configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LinkwayConfig(token="abc123", debug=True, report_url="https://links.test/v1")
    """

    # Application identity
    token: str = ""

    # Debug reporting — every registered route is posted to report_url
    debug: bool = False
    report_url: str | None = None
    report_timeout: float = 5.0

    # Registration — raise RegistrationError instead of logging it
    strict: bool = False

    # Lifecycle
    history_limit: int = 16

    # Logging
    log_level: str = "warning"

    def __post_init__(self) -> None:
        if self.debug and not self.report_url:
            msg = "debug=True requires report_url so registered routes can be reported."
            raise ConfigurationError(msg)
        if self.report_timeout <= 0:
            msg = f"report_timeout must be positive, got {self.report_timeout!r}"
            raise ConfigurationError(msg)
        if self.history_limit < 2:
            msg = f"history_limit must be at least 2, got {self.history_limit!r}"
            raise ConfigurationError(msg)
        if self.log_level.lower() not in LOG_LEVELS:
            msg = f"Unknown log_level {self.log_level!r}. Expected one of: {', '.join(LOG_LEVELS)}"
            raise ConfigurationError(msg)
