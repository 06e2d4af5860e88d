"""Logging setup for the ``linkway`` logger tree.

Modules log through named children (``linkway.routing``,
``linkway.dispatch``, ``linkway.lifecycle``, ``linkway.reporting``).
Nothing is printed unless the host application configures logging or
calls ``configure_logging()``.
"""

import logging

_HANDLER_ATTR = "_linkway_handler"

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "warning") -> logging.Logger:
    """Attach a stream handler to the ``linkway`` logger and set its level.

    Safe to call repeatedly; the handler is only installed once.
    """
    logger = logging.getLogger("linkway")
    logger.setLevel(level.upper())
    if not any(getattr(h, _HANDLER_ATTR, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
    return logger
