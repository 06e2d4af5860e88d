"""Locate the ``Linkway`` app a CLI command should inspect."""

import importlib

from linkway.app import Linkway
from linkway.log import configure_logging

DEFAULT_ATTRIBUTE = "links"


def resolve_app(target: str) -> Linkway:
    """Import ``"package.module[:attribute]"`` and return its ``Linkway``.

    The attribute defaults to ``links``. The app's configured log level is
    applied before it is returned, so the command's output honours it.
    """
    module_name, _, attribute = target.partition(":")
    app = getattr(importlib.import_module(module_name), attribute or DEFAULT_ATTRIBUTE)

    if not isinstance(app, Linkway):
        msg = f"{target!r} is a {type(app).__name__}, not a linkway.Linkway instance"
        raise TypeError(msg)

    configure_logging(app.config.log_level)
    return app
