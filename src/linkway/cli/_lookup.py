"""``linkway resolve`` — show where a deeplink would lead.

Resolves the URL without notifying handlers or navigating, and prints
the resulting deeplink as JSON. Exits 1 when nothing matches.
"""

import argparse
import json
import sys

from linkway.cli._resolve import resolve_app


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.url`` against the app at ``args.app``."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    navigation = app.resolve(args.url)
    if navigation is None:
        print(f"No route matches {args.url!r}", file=sys.stderr)
        raise SystemExit(1)

    payload = {
        **navigation.deeplink.to_dict(),
        "handler": navigation.template.handler_name,
    }
    print(json.dumps(payload, indent=2, sort_keys=True))
