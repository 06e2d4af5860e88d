"""``linkway routes`` — list registered routes.

Resolves an import string to a Linkway app and prints every route in
match-priority order, followed by the default route.
"""

import argparse
import sys

from linkway.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a Linkway app.

    Prints a table of PATTERN, PARAMETERS, and HANDLER.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    templates = list(app.registry.routes)
    if app.registry.default_route is not None:
        templates.append(app.registry.default_route)
    if not templates:
        print("No routes registered.")
        return

    # Build rows: (pattern, params, handler_name)
    rows: list[tuple[str, str, str]] = []
    for template in templates:
        params = sorted(template.route_param_names)
        params += [f"?{name}" for name in sorted(template.query_param_names)]
        rows.append((template.pattern or "(default)", ", ".join(params), template.handler_name))

    max_pattern = max(max(len(r[0]) for r in rows), 7)  # "PATTERN" header
    max_params = max(max(len(r[1]) for r in rows), 10)  # "PARAMETERS" header

    fmt = f"{{:<{max_pattern}}}  {{:<{max_params}}}  {{}}"
    print(fmt.format("PATTERN", "PARAMETERS", "HANDLER"))
    sep_len = max_pattern + max_params + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for pattern, params, handler_name in rows:
        print(fmt.format(pattern, params, handler_name))
