"""check command: run every configured review once and print the errors."""

from __future__ import annotations

import json
import sys

from reviewkit.core.errors import ErrorCounts
from reviewkit.utils import colorize

from ._helpers import format_error, open_session, print_failures


def cmd_check(args) -> int:
    """Print errors grouped by file; return 1 when anything was reported."""
    session = open_session(args, args._config)
    result = session.refresh()
    counts = ErrorCounts.of(result.errors_by_path)

    if getattr(args, "json", False):
        payload = {
            "errors": [
                err.to_dict()
                for path in sorted(result.errors_by_path)
                for err in result.errors_by_path[path]
            ],
            "parse_failures": [
                {"path": f.path, "line": f.line, "reason": f.reason} for f in result.failures
            ],
        }
        print(json.dumps(payload, indent=2))
        return 1 if counts.errors or result.failures else 0

    print_failures(result.failures)
    if not counts.errors:
        print(colorize("  No errors found.", "green"))
        return 1 if result.failures else 0

    for path in sorted(result.errors_by_path):
        for err in result.errors_by_path[path]:
            print(format_error(err))
            if getattr(args, "details", False):
                for line in err.details:
                    print(colorize(f"      {line}", "dim"))
    print(
        colorize(
            f"\n  {counts.errors} error(s) in {len(counts.files)} file(s), "
            f"{counts.fixable} fixable",
            "bold",
        ),
        file=sys.stderr,
    )
    return 1
