"""fix command: apply reported fixes one error at a time, re-running in between."""

from __future__ import annotations

import logging

from reviewkit.core.fallbacks import warn
from reviewkit.core.fixes import FixError, apply_fixes
from reviewkit.utils import colorize, safe_write_text

from ._helpers import format_error, open_session, print_failures

logger = logging.getLogger(__name__)


def _error_key(err) -> tuple:
    return (err.review, err.path, err.range, err.message)


def cmd_fix(args) -> int:
    """Fix until no fixable error is left (or the pass limit is reached).

    After each applied fix the session reloads, which hands the engine a
    delta containing just the rewritten file.
    """
    config = args._config
    dry_run = getattr(args, "dry_run", False)
    max_passes = int(config.get("max_fix_passes", 100))
    session = open_session(args, config)
    result = session.refresh()
    print_failures(result.failures)

    skipped: set[tuple] = set()
    applied = 0
    while applied < max_passes:
        pending = [e for e in result.fixable_errors() if _error_key(e) not in skipped]
        if not pending:
            break
        target = pending[0]
        path = session.root / target.path
        try:
            source = path.read_text(encoding="utf-8")
            fixed = apply_fixes(list(target.fixes), source)
        except (OSError, FixError) as exc:
            warn(f"cannot fix {target.path}: {exc}")
            skipped.add(_error_key(target))
            continue

        if dry_run:
            print(colorize("  Would fix", "yellow") + format_error(target))
            skipped.add(_error_key(target))
            continue

        safe_write_text(path, fixed)
        applied += 1
        print(colorize("  Fixed", "green") + format_error(target))
        result = session.refresh()
    else:
        warn(f"stopped after {max_passes} fix pass(es)")

    remaining = sum(len(errors) for errors in result.errors_by_path.values())
    logger.debug("Fix session: %d fix(es) applied over %d run(s)", applied, session.runs)
    verb = "Would leave" if dry_run else "Remaining"
    print(colorize(f"\n  Applied {applied} fix(es). {verb}: {remaining} error(s).", "bold"))
    return 1 if remaining else 0
