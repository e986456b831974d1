"""Shared utilities: paths, colors, atomic writes, file discovery."""

from __future__ import annotations

import hashlib
import os
import sys
import tempfile
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(os.environ.get("REVIEWKIT_ROOT", Path.cwd())).resolve()

# Directories that are never useful to scan; always pruned during traversal.
DEFAULT_EXCLUSIONS = frozenset({
    "node_modules", ".git", "__pycache__", ".venv", "venv", ".env",
    "dist", "build", ".tox", ".mypy_cache", ".pytest_cache", ".ruff_cache",
    ".eggs", ".svn", ".hg", ".reviewkit",
})

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def colorize(text: str, color: str) -> str:
    if NO_COLOR or not sys.stdout.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


# ── Atomic file writes ─────────────────────────────────────


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Atomically write text to a file using temp+rename."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", newline="") as f:
            f.write(content)
        os.replace(tmp, str(p))
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


# ── Paths ──────────────────────────────────────────────────


def matches_exclusion(rel_path: str, exclusion: str) -> bool:
    """Check if a relative path matches an exclusion pattern (path-component aware).

    Matches if exclusion is a path component (e.g. "test" matches "test/foo.py"
    or "src/test/bar.py"), a directory prefix (e.g. "src/test" matches
    "src/test/bar.py") or the exact path. Does NOT do substring matching:
    "test" will NOT match "testimony.py".
    """
    normalized_path = rel_path.replace("\\", "/")
    if normalized_path == exclusion.rstrip("/"):
        return True
    parts = Path(normalized_path).parts
    if exclusion in parts:
        return True
    if "/" in exclusion:
        normalized = exclusion.rstrip("/")
        return normalized_path.startswith(normalized + "/")
    return False


def _is_excluded_dir(name: str, rel_path: str, extra: tuple[str, ...]) -> bool:
    """Check if a directory should be pruned during traversal."""
    if name in DEFAULT_EXCLUSIONS or name.endswith(".egg-info"):
        return True
    return any(matches_exclusion(rel_path, ex) for ex in extra)


@lru_cache(maxsize=16)
def _find_files_cached(root: str, patterns: tuple[str, ...],
                       exclusions: tuple[str, ...]) -> tuple[str, ...]:
    """Cached file discovery using os.walk; prunes during traversal."""
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root).replace("\\", "/")
        prefix = "" if rel_dir == "." else rel_dir + "/"
        dirnames[:] = sorted(
            d for d in dirnames
            if not _is_excluded_dir(d, prefix + d, exclusions)
        )
        for fname in filenames:
            if not any(Path(fname).match(pattern) for pattern in patterns):
                continue
            rel_file = prefix + fname
            if any(matches_exclusion(rel_file, ex) for ex in exclusions):
                continue
            files.append(rel_file)
    return tuple(sorted(files))


def find_files(root: str | Path, patterns: list[str],
               exclusions: list[str] | None = None) -> list[str]:
    """Find files matching any glob in *patterns* under *root*, relative to it."""
    return list(_find_files_cached(
        str(Path(root).resolve()), tuple(patterns), tuple(exclusions or ())))


def clear_discovery_cache() -> None:
    _find_files_cached.cache_clear()
