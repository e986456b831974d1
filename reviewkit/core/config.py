"""Project config (.reviewkit/config.json)."""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from reviewkit.core.fallbacks import note_skipped
from reviewkit.utils import PROJECT_ROOT, safe_write_text

CONFIG_FILE = PROJECT_ROOT / ".reviewkit" / "config.json"
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigKey:
    type: type
    default: object
    description: str


CONFIG_SCHEMA: dict[str, ConfigKey] = {
    "reviews": ConfigKey(
        list, [], "Reviews to run, as 'package.module:attribute' specs"
    ),
    "source_dirs": ConfigKey(
        list, ["."], "Directories (relative to the project root) holding modules"
    ),
    "module_patterns": ConfigKey(
        list, ["*.py"], "Glob patterns for files parsed as modules"
    ),
    "extra_file_patterns": ConfigKey(
        list,
        ["*.md", "*.txt", "*.cfg"],
        "Glob patterns for supplementary text files handed to extra-file inspectors",
    ),
    "exclude": ConfigKey(list, [], "Path patterns to exclude from discovery"),
    "ignore": ConfigKey(
        list, [], "Path patterns whose errors are hidden for every review"
    ),
    "max_workers": ConfigKey(
        int, 0, "Worker threads for per-file knowledge extraction (0 = serial)"
    ),
    "parallel_threshold": ConfigKey(
        int, 8, "Minimum changed files in one run before extraction goes parallel"
    ),
    "max_fix_passes": ConfigKey(
        int, 100, "Upper bound on apply-and-rerun iterations for `reviewkit fix`"
    ),
}


def default_config() -> dict[str, Any]:
    """Return a config dict with all keys set to their defaults."""
    return {k: copy.deepcopy(v.default) for k, v in CONFIG_SCHEMA.items()}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config from disk, filling missing or mistyped keys with defaults."""
    p = path or CONFIG_FILE
    config: dict[str, Any] = {}
    if p.exists():
        try:
            loaded = json.loads(p.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            note_skipped(logger, f"unreadable config {p}", exc)
            loaded = {}
        if isinstance(loaded, dict):
            config = loaded

    for key, schema in CONFIG_SCHEMA.items():
        value = config.get(key)
        if key not in config or not _matches_type(value, schema.type):
            config[key] = copy.deepcopy(schema.default)
    return config


def _matches_type(value: object, expected: type) -> bool:
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def save_config(config: dict, path: Path | None = None) -> None:
    """Save config to disk atomically."""
    p = path or CONFIG_FILE
    safe_write_text(p, json.dumps(config, indent=2) + "\n")


def set_config_value(config: dict, key: str, raw: str) -> None:
    """Parse and set a config value from a raw string.

    List keys append (deduplicated); int keys must parse and be >= 0.
    """
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")

    schema = CONFIG_SCHEMA[key]

    if schema.type is int:
        value = int(raw)
        if value < 0:
            raise ValueError(f"Expected a non-negative integer for {key}, got: {raw}")
        config[key] = value
    elif schema.type is list:
        config.setdefault(key, [])
        if raw not in config[key]:
            config[key].append(raw)
    else:
        config[key] = raw


def unset_config_value(config: dict, key: str) -> None:
    """Reset a config key to its default value."""
    if key not in CONFIG_SCHEMA:
        raise KeyError(f"Unknown config key: {key}")
    config[key] = copy.deepcopy(CONFIG_SCHEMA[key].default)


__all__ = [
    "CONFIG_FILE",
    "CONFIG_SCHEMA",
    "ConfigKey",
    "default_config",
    "load_config",
    "save_config",
    "set_config_value",
    "unset_config_value",
]
