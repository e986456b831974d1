"""Build engine deltas from a project directory.

A ``ProjectSnapshot`` records a content hash per file. Comparing the
snapshot from the previous run with the files on disk now tells the host
which modules and extra files to hand to the engine; only those are read
in full and parsed.
"""

from __future__ import annotations

import importlib.metadata
import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from reviewkit.core.fallbacks import note_skipped, warn
from reviewkit.host.parsing import ModuleParseError, parse_module
from reviewkit.project import Dependency, ExtraFile, Manifest, ProjectDelta
from reviewkit.utils import clear_discovery_cache, content_hash, find_files

logger = logging.getLogger(__name__)

MANIFEST_NAME = "pyproject.toml"
_REQUIREMENT_NAME_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


@dataclass(frozen=True)
class ProjectSnapshot:
    """Content hashes of the files that reached the engine in the last load."""

    modules: dict[str, str] = field(default_factory=dict)
    extra_files: dict[str, str] = field(default_factory=dict)


@dataclass
class LoadResult:
    delta: ProjectDelta
    snapshot: ProjectSnapshot
    failures: list[ModuleParseError] = field(default_factory=list)


def _read(root: Path, rel_path: str) -> str | None:
    try:
        return (root / rel_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        note_skipped(logger, f"unreadable file {rel_path}", exc)
        return None


def _source_dirs(root: Path, config: dict) -> list[tuple[Path, str]]:
    """Resolve ``source_dirs`` to (directory, path prefix) pairs inside *root*.

    Entries that resolve outside the project (``../shared``, symlinks out of
    the tree) are skipped with a warning.
    """
    dirs: list[tuple[Path, str]] = []
    for source_dir in config.get("source_dirs", ["."]):
        base = (root / source_dir).resolve()
        if not base.is_dir():
            continue
        if not base.is_relative_to(root):
            warn(f"skipping source dir {source_dir!r}: outside the project root")
            continue
        prefix = "" if base == root else base.relative_to(root).as_posix() + "/"
        dirs.append((base, prefix))
    return dirs


def _discover(source_dirs: list[tuple[Path, str]], config: dict, patterns_key: str) -> list[str]:
    found: set[str] = set()
    for base, prefix in source_dirs:
        for path in find_files(base, config.get(patterns_key, []), config.get("exclude", [])):
            found.add(prefix + path)
    return sorted(found)


def load_manifest(root: Path) -> Manifest | None:
    path = root / MANIFEST_NAME
    if not path.is_file():
        return None
    source = _read(root, MANIFEST_NAME)
    if source is None:
        return None
    try:
        project = tomllib.loads(source)
    except tomllib.TOMLDecodeError as exc:
        note_skipped(logger, f"invalid {MANIFEST_NAME}", exc)
        return None
    return Manifest(source=source, project=project, path=MANIFEST_NAME)


def requirement_name(requirement: str) -> str | None:
    match = _REQUIREMENT_NAME_RE.match(requirement)
    return match.group(1) if match else None


def _distribution_modules(dist: importlib.metadata.Distribution) -> tuple[str, ...]:
    top_level = dist.read_text("top_level.txt")
    if top_level:
        return tuple(line.strip() for line in top_level.splitlines() if line.strip())
    names = {
        Path(str(f)).parts[0].removesuffix(".py")
        for f in dist.files or []
        if str(f).endswith(".py") and ".dist-info" not in str(f)
    }
    return tuple(sorted(names))


def load_dependencies(manifest: Manifest | None) -> tuple[Dependency, ...]:
    """Resolve the manifest's declared dependencies against installed metadata.

    Dependencies that are not installed are skipped.
    """
    if manifest is None:
        return ()
    declared = manifest.project.get("project", {}).get("dependencies", [])
    dependencies: list[Dependency] = []
    for requirement in declared:
        name = requirement_name(str(requirement))
        if name is None:
            continue
        try:
            dist = importlib.metadata.distribution(name)
        except importlib.metadata.PackageNotFoundError as exc:
            note_skipped(logger, f"uninstalled dependency {name}", exc)
            continue
        metadata: dict[str, Any] = dist.metadata.json
        dependencies.append(
            Dependency(name=name, manifest=metadata, modules=_distribution_modules(dist))
        )
    return tuple(dependencies)


def load_delta(
    root: str | Path,
    config: dict,
    previous: ProjectSnapshot | None = None,
) -> LoadResult:
    """Compare the files under *root* with *previous* and build the next delta.

    Unchanged files are hashed but not parsed. Modules that fail to parse do
    not reach the engine; if an earlier version did, it is removed so no
    stale knowledge survives, and the file is retried on the next load.
    """
    root = Path(root).resolve()
    previous = previous or ProjectSnapshot()
    clear_discovery_cache()
    source_dirs = _source_dirs(root, config)
    manifest = load_manifest(root)
    failures: list[ModuleParseError] = []

    modules: dict[str, str] = {}
    changed_modules = []
    module_paths = _discover(source_dirs, config, "module_patterns")
    for path in module_paths:
        source = _read(root, path)
        if source is None:
            continue
        digest = content_hash(source)
        if previous.modules.get(path) == digest:
            modules[path] = digest
            continue
        try:
            changed_modules.append(parse_module(path, source))
        except ModuleParseError as exc:
            failures.append(exc)
            continue
        modules[path] = digest

    extras: dict[str, str] = {}
    changed_extras = []
    for path in _discover(source_dirs, config, "extra_file_patterns"):
        if path in module_paths or path == MANIFEST_NAME:
            continue
        content = _read(root, path)
        if content is None:
            continue
        digest = content_hash(content)
        extras[path] = digest
        if previous.extra_files.get(path) != digest:
            changed_extras.append(ExtraFile(path=path, content=content))

    delta = ProjectDelta(
        manifest=manifest,
        dependencies=load_dependencies(manifest),
        added_or_changed_modules=tuple(changed_modules),
        added_or_changed_extra_files=tuple(changed_extras),
        removed_module_paths=frozenset(set(previous.modules) - set(modules)),
        removed_extra_file_paths=frozenset(set(previous.extra_files) - set(extras)),
    )
    logger.debug(
        "Loaded delta from %s: %d module(s) changed, %d removed, %d extra file(s) changed, %d removed",
        root,
        len(delta.added_or_changed_modules),
        len(delta.removed_module_paths),
        len(delta.added_or_changed_extra_files),
        len(delta.removed_extra_file_paths),
    )
    return LoadResult(
        delta=delta,
        snapshot=ProjectSnapshot(modules=modules, extra_files=extras),
        failures=failures,
    )


__all__ = [
    "LoadResult",
    "MANIFEST_NAME",
    "ProjectSnapshot",
    "load_delta",
    "load_dependencies",
    "load_manifest",
    "requirement_name",
]
