"""Project parts handed to the engine, and the delta between two runs.

The engine treats every part as already-materialized data: it never reads
files and never parses text. ``Project`` is the cumulative state a host
(or a test) gets by applying deltas one after another; ``as_delta`` turns
that state back into the single delta a from-scratch run would receive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Module:
    path: str
    source: str
    syntax: Any


@dataclass(frozen=True)
class ExtraFile:
    path: str
    content: str


@dataclass(frozen=True)
class Manifest:
    """The project descriptor: raw text plus its parsed form."""

    source: str
    project: Any
    path: str = "pyproject.toml"


@dataclass(frozen=True)
class Dependency:
    """A dependency's parsed manifest and the module docs it exposes."""

    name: str
    manifest: Any
    modules: tuple[Any, ...] = ()


@dataclass(frozen=True)
class ProjectDelta:
    """Everything that changed since the previous run.

    ``manifest`` and ``dependencies`` are always the full current state;
    only modules and extra files are delta'd.
    """

    manifest: Manifest | None = None
    dependencies: tuple[Dependency, ...] = ()
    added_or_changed_extra_files: tuple[ExtraFile, ...] = ()
    added_or_changed_modules: tuple[Module, ...] = ()
    removed_extra_file_paths: frozenset[str] = frozenset()
    removed_module_paths: frozenset[str] = frozenset()

    def __post_init__(self):
        # Accept lists/sets from callers; store hashable immutable forms.
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(
            self, "added_or_changed_extra_files", tuple(self.added_or_changed_extra_files)
        )
        object.__setattr__(
            self, "added_or_changed_modules", tuple(self.added_or_changed_modules)
        )
        object.__setattr__(
            self, "removed_extra_file_paths", frozenset(self.removed_extra_file_paths)
        )
        object.__setattr__(self, "removed_module_paths", frozenset(self.removed_module_paths))


@dataclass
class Project:
    """Cumulative project state: the latest content of every live part."""

    manifest: Manifest | None = None
    dependencies: tuple[Dependency, ...] = ()
    modules: dict[str, Module] = field(default_factory=dict)
    extra_files: dict[str, ExtraFile] = field(default_factory=dict)

    def apply(self, delta: ProjectDelta) -> None:
        self.manifest = delta.manifest
        self.dependencies = delta.dependencies
        for module in delta.added_or_changed_modules:
            self.modules[module.path] = module
        for extra in delta.added_or_changed_extra_files:
            self.extra_files[extra.path] = extra
        for path in delta.removed_module_paths:
            self.modules.pop(path, None)
        for path in delta.removed_extra_file_paths:
            self.extra_files.pop(path, None)

    def as_delta(self) -> ProjectDelta:
        """The delta a from-scratch run over this state would receive."""
        return ProjectDelta(
            manifest=self.manifest,
            dependencies=self.dependencies,
            added_or_changed_extra_files=tuple(
                self.extra_files[p] for p in sorted(self.extra_files)
            ),
            added_or_changed_modules=tuple(self.modules[p] for p in sorted(self.modules)),
        )


__all__ = [
    "Dependency",
    "ExtraFile",
    "Manifest",
    "Module",
    "Project",
    "ProjectDelta",
]
