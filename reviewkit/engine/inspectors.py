"""Inspector variants: what part of the project a review looks at."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from reviewkit.project import Dependency, ExtraFile, Manifest, Module


class InspectorKind(enum.Enum):
    MANIFEST = "manifest"
    DEPENDENCIES = "dependencies"
    EXTRA_FILE = "extra_file"
    MODULE = "module"


@dataclass(frozen=True)
class Inspector:
    """A pure function from one kind of project part to knowledge.

    Build with :func:`from_manifest`, :func:`from_dependencies`,
    :func:`from_extra_file` or :func:`from_module` rather than directly.
    """

    kind: InspectorKind
    fn: Callable[[Any], Any]

    def __call__(self, part: Any) -> Any:
        return self.fn(part)


def from_manifest(fn: Callable[[Manifest], Any]) -> Inspector:
    return Inspector(InspectorKind.MANIFEST, fn)


def from_dependencies(fn: Callable[[tuple[Dependency, ...]], Any]) -> Inspector:
    """The function receives every dependency at once."""
    return Inspector(InspectorKind.DEPENDENCIES, fn)


def from_extra_file(fn: Callable[[ExtraFile], Any]) -> Inspector:
    return Inspector(InspectorKind.EXTRA_FILE, fn)


def from_module(fn: Callable[[Module], Any]) -> Inspector:
    return Inspector(InspectorKind.MODULE, fn)


class InspectorSet:
    """A review's inspectors bucketed by kind for dispatch.

    Registration order is preserved within each bucket; that is the order
    their outputs are folded in.
    """

    __slots__ = ("_buckets",)

    def __init__(self, inspectors: Iterable[Inspector] = ()):
        self._buckets: dict[InspectorKind, tuple[Inspector, ...]] = {
            kind: () for kind in InspectorKind
        }
        for inspector in inspectors:
            if not isinstance(inspector, Inspector):
                raise TypeError(f"expected an Inspector, got {type(inspector).__name__}")
            self._buckets[inspector.kind] += (inspector,)

    def of_kind(self, kind: InspectorKind) -> tuple[Inspector, ...]:
        return self._buckets[kind]

    def has(self, kind: InspectorKind) -> bool:
        return bool(self._buckets[kind])

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())


__all__ = [
    "Inspector",
    "InspectorKind",
    "InspectorSet",
    "from_dependencies",
    "from_extra_file",
    "from_manifest",
    "from_module",
]
