"""Review definition: inspectors + merge + report + ignore predicate."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from reviewkit.core.errors import ReviewError
from reviewkit.engine.inspectors import Inspector, InspectorSet
from reviewkit.utils import matches_exclusion


def _ignore_nothing(path: str) -> bool:
    return False


@dataclass(frozen=True)
class Review:
    """A named, immutable analysis unit.

    ``merge`` must be associative: knowledge from different files is folded
    in an order reviews cannot rely on. Knowledge values must not be
    ``None``; an inspector returning ``None`` contributes nothing.
    """

    name: str
    inspectors: tuple[Inspector, ...]
    merge: Callable[[Any, Any], Any]
    report: Callable[[Any], list[ReviewError]]
    ignores_path: Callable[[str], bool] = _ignore_nothing
    _inspector_set: InspectorSet = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "inspectors", tuple(self.inspectors))
        object.__setattr__(self, "_inspector_set", InspectorSet(self.inspectors))

    @property
    def inspector_set(self) -> InspectorSet:
        return self._inspector_set

    def ignore_errors_for_paths_where(self, predicate: Callable[[str], bool]) -> Review:
        """Also hide errors for paths matching *predicate*.

        Predicates accumulate with OR, so a path ignored before stays ignored.
        """
        previous = self.ignores_path

        def ignores(path: str) -> bool:
            return previous(path) or predicate(path)

        return replace(self, ignores_path=ignores)

    def ignore_errors_for_directories(self, directories: Iterable[str]) -> Review:
        dirs = tuple(d.rstrip("/") + "/" for d in directories)
        return self.ignore_errors_for_paths_where(
            lambda path: any(matches_exclusion(path, d) for d in dirs)
        )

    def ignore_errors_for_files(self, paths: Iterable[str]) -> Review:
        files = frozenset(p.replace("\\", "/") for p in paths)
        return self.ignore_errors_for_paths_where(lambda path: path in files)


def new_review(
    name: str,
    inspectors: Iterable[Inspector],
    *,
    merge: Callable[[Any, Any], Any],
    report: Callable[[Any], list[ReviewError]],
) -> Review:
    return Review(name=name, inspectors=tuple(inspectors), merge=merge, report=report)


__all__ = ["Review", "new_review"]
