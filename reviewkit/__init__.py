"""reviewkit: incremental review engine for project-wide static analysis."""

from reviewkit.core.errors import ReviewError, error
from reviewkit.core.fixes import (
    CollisionDetected,
    FixError,
    ResultUnchanged,
    apply_fixes,
    insertion,
    removal,
    replace_range,
)
from reviewkit.core.ranges import Position, Range
from reviewkit.engine.inspectors import (
    from_dependencies,
    from_extra_file,
    from_manifest,
    from_module,
)
from reviewkit.engine.review import Review, new_review
from reviewkit.engine.runner import Engine, RunResult, start
from reviewkit.engine.suite import ReviewSuite
from reviewkit.project import Dependency, ExtraFile, Manifest, Module, ProjectDelta

__version__ = "0.4.0"

__all__ = [
    "CollisionDetected",
    "Dependency",
    "Engine",
    "ExtraFile",
    "FixError",
    "Manifest",
    "Module",
    "Position",
    "ProjectDelta",
    "Range",
    "ResultUnchanged",
    "Review",
    "ReviewError",
    "ReviewSuite",
    "RunResult",
    "apply_fixes",
    "error",
    "from_dependencies",
    "from_extra_file",
    "from_manifest",
    "from_module",
    "insertion",
    "new_review",
    "removal",
    "replace_range",
    "start",
]
