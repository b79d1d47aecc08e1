"""Exception types raised by the intersection engine.

These signal programming or precondition errors, not expected runtime
conditions: callers should let them propagate. Each exception keeps the
offending parameters as attributes so a failing query can be replayed.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple


class PathsectError(Exception):
    """Base class for all pathsect errors."""


class NonMonotonicSegmentError(PathsectError):
    """A window assumed monotonic crosses a rect boundary more than twice."""

    def __init__(self, curve: Any, rect: Any, window: Tuple[float, float], points: Sequence[Any]):
        self.curve = curve
        self.rect = rect
        self.window = tuple(window)
        self.points = list(points)
        super().__init__(
            f"non-monotonic segment: {len(self.points)} distinct boundary points "
            f"for {curve!r} on window {self.window} inside {rect!r}: {self.points}"
        )


class AmbiguousRootError(PathsectError):
    """A line-crossing solver produced several roots where one was expected."""

    def __init__(self, roots: Sequence[float], context: Optional[dict] = None):
        self.roots = tuple(roots)
        self.context = dict(context or {})
        detail = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        super().__init__(f"expected at most one root, got {self.roots}" + (f" ({detail})" if detail else ""))


class DegenerateInputError(PathsectError, ValueError):
    """Zero-length curve, negative-size rect or malformed critical points."""


class SubdivisionBudgetError(PathsectError):
    """The bisection exceeded its branch budget (e.g. coincident curves)."""

    def __init__(self, budget: int, curve1: Any, curve2: Any):
        self.budget = budget
        self.curve1 = curve1
        self.curve2 = curve2
        super().__init__(f"subdivision exceeded {budget} branches intersecting {curve1!r} and {curve2!r}")


__all__ = [
    'PathsectError',
    'NonMonotonicSegmentError',
    'AmbiguousRootError',
    'DegenerateInputError',
    'SubdivisionBudgetError',
]
