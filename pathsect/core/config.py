"""Configuration objects for intersection queries."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class IntersectionConfig:
    """Knobs for one intersection query.

    Attributes
    ----------
    max_branches : int
        Upper bound on window pairs examined by the bisection for a single
        pair of monotonic segments. Exceeding it raises SubdivisionBudgetError.
    parallel : bool
        Evaluate independent monotonic segment pairs on a thread pool.
    max_workers : int or None
        Pool size when ``parallel`` is set (None lets the executor decide).
    validate_critical_points : bool
        Check caller-supplied critical points (0 first, 1 last, increasing).
    deduplicate : bool
        Merge pairs that coincide within tolerance in parameter space.

    Numeric tolerances are process-wide constants (see ``constants``) and are
    intentionally not part of this object.
    """
    max_branches: int = 1 << 16
    parallel: bool = False
    max_workers: Optional[int] = None
    validate_critical_points: bool = True
    deduplicate: bool = True

    def with_overrides(self, **overrides) -> 'IntersectionConfig':
        return replace(self, **overrides)


DEFAULT_CONFIG = IntersectionConfig()

__all__ = ['IntersectionConfig', 'DEFAULT_CONFIG']
