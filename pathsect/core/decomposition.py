"""Monotonic decomposition of curves.

The critical points of a curve are ``0.0``, every interior parameter where
``x'(t)`` or ``y'(t)`` vanishes, and ``1.0``. Consecutive critical points
bound windows on which the curve is monotonic in both coordinates, so the
bounding box of a window is the box of its two endpoint positions.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np

from .constants import EPSILON, MAX_CRITICAL_POINTS
from .curves import Curve
from .errors import DegenerateInputError

__all__ = [
    'critical_points', 'cached_critical_points', 'validate_critical_points',
    'monotonic_segments', 'is_monotonic_between',
]

CriticalPoints = Tuple[float, ...]


def critical_points(curve: Curve) -> CriticalPoints:
    cps = tuple(curve.critical_points())
    if len(cps) > MAX_CRITICAL_POINTS:
        raise DegenerateInputError(f"{curve!r} produced {len(cps)} critical points: {cps}")
    return cps


@lru_cache(maxsize=4096)
def cached_critical_points(curve: Curve) -> CriticalPoints:
    """Memoized ``critical_points``; curves are immutable and hashable."""
    return critical_points(curve)


def validate_critical_points(cps: Sequence[float]) -> CriticalPoints:
    """Return ``cps`` as a tuple after checking the decomposition invariants."""
    cps = tuple(float(t) for t in cps)
    if len(cps) < 2 or cps[0] != 0.0 or cps[-1] != 1.0:
        raise DegenerateInputError(f"critical points must start at 0.0 and end at 1.0, got {cps}")
    if any(b <= a for a, b in zip(cps, cps[1:])):
        raise DegenerateInputError(f"critical points must be strictly increasing, got {cps}")
    return cps


def monotonic_segments(curve: Curve, cps: Sequence[float] = None) -> List[Tuple[float, float]]:
    """Consecutive ``(tl, tr)`` windows of the decomposition."""
    if cps is None:
        cps = cached_critical_points(curve)
    return list(zip(cps[:-1], cps[1:]))


def is_monotonic_between(curve: Curve, tl: float, tr: float, samples: int = 33,
                         tolerance: float = EPSILON) -> bool:
    """Sampling check that x and y never reverse direction on ``[tl, tr]``."""
    pts = curve.sample(np.linspace(tl, tr, samples))
    steps = np.diff(pts, axis=0)
    for col in (0, 1):
        d = steps[:, col]
        if not (np.all(d >= -tolerance) or np.all(d <= tolerance)):
            return False
    return True
