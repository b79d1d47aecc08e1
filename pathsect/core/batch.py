"""Pairwise intersection over a collection of curves.

This is the stage that feeds path splitting: every pair of curves is
intersected once, and the parameters found on each curve are collected into
sorted split lists (always including both ends).
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .config import DEFAULT_CONFIG, IntersectionConfig
from .constants import EPSILON
from .curves import Curve
from .decomposition import cached_critical_points, monotonic_segments
from .intersection import IntersectionPair, intersect, intersection_generic_monotonous
from .logging_utils import get_logger
from .point_set import dedup_pairs
from .roots import merge_close_roots
from .stats import IntersectionStats

logger = get_logger(__name__)

__all__ = ['intersect_all', 'split_parameters', 'self_intersections']


def intersect_all(curves: Sequence[Curve], config: IntersectionConfig = None,
                  stats: IntersectionStats = None) -> Dict[Tuple[int, int], List[IntersectionPair]]:
    """Intersections of every pair ``(i, j)`` with ``i < j``.

    Only pairs with at least one intersection appear in the result. Critical
    points are computed once per curve.
    """
    config = config or DEFAULT_CONFIG
    cps = [cached_critical_points(c) for c in curves]
    out: Dict[Tuple[int, int], List[IntersectionPair]] = {}
    for i in range(len(curves)):
        for j in range(i + 1, len(curves)):
            pairs = intersect(curves[i], curves[j], cps[i], cps[j], config, stats)
            if pairs:
                out[(i, j)] = pairs
    logger.debug("intersect_all: %d curves, %d intersecting pairs", len(curves), len(out))
    return out


def split_parameters(curves: Sequence[Curve], config: IntersectionConfig = None) -> List[List[float]]:
    """Sorted split parameters of each curve: ``0.0``, every intersection, ``1.0``.

    Parameters closer than the coordinate tolerance are merged; the ends are
    kept exactly.
    """
    found: List[List[float]] = [[] for _ in curves]
    for (i, j), pairs in intersect_all(curves, config).items():
        for pair in pairs:
            found[i].append(pair.t1)
            found[j].append(pair.t2)

    result = []
    for ts in found:
        inner = [t for t in merge_close_roots(ts, EPSILON) if EPSILON < t < 1.0 - EPSILON]
        result.append([0.0] + inner + [1.0])
    return result


def self_intersections(curve: Curve, config: IntersectionConfig = None,
                       stats: IntersectionStats = None) -> List[IntersectionPair]:
    """Points where a curve crosses itself, as ``(t1, t2)`` with ``t1 < t2``.

    Each monotonic window is intersected with every later window; windows
    always meet at their shared critical point, and such pairs
    (``t1 == t2`` within tolerance) are dropped.
    """
    config = config or DEFAULT_CONFIG
    curve.require_non_degenerate()
    windows = monotonic_segments(curve, cached_critical_points(curve))
    out: List[IntersectionPair] = []
    for i, (a_l, a_r) in enumerate(windows):
        for b_l, b_r in windows[i + 1:]:
            for pair in intersection_generic_monotonous(curve, curve, a_l, a_r, b_l, b_r, config, stats):
                if abs(pair.t1 - pair.t2) < EPSILON:
                    continue
                out.append(pair if pair.t1 < pair.t2 else pair.swapped())
    return dedup_pairs(out) if config.deduplicate else out
