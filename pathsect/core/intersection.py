"""Curve/curve intersection by bounding-box subdivision.

Both curves are split at their critical points into windows monotonic in x
and y. For every pair of windows the intersection of their endpoint boxes is
bisected along its longer side; each half keeps only the part of each curve
that lies inside it. A shared box that collapses to a point (within
tolerance) is a hit; hits between which the curves never leave tolerance
of each other are merged, so a tangency off the axes still yields one pair.

Entry points
------------
- ``intersection_generic(c1, c2, cp1, cp2)``: the subdivision engine on any
  pair of curves.
- ``intersect(c1, c2, cp1, cp2)``: dispatcher that solves line/line and
  line/curve pairs in closed form and falls back to the engine otherwise.

Results are lists of ``IntersectionPair(t1, t2)``; treat them as unordered.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, IntersectionConfig
from .constants import EPSILON, EPSILON_PARAM, MAX_ENCLOSING_POINTS
from .curves import Curve, Line
from .decomposition import cached_critical_points, monotonic_segments, validate_critical_points
from .errors import NonMonotonicSegmentError, SubdivisionBudgetError
from .geometry import Rect, Vec2, roughly_zero_squared
from .logging_utils import get_logger
from .point_set import dedup_pairs, dedup_tolerant
from .roots import expect_single_root, merge_close_roots
from .stats import IntersectionStats

logger = get_logger(__name__)

__all__ = [
    'IntersectionPair', 'enclosing_args', 'enclosing_points',
    'intersection_generic_monotonous', 'intersection_generic', 'intersect',
]

_AXIS_NAMES = ('x', 'y')
# Interpolation points checked between two hits before they are merged
_LINK_FRACTIONS = (0.25, 0.5, 0.75)


class IntersectionPair(NamedTuple):
    t1: float
    t2: float

    def swapped(self) -> 'IntersectionPair':
        return IntersectionPair(self.t2, self.t1)


# ---------------------------------------------------------------------------
# Restriction of a monotonic window to a rect
# ---------------------------------------------------------------------------

def _boundary_crossing(curve: Curve, axis: int, value: float, tl: float, tr: float) -> Optional[float]:
    roots = [t for t in curve.intersection_axis(axis, value)
             if tl - EPSILON_PARAM <= t <= tr + EPSILON_PARAM]
    t = expect_single_root(roots, EPSILON, curve=curve, axis=_AXIS_NAMES[axis], value=value, window=(tl, tr))
    if t is None:
        return None
    return min(tr, max(tl, t))


def enclosing_args(curve: Curve, rect: Rect, tl: float = 0.0, tr: float = 1.0) -> Optional[Tuple[float, float]]:
    """Parameter range of the monotonic window ``[tl, tr]`` lying inside ``rect``.

    Candidates are the window ends and the crossings with the four boundary
    lines; those whose position is inside ``rect`` (inclusive) are kept and
    near-coincident positions merged. Returns ``None`` when no candidate
    survives, otherwise the smallest and largest surviving parameter (equal
    when the curve only touches the rect).

    Raises NonMonotonicSegmentError when more than two distinct points
    survive, which a monotonic window cannot produce.
    """
    candidates = [tl, tr]
    for axis, value in ((0, rect.x), (0, rect.right), (1, rect.y), (1, rect.top)):
        t = _boundary_crossing(curve, axis, value, tl, tr)
        if t is not None:
            candidates.append(t)

    inside = []
    for t in candidates:
        p = curve.at(t)
        if rect.contains_point(p):
            inside.append((t, p))
    if not inside:
        return None

    distinct = dedup_tolerant(p for _, p in inside)
    if len(distinct) > MAX_ENCLOSING_POINTS:
        logger.error("non-monotonic window %s of %r in %r: %s", (tl, tr), curve, rect, distinct)
        raise NonMonotonicSegmentError(curve, rect, (tl, tr), distinct)
    ts = [t for t, _ in inside]
    return min(ts), max(ts)


def enclosing_points(curve: Curve, rect: Rect, tl: float = 0.0, tr: float = 1.0) -> Optional[Tuple[Vec2, Vec2]]:
    """Entry and exit points of the window inside ``rect`` (``(p, p)`` on a touch)."""
    args = enclosing_args(curve, rect, tl, tr)
    if args is None:
        return None
    ta, tb = args
    p = curve.at(ta)
    return (p, p) if ta == tb else (p, curve.at(tb))


# ---------------------------------------------------------------------------
# Subdivision engine
# ---------------------------------------------------------------------------

class _Hit(NamedTuple):
    # Parameter windows of both curves inside one negligible box
    w1: Tuple[float, float]
    w2: Tuple[float, float]

    def pair(self) -> IntersectionPair:
        # Averaging covers a point sitting on a box corner, found from both an x and a y line
        return IntersectionPair((self.w1[0] + self.w1[1]) / 2.0, (self.w2[0] + self.w2[1]) / 2.0)


def _subdivide(curve1: Curve, curve2: Curve, t1l: float, t1r: float, t2l: float, t2r: float,
               config: IntersectionConfig, stats: Optional[IntersectionStats]) -> List[_Hit]:
    hits: List[_Hit] = []
    local = IntersectionStats(segment_pairs=1)
    work = [(t1l, t1r, t2l, t2r, 0)]

    while work:
        a_l, a_r, b_l, b_r, depth = work.pop()
        local.branches += 1
        if local.branches > config.max_branches:
            logger.error("branch budget %d exhausted for %r x %r", config.max_branches, curve1, curve2)
            raise SubdivisionBudgetError(config.max_branches, curve1, curve2)
        if depth > local.max_depth:
            local.max_depth = depth

        bb1 = Rect.enclosing_rect_of_two_points(curve1.at(a_l), curve1.at(a_r))
        bb2 = Rect.enclosing_rect_of_two_points(curve2.at(b_l), curve2.at(b_r))
        bb = bb1.intersection(bb2)
        if bb is None:
            local.pruned += 1
            continue

        if bb.is_negligible():
            w1 = enclosing_args(curve1, bb, a_l, a_r)
            w2 = enclosing_args(curve2, bb, b_l, b_r) if w1 is not None else None
            if w1 is None or w2 is None:
                local.pruned += 1
                continue
            hits.append(_Hit(w1, w2))
            local.emitted += 1
            continue

        children = []
        for half in bb.split_longer_side():
            w1 = enclosing_args(curve1, half, a_l, a_r)
            w2 = enclosing_args(curve2, half, b_l, b_r) if w1 is not None else None
            if w1 is None or w2 is None:
                local.pruned += 1
                continue
            children.append((w1[0], w1[1], w2[0], w2[1], depth + 1))
        # Pop order matches a depth-first recursion over the halves
        work.extend(reversed(children))

    if stats is not None:
        stats.merge(local)
    return hits


def _close_between(curve1: Curve, curve2: Curve, h: _Hit, g: _Hit) -> bool:
    a, b = h.pair(), g.pair()
    for f in _LINK_FRACTIONS:
        p = curve1.at(a.t1 + f * (b.t1 - a.t1))
        q = curve2.at(a.t2 + f * (b.t2 - a.t2))
        if not p.roughly_equals(q):
            return False
    return True


def _cluster_hits(curve1: Curve, curve2: Curve, hits: Sequence[_Hit]) -> List[IntersectionPair]:
    """One averaged pair per chain of hits between which the curves stay within tolerance.

    Where two curves run within tolerance of each other (a tangency off the
    axes) every box along that stretch is negligible and yields a hit, with
    occasional gaps near its ends; the whole stretch is one intersection.
    Hits are visited in ``t1`` order and each is compared with the latest
    hit of every open cluster.
    """
    clusters: List[List[_Hit]] = []
    for hit in sorted(hits, key=lambda h: h.w1[0]):
        linked = [c for c in clusters if _close_between(curve1, curve2, c[-1], hit)]
        if not linked:
            clusters.append([hit])
            continue
        head = linked[0]
        for c in linked[1:]:
            head.extend(c)
            clusters.remove(c)
        head.append(hit)

    out = []
    for members in clusters:
        pairs = [h.pair() for h in members]
        n = len(pairs)
        out.append(IntersectionPair(sum(p.t1 for p in pairs) / n, sum(p.t2 for p in pairs) / n))
    return out


def intersection_generic_monotonous(curve1: Curve, curve2: Curve,
                                    t1l: float, t1r: float, t2l: float, t2r: float,
                                    config: IntersectionConfig = None,
                                    stats: IntersectionStats = None) -> List[IntersectionPair]:
    """Intersections of two windows each monotonic in x and y.

    Runs the bisection on an explicit work list; the longer side of the
    shared box halves at every level, so the depth stays within
    ``stats.depth_bound`` of the initial box. With ``config.deduplicate``
    the negligible boxes found along one crossing or tangency are reported
    as a single pair.
    """
    config = config or DEFAULT_CONFIG
    hits = _subdivide(curve1, curve2, t1l, t1r, t2l, t2r, config, stats)
    if config.deduplicate:
        return _cluster_hits(curve1, curve2, hits)
    return [h.pair() for h in hits]


def _resolve_critical_points(curve: Curve, cps: Optional[Sequence[float]], config: IntersectionConfig):
    if cps is None:
        return cached_critical_points(curve)
    if config.validate_critical_points:
        return validate_critical_points(cps)
    return tuple(cps)


def intersection_generic(curve1: Curve, curve2: Curve,
                         critical_points1: Optional[Sequence[float]] = None,
                         critical_points2: Optional[Sequence[float]] = None,
                         config: IntersectionConfig = None,
                         stats: IntersectionStats = None) -> List[IntersectionPair]:
    """All intersections of two curves through the subdivision engine.

    Every monotonic window of ``curve1`` is paired with every window of
    ``curve2``. Critical points are computed (and memoized) when not given.
    Degenerate curves raise DegenerateInputError.
    """
    config = config or DEFAULT_CONFIG
    curve1.require_non_degenerate()
    curve2.require_non_degenerate()
    cp1 = _resolve_critical_points(curve1, critical_points1, config)
    cp2 = _resolve_critical_points(curve2, critical_points2, config)
    jobs = [(w1, w2) for w1 in monotonic_segments(curve1, cp1) for w2 in monotonic_segments(curve2, cp2)]

    def run(job):
        (a_l, a_r), (b_l, b_r) = job
        return _subdivide(curve1, curve2, a_l, a_r, b_l, b_r, config, stats)

    if config.parallel and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            results = list(pool.map(run, jobs))
    else:
        results = [run(job) for job in jobs]

    hits = [hit for chunk in results for hit in chunk]
    # Clusters span window pairs; a tangency stretch can straddle a critical point
    if config.deduplicate:
        out = dedup_pairs(_cluster_hits(curve1, curve2, hits))
    else:
        out = [h.pair() for h in hits]
    logger.debug("generic %s x %s: %d window pairs, %d hits -> %d intersections",
                 curve1.kind, curve2.kind, len(jobs), len(hits), len(out))
    return out


# ---------------------------------------------------------------------------
# Closed-form special cases
# ---------------------------------------------------------------------------

def _clamp01(t: float) -> Optional[float]:
    if -EPSILON_PARAM <= t <= 1.0 + EPSILON_PARAM:
        return min(1.0, max(0.0, t))
    return None


def _intersection_line_line(l1: Line, l2: Line) -> List[IntersectionPair]:
    p, q = l1.a, l2.a
    r, s = l1.b - l1.a, l2.b - l2.a
    rr, ss = r.normalized(), s.normalized()

    if not roughly_zero_squared(rr.cross(ss)):
        k = r.cross(s)
        t = _clamp01((q - p).cross(s) / k)
        u = _clamp01((q - p).cross(r) / k)
        if t is None or u is None:
            return []
        return [IntersectionPair(t, u)]

    # Parallel: only collinear segments can meet, along their overlap
    rs = (rr + ss if rr.dot(ss) > 0.0 else rr - ss).normalized()
    if not roughly_zero_squared((q - p).cross(rs)):
        return []
    t0 = (q - p).dot(r) / r.length_sq()
    t1 = t0 + s.dot(r) / r.length_sq()
    lo, hi = max(0.0, min(t0, t1)), min(1.0, max(t0, t1))
    if lo > hi + EPSILON_PARAM:
        return []
    out = []
    for t in (lo, min(hi, 1.0)):
        u = _clamp01(l2.project(l1.at(t)))
        if u is not None:
            out.append(IntersectionPair(t, u))
    return out


def _intersection_line_curve(line: Line, curve: Curve) -> List[IntersectionPair]:
    out = []
    for root in merge_close_roots(curve.intersection_seg(line.a, line.b), EPSILON):
        pos = _clamp01(line.project(curve.at(root)))
        if pos is not None:
            out.append(IntersectionPair(pos, root))
    return out


def intersect(curve1: Curve, curve2: Curve,
              critical_points1: Optional[Sequence[float]] = None,
              critical_points2: Optional[Sequence[float]] = None,
              config: IntersectionConfig = None,
              stats: IntersectionStats = None) -> List[IntersectionPair]:
    """Intersections of two curves, using closed forms where a line is involved.

    Degenerate (zero-length) curves are rejected with DegenerateInputError.
    """
    config = config or DEFAULT_CONFIG
    curve1.require_non_degenerate()
    curve2.require_non_degenerate()

    if isinstance(curve1, Line) and isinstance(curve2, Line):
        out = _intersection_line_line(curve1, curve2)
    elif isinstance(curve1, Line):
        out = _intersection_line_curve(curve1, curve2)
    elif isinstance(curve2, Line):
        out = [pair.swapped() for pair in _intersection_line_curve(curve2, curve1)]
    else:
        return intersection_generic(curve1, curve2, critical_points1, critical_points2, config, stats)

    return dedup_pairs(out) if config.deduplicate else out
