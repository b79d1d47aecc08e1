"""Clean-up of curve lists before intersection.

``simplify_curves`` rewrites curves into forms the intersection engine
handles well:

- degenerate curves (all control points within tolerance) are dropped;
- Bézier segments whose control points are collinear become line segments,
  split where the curve turns back along its line;
- a cubic whose cubic term vanishes becomes the equivalent quadratic;
- other cubics are split at their loop and inflection points, so no piece
  crosses itself;
- elliptic arcs with a vanishing radius become line segments, split where
  they turn back.

The output never contains a degenerate curve.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from .constants import EPSILON_PARAM
from .curves import CubicBezier, Curve, EllipticArc, Line, QuadraticBezier
from .geometry import Vec2, roughly_zero
from .logging_utils import get_logger
from .roots import find_roots_linear, find_roots_quadratic, merge_close_roots

logger = get_logger(__name__)

__all__ = ['simplify_curves', 'simplify_curve', 'is_collinear', 'cubic_split_points']


def _interior(params: Iterable[float]) -> List[float]:
    inner = [t for t in params if EPSILON_PARAM < t < 1.0 - EPSILON_PARAM]
    return [0.0] + merge_close_roots(inner) + [1.0]


def is_collinear(points: Sequence[Vec2]) -> bool:
    """True when every point lies within tolerance of the line from the first point to the one farthest from it."""
    origin = points[0]
    far = max(points, key=lambda p: (p - origin).length_sq())
    if far.roughly_equals(origin):
        return True
    u = (far - origin).normalized()
    return all(roughly_zero(u.cross(p - origin)) for p in points)


def _direction(points: Sequence[Vec2]) -> Vec2:
    origin = points[0]
    far = max(points, key=lambda p: (p - origin).length_sq())
    return (far - origin).normalized()


def _polyline(curve: Curve, params: Sequence[float]) -> List[Curve]:
    pts = [curve.at(t) for t in params]
    return [Line(p, q) for p, q in zip(pts, pts[1:])]


def _simplify_quadratic(q: QuadraticBezier) -> List[Curve]:
    if not is_collinear((q.a, q.b, q.c)):
        return [q]
    u = _direction((q.a, q.b, q.c))
    # Speed along the line is linear in t; it vanishes where the curve turns back
    d0, d1 = (q.b - q.a).dot(u), (q.c - q.b).dot(u)
    return _polyline(q, _interior(find_roots_linear(d1 - d0, d0)))


def cubic_split_points(c: CubicBezier) -> List[float]:
    """``[0, ..., 1]``: the cubic's loop parameters and inflection points inside (0, 1)."""
    # B(t) = k3 t^3 + k2 t^2 + k1 t + a
    k3 = c.d - c.a + 3.0 * (c.b - c.c)
    k2 = 3.0 * (c.a - 2.0 * c.b + c.c)
    k1 = 3.0 * (c.b - c.a)
    params = []

    # B'(t) x B''(t) / 2
    params.extend(find_roots_quadratic(3.0 * k2.cross(k3), 3.0 * k1.cross(k3), k1.cross(k2)))

    # B(s) = B(t), s != t: with S = s + t and P = s * t, k3 (S^2 - P) + k2 S + k1 = 0
    den = k2.cross(k3)
    if not roughly_zero(den) and not k3.roughly_zero():
        S = -k1.cross(k3) / den
        P = S * S + (k2 * S + k1).dot(k3) / k3.length_sq()
        loop = find_roots_quadratic(1.0, -S, P)
        if len(loop) == 2 and all(0.0 <= t <= 1.0 for t in loop):
            params.extend(loop)

    return _interior(params)


def _simplify_cubic(c: CubicBezier) -> List[Curve]:
    ctrl = (c.a, c.b, c.c, c.d)
    if is_collinear(ctrl):
        u = _direction(ctrl)
        d0, d1, d2 = ((q - p).dot(u) for p, q in zip(ctrl, ctrl[1:]))
        return _polyline(c, _interior(find_roots_quadratic(d0 - 2.0 * d1 + d2, 2.0 * (d1 - d0), d0)))

    if (c.a - 3.0 * c.b + 3.0 * c.c - c.d).roughly_zero():
        return [QuadraticBezier(c.a, (3.0 * c.b - c.a + 3.0 * c.c - c.d) / 4.0, c.d)]

    params = cubic_split_points(c)
    if len(params) == 2:
        return [c]
    return [c.subcurve(l, r) for l, r in zip(params, params[1:])]


def _simplify_arc(arc: EllipticArc) -> List[Curve]:
    if roughly_zero(arc.radii.x):
        base = math.pi / 2.0
    elif roughly_zero(arc.radii.y):
        base = 0.0
    else:
        return [arc]
    # The arc runs along one axis and turns back where that coordinate peaks
    turns = arc.angle_to_params(base) + arc.angle_to_params(base + math.pi)
    return _polyline(arc, _interior(turns))


def simplify_curve(curve: Curve) -> List[Curve]:
    """Simplified replacement of one curve (possibly several pieces, possibly none)."""
    if curve.is_degenerate():
        return []
    if isinstance(curve, QuadraticBezier):
        pieces = _simplify_quadratic(curve)
    elif isinstance(curve, CubicBezier):
        pieces = _simplify_cubic(curve)
    elif isinstance(curve, EllipticArc):
        pieces = _simplify_arc(curve)
    else:
        pieces = [curve]
    return [p for p in pieces if not p.is_degenerate()]


def simplify_curves(curves: Iterable[Curve]) -> List[Curve]:
    """Simplify every curve in order and concatenate the pieces."""
    out: List[Curve] = []
    n = 0
    for curve in curves:
        n += 1
        out.extend(simplify_curve(curve))
    logger.debug("simplified %d curves into %d", n, len(out))
    return out
