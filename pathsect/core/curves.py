"""Curve primitives: line segments, quadratic and cubic Bézier segments and
elliptic arcs, all parametrised over ``t`` in ``[0, 1]``.

Every curve is an immutable (frozen, hashable) dataclass and exposes the same
interface:

- ``at(t)`` / ``sample(ts)``: position at a parameter (scalar or vectorised)
- ``intersection_x(x)`` / ``intersection_y(y)``: parameters where the curve
  crosses a vertical / horizontal line, solved in closed form
- ``intersection_seg(v1, v2)``: crossings with the infinite line through two
  points
- ``critical_points()``: ``(0.0, ..., 1.0)`` splitting the curve into pieces
  monotonic in both x and y
- ``derivative()``, ``subcurve(l, r)``, ``reverse()``, ``bbox()``,
  ``entry_tangent()``, ``exit_tangent()``, ``winding()``, ``is_degenerate()``

Crossing queries return only parameters in ``[0, 1]`` (roots a hair outside
are clamped). A curve that lies on the probing line has no isolated crossing
and returns ``()``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

import numpy as np

from .constants import EPSILON_PARAM
from .errors import DegenerateInputError
from .geometry import Rect, Vec2, roughly_zero, wrap_angle_360
from .roots import Roots, find_roots_cubic, find_roots_linear, find_roots_quadratic, merge_close_roots, solve_harmonic

__all__ = [
    'Curve', 'Line', 'QuadraticBezier', 'CubicBezier', 'EllipticArc',
    'restrict_to_unit', 'sorted_critical_points',
]


def restrict_to_unit(roots: Iterable[float]) -> Roots:
    """Keep roots inside ``[0, 1]``, clamping those within tolerance of the ends."""
    kept = []
    for t in roots:
        if -EPSILON_PARAM <= t <= 1.0 + EPSILON_PARAM:
            kept.append(min(1.0, max(0.0, t)))
    return tuple(sorted(kept))


def sorted_critical_points(interior: Iterable[float]) -> Tuple[float, ...]:
    """``(0.0, *interior, 1.0)`` restricted to (0, 1), sorted and merged."""
    inner = [t for t in interior if EPSILON_PARAM < t < 1.0 - EPSILON_PARAM and not math.isnan(t)]
    return (0.0,) + tuple(merge_close_roots(inner)) + (1.0,)


class Curve:
    """Base class of the curve primitives."""

    kind = 'curve'

    def at(self, t: float) -> Vec2:
        if not (-EPSILON_PARAM <= t <= 1.0 + EPSILON_PARAM):
            raise ValueError(f"parameter {t!r} outside [0, 1] for {self!r}")
        return self._at(t)

    def _at(self, t: float) -> Vec2:
        raise NotImplementedError

    def sample(self, ts) -> np.ndarray:
        """Evaluate the curve at an array of parameters; returns shape ``(N, 2)``."""
        t = np.asarray(ts, dtype=np.float64).reshape(-1)
        return self._sample(t)

    def _sample(self, t: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def intersection_x(self, x: float) -> Roots:
        raise NotImplementedError

    def intersection_y(self, y: float) -> Roots:
        raise NotImplementedError

    def intersection_axis(self, axis: int, value: float) -> Roots:
        """``intersection_x`` for axis 0, ``intersection_y`` for axis 1."""
        return self.intersection_x(value) if axis == 0 else self.intersection_y(value)

    def intersection_seg(self, v1: Vec2, v2: Vec2) -> Roots:
        raise NotImplementedError

    def critical_points(self) -> Tuple[float, ...]:
        raise NotImplementedError

    def derivative(self) -> 'Curve':
        raise NotImplementedError

    def subcurve(self, l: float, r: float) -> 'Curve':
        raise NotImplementedError

    def reverse(self) -> 'Curve':
        raise NotImplementedError

    def winding(self) -> float:
        """Signed area contribution of the curve (twice the area swept from the origin)."""
        raise NotImplementedError

    def entry_tangent(self) -> Vec2:
        raise NotImplementedError

    def exit_tangent(self) -> Vec2:
        raise NotImplementedError

    def is_degenerate(self) -> bool:
        raise NotImplementedError

    def bbox(self) -> Rect:
        return Rect.enclosing_rect(self.at(t) for t in self.critical_points())

    def winding_relative_to(self, v: Vec2) -> float:
        return self.winding() - v.cross(self.at(1.0) - self.at(0.0))

    def require_non_degenerate(self) -> None:
        if self.is_degenerate():
            raise DegenerateInputError(f"zero-length curve {self!r}")


def _as_array(*points: Vec2) -> np.ndarray:
    return np.asarray([tuple(p) for p in points], dtype=np.float64)


# ===========================================================================
# Line segment
# ===========================================================================

@dataclass(frozen=True)
class Line(Curve):
    a: Vec2
    b: Vec2

    kind = 'line'

    def _at(self, t):
        return (1.0 - t) * self.a + t * self.b

    def _sample(self, t):
        a, b = _as_array(self.a, self.b)
        return a[None, :] + t[:, None] * (b - a)[None, :]

    def intersection_x(self, x):
        return restrict_to_unit(find_roots_linear(self.b.x - self.a.x, self.a.x - x))

    def intersection_y(self, y):
        return restrict_to_unit(find_roots_linear(self.b.y - self.a.y, self.a.y - y))

    def intersection_seg(self, v1, v2):
        dv = v2 - v1
        return restrict_to_unit(find_roots_linear(dv.cross(self.b - self.a), dv.cross(self.a - v1)))

    def critical_points(self):
        return (0.0, 1.0)

    def derivative(self):
        d = self.b - self.a
        return Line(d, d)

    def subcurve(self, l, r):
        return Line(self.at(l), self.at(r))

    def reverse(self):
        return Line(self.b, self.a)

    def winding(self):
        return self.a.cross(self.b)

    def entry_tangent(self):
        return (self.b - self.a).normalized()

    exit_tangent = entry_tangent

    def is_degenerate(self):
        return self.a.roughly_equals(self.b)

    def project(self, p: Vec2) -> float:
        """Parameter of the orthogonal projection of ``p`` on the supporting line."""
        d = self.b - self.a
        return d.dot(p - self.a) / d.length_sq()


# ===========================================================================
# Quadratic Bézier
# ===========================================================================

@dataclass(frozen=True)
class QuadraticBezier(Curve):
    a: Vec2
    b: Vec2
    c: Vec2

    kind = 'quadratic'

    def _at(self, t):
        ct = 1.0 - t
        return ct * ct * self.a + 2.0 * ct * t * self.b + t * t * self.c

    def _sample(self, t):
        a, b, c = _as_array(self.a, self.b, self.c)
        ct = (1.0 - t)[:, None]
        t = t[:, None]
        return ct * ct * a + 2.0 * ct * t * b + t * t * c

    def _axis_roots(self, pa, pb, pc, value):
        return restrict_to_unit(find_roots_quadratic(pa - 2.0 * pb + pc, 2.0 * (pb - pa), pa - value))

    def intersection_x(self, x):
        return self._axis_roots(self.a.x, self.b.x, self.c.x, x)

    def intersection_y(self, y):
        return self._axis_roots(self.a.y, self.b.y, self.c.y, y)

    def intersection_seg(self, v1, v2):
        dv = v2 - v1
        return restrict_to_unit(find_roots_quadratic(
            dv.cross(self.a - 2.0 * self.b + self.c),
            2.0 * dv.cross(self.b - self.a),
            dv.cross(self.a - v1)))

    def critical_points(self):
        d = self.derivative()
        interior = []
        for da, db in ((d.a.x, d.b.x), (d.a.y, d.b.y)):
            if da != db:
                interior.append(da / (da - db))
        return sorted_critical_points(interior)

    def derivative(self):
        return Line(2.0 * (self.b - self.a), 2.0 * (self.c - self.b))

    def subcurve(self, l, r):
        cl, cr = 1.0 - l, 1.0 - r
        ctrl = cl * cr * self.a + (l * cr + r * cl) * self.b + l * r * self.c
        return QuadraticBezier(self.at(l), ctrl, self.at(r))

    def reverse(self):
        return QuadraticBezier(self.c, self.b, self.a)

    def winding(self):
        return (2.0 * self.a.cross(self.b) + 2.0 * self.b.cross(self.c) + self.a.cross(self.c)) / 3.0

    def entry_tangent(self):
        if self.a.roughly_equals(self.b):
            return (self.c - self.a).normalized()
        return (self.b - self.a).normalized()

    def exit_tangent(self):
        if self.b.roughly_equals(self.c):
            return (self.c - self.a).normalized()
        return (self.c - self.b).normalized()

    def is_degenerate(self):
        return self.a.roughly_equals(self.b) and self.b.roughly_equals(self.c)


# ===========================================================================
# Cubic Bézier
# ===========================================================================

@dataclass(frozen=True)
class CubicBezier(Curve):
    a: Vec2
    b: Vec2
    c: Vec2
    d: Vec2

    kind = 'cubic'

    def _at(self, t):
        ct = 1.0 - t
        return (ct * ct * ct * self.a + 3.0 * ct * ct * t * self.b
            + 3.0 * ct * t * t * self.c + t * t * t * self.d)

    def _sample(self, t):
        a, b, c, d = _as_array(self.a, self.b, self.c, self.d)
        ct = (1.0 - t)[:, None]
        t = t[:, None]
        return ct ** 3 * a + 3.0 * ct * ct * t * b + 3.0 * ct * t * t * c + t ** 3 * d

    @staticmethod
    def _power_basis(pa, pb, pc, pd):
        return (-pa + 3.0 * pb - 3.0 * pc + pd, 3.0 * (pa - 2.0 * pb + pc), 3.0 * (pb - pa), pa)

    def intersection_x(self, x):
        k3, k2, k1, k0 = self._power_basis(self.a.x, self.b.x, self.c.x, self.d.x)
        return restrict_to_unit(find_roots_cubic(k3, k2, k1, k0 - x))

    def intersection_y(self, y):
        k3, k2, k1, k0 = self._power_basis(self.a.y, self.b.y, self.c.y, self.d.y)
        return restrict_to_unit(find_roots_cubic(k3, k2, k1, k0 - y))

    def intersection_seg(self, v1, v2):
        dv = v2 - v1
        return restrict_to_unit(find_roots_cubic(
            dv.cross(-self.a + 3.0 * self.b - 3.0 * self.c + self.d),
            3.0 * dv.cross(self.a - 2.0 * self.b + self.c),
            3.0 * dv.cross(self.b - self.a),
            dv.cross(self.a - v1)))

    def critical_points(self):
        dd = self.derivative()
        interior: List[float] = []
        for pa, pb, pc in ((dd.a.x, dd.b.x, dd.c.x), (dd.a.y, dd.b.y, dd.c.y)):
            interior.extend(find_roots_quadratic(pa - 2.0 * pb + pc, 2.0 * (pb - pa), pa))
        return sorted_critical_points(interior)

    def derivative(self):
        return QuadraticBezier(3.0 * (self.b - self.a), 3.0 * (self.c - self.b), 3.0 * (self.d - self.c))

    def subcurve(self, l, r):
        start, end = self.at(l), self.at(r)
        dd = self.derivative()
        d1 = dd.at(l) * (r - l)
        d2 = dd.at(r) * (r - l)
        return CubicBezier(start, start + d1 / 3.0, end - d2 / 3.0, end)

    def reverse(self):
        return CubicBezier(self.d, self.c, self.b, self.a)

    def winding(self):
        a, b, c, d = self.a, self.b, self.c, self.d
        return (6.0 * a.cross(b) + 3.0 * a.cross(c) + a.cross(d)
            + 3.0 * b.cross(c) + 3.0 * b.cross(d) + 6.0 * c.cross(d)) / 10.0

    def entry_tangent(self):
        if self.b.roughly_equals(self.a):
            return self.derivative().entry_tangent()
        return (self.b - self.a).normalized()

    def exit_tangent(self):
        if self.d.roughly_equals(self.c):
            return self.derivative().exit_tangent()
        return (self.d - self.c).normalized()

    def is_degenerate(self):
        return (self.a.roughly_equals(self.b) and self.b.roughly_equals(self.c)
            and self.c.roughly_equals(self.d))


# ===========================================================================
# Elliptic arc
# ===========================================================================

@dataclass(frozen=True)
class EllipticArc(Curve):
    """Arc of the ellipse ``center + R(rotation) * (rx cos th, ry sin th)``
    for ``th`` from ``theta1`` to ``theta1 + dtheta``.

    Angles are in radians. ``dtheta`` is signed and ``|dtheta| <= 2*pi``.
    """
    center: Vec2
    radii: Vec2
    rotation: float
    theta1: float
    dtheta: float

    kind = 'arc'

    @property
    def crot(self) -> Vec2:
        return Vec2.from_angle(self.rotation)

    @property
    def lesser_angle(self) -> float:
        return min(self.theta1, self.theta1 + self.dtheta)

    @property
    def greater_angle(self) -> float:
        return max(self.theta1, self.theta1 + self.dtheta)

    def _delta_at(self, t: float) -> Vec2:
        th = self.theta1 + t * self.dtheta
        return Vec2(self.radii.x * math.cos(th), self.radii.y * math.sin(th))

    def _at(self, t):
        return self.center + self.crot.rot_scale(self._delta_at(t))

    def _sample(self, t):
        th = self.theta1 + t * self.dtheta
        lx = self.radii.x * np.cos(th)
        ly = self.radii.y * np.sin(th)
        cs, sn = math.cos(self.rotation), math.sin(self.rotation)
        return np.stack([self.center.x + cs * lx - sn * ly, self.center.y + sn * lx + cs * ly], axis=-1)

    def _axis_coeffs(self, axis: int) -> Tuple[float, float]:
        # Coordinate ``axis`` relative to the center is A*cos(th) + B*sin(th)
        cs, sn = math.cos(self.rotation), math.sin(self.rotation)
        if axis == 0:
            return self.radii.x * cs, -self.radii.y * sn
        return self.radii.x * sn, self.radii.y * cs

    def angle_to_params(self, theta: float) -> List[float]:
        """All parameters in [0, 1] whose angle equals ``theta`` modulo a turn."""
        if self.dtheta == 0.0:
            return []
        tol = EPSILON_PARAM * abs(self.dtheta)
        lo, hi = self.lesser_angle - tol, self.greater_angle + tol
        k = math.ceil((lo - theta) / (2.0 * math.pi))
        out = []
        cand = theta + 2.0 * math.pi * k
        while cand <= hi:
            out.append(min(1.0, max(0.0, (cand - self.theta1) / self.dtheta)))
            cand += 2.0 * math.pi
        return out

    def _angles_to_roots(self, angles: Iterable[float]) -> Roots:
        params = [t for th in angles for t in self.angle_to_params(th)]
        return tuple(merge_close_roots(params))

    def intersection_x(self, x):
        A, B = self._axis_coeffs(0)
        return self._angles_to_roots(solve_harmonic(A, B, x - self.center.x))

    def intersection_y(self, y):
        A, B = self._axis_coeffs(1)
        return self._angles_to_roots(solve_harmonic(A, B, y - self.center.y))

    def intersection_seg(self, v1, v2):
        dv = v2 - v1
        crot = self.crot
        A = self.radii.x * dv.cross(crot)
        B = self.radii.y * dv.dot(crot)
        return self._angles_to_roots(solve_harmonic(A, B, (self.center - v1).cross(dv)))

    def critical_points(self):
        interior = []
        for axis in (0, 1):
            A, B = self._axis_coeffs(axis)
            if A == 0.0 and B == 0.0:
                continue
            base = math.atan2(B, A)
            for th in (base, base + math.pi):
                interior.extend(self.angle_to_params(th))
        return sorted_critical_points(interior)

    def derivative(self):
        return EllipticArc(Vec2.zero(), abs(self.dtheta) * self.radii, self.rotation,
            self.theta1 + math.copysign(math.pi / 2.0, self.dtheta), self.dtheta)

    def subcurve(self, l, r):
        return replace(self, theta1=self.theta1 + l * self.dtheta, dtheta=(r - l) * self.dtheta)

    def reverse(self):
        return replace(self, theta1=self.theta1 + self.dtheta, dtheta=-self.dtheta)

    def winding(self):
        p0 = self._delta_at(0.0)
        p1 = self._delta_at(1.0)
        return (self.dtheta * self.radii.x * self.radii.y
            + self.center.cross(self.crot.rot_scale(p1 - p0)))

    def entry_tangent(self):
        return self.derivative().at(0.0).normalized()

    def exit_tangent(self):
        return self.derivative().at(1.0).normalized()

    def is_degenerate(self):
        return (roughly_zero(self.radii.x) and roughly_zero(self.radii.y)) \
            or roughly_zero(self.dtheta * max(self.radii.x, self.radii.y))

    @classmethod
    def from_path_params(cls, cur: Vec2, radii: Vec2, x_rotation: float,
                         large_arc: bool, sweep: bool, target: Vec2) -> 'EllipticArc':
        """Build an arc from SVG endpoint parameters (``x_rotation`` in radians).

        Follows the SVG implementation notes: radii are made positive and
        scaled up when too small to span ``cur`` to ``target``.
        """
        rx, ry = abs(radii.x), abs(radii.y)
        if cur.roughly_equals(target) or roughly_zero(rx) or roughly_zero(ry):
            raise DegenerateInputError(
                f"arc from {cur!r} to {target!r} with radii {radii!r} is degenerate; use a Line")
        xpr = ((cur - target) / 2.0).rotate_by_angle(-x_rotation)

        rr = rx * rx * xpr.y * xpr.y + ry * ry * xpr.x * xpr.x
        r2 = rx * rx * ry * ry
        if rr > r2:
            scale = math.sqrt(rr / r2)
            rx, ry = rx * scale, ry * scale
            skr = 0.0
        else:
            skr = math.sqrt((r2 - rr) / rr)

        cpr = Vec2(skr * rx * xpr.y / ry, -skr * ry * xpr.x / rx)
        if large_arc == sweep:
            cpr = -cpr
        center = cpr.rotate_by_angle(x_rotation) + (target + cur) / 2.0

        t1 = math.atan2(rx * (xpr.y - cpr.y), ry * (xpr.x - cpr.x))
        t2 = math.atan2(rx * (-xpr.y - cpr.y), ry * (-xpr.x - cpr.x))
        dt = t2 - t1
        if not sweep and dt > 0.0:
            dt -= 2.0 * math.pi
        elif sweep and dt < 0.0:
            dt += 2.0 * math.pi
        return cls(center, Vec2(rx, ry), x_rotation, t1, dt)

    @classmethod
    def circle(cls, center: Vec2, radius: float, v1: Vec2, v2: Vec2, ccw: bool) -> 'EllipticArc':
        """Circular arc from direction ``v1`` to direction ``v2`` around ``center``.

        ``ccw`` selects a positive sweep in (0, 2pi], otherwise [-2pi, 0);
        parallel directions give a full circle.
        """
        sweep = wrap_angle_360(v1.angle_between(v2), ccw)
        return cls(center, Vec2(radius, radius), v1.angle(), 0.0, sweep)
