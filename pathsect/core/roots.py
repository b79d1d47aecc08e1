"""Closed-form root solvers used for line crossings and critical points.

All solvers return a sorted tuple of real roots; the caller restricts them to
its parameter range. A polynomial that vanishes identically (the curve lies
on the probing line) has no isolated root and yields an empty tuple.

The capacity of each result is bounded by the degree: linear 1, quadratic 2,
cubic 3, harmonic 2.
"""
from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .constants import EPS_COEFF, EPSILON_PARAM
from .errors import AmbiguousRootError
from .logging_utils import get_logger

logger = get_logger(__name__)

Roots = Tuple[float, ...]


def _negligible(lead: float, *others: float) -> bool:
    scale = max([abs(v) for v in others] + [0.0])
    return lead == 0.0 or abs(lead) <= EPS_COEFF * scale


def find_roots_linear(a: float, b: float) -> Roots:
    """Roots of ``a*t + b``."""
    if a == 0.0:
        return ()
    return (-b / a,)


def find_roots_quadratic(a: float, b: float, c: float) -> Roots:
    """Roots of ``a*t^2 + b*t + c`` (numerically stable form)."""
    if _negligible(a, b, c):
        return find_roots_linear(b, c)
    disc = b * b - 4.0 * a * c
    # Rounding can push a double root's discriminant slightly either way
    if abs(disc) <= EPS_COEFF * b * b:
        return (-b / (2.0 * a),)
    if disc < 0.0:
        return ()
    q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
    r1 = q / a
    r2 = c / q if q != 0.0 else -r1
    return tuple(sorted((r1, r2)))


def _polish(coeffs: Tuple[float, ...], t: float) -> float:
    # One Newton step on the original polynomial; keeps t when the slope vanishes
    value, slope = np.polyval(coeffs, t), np.polyval(np.polyder(coeffs), t)
    if slope == 0.0 or not np.isfinite(slope):
        return t
    refined = t - value / slope
    return float(refined) if abs(np.polyval(coeffs, refined)) <= abs(value) else t


def find_roots_cubic(a: float, b: float, c: float, d: float) -> Roots:
    """Roots of ``a*t^3 + b*t^2 + c*t + d`` via the depressed cubic."""
    if _negligible(a, b, c, d):
        return find_roots_quadratic(b, c, d)
    B, C, D = b / a, c / a, d / a
    shift = -B / 3.0
    p = C - B * B / 3.0
    q = 2.0 * B * B * B / 27.0 - B * C / 3.0 + D
    half_q2, third_p3 = (q / 2.0) ** 2, (p / 3.0) ** 3
    disc = half_q2 + third_p3

    if abs(disc) <= EPS_COEFF * max(half_q2, abs(third_p3)):
        if p == 0.0:
            raw = [0.0]
        else:
            raw = [3.0 * q / p, -3.0 * q / (2.0 * p)]
    elif disc > 0.0:
        s = math.sqrt(disc)
        u = float(np.cbrt(-q / 2.0 + s) + np.cbrt(-q / 2.0 - s))
        raw = [u]
    else:
        m = 2.0 * math.sqrt(-p / 3.0)
        arg = max(-1.0, min(1.0, 3.0 * q / (p * m)))
        theta = math.acos(arg) / 3.0
        raw = [m * math.cos(theta - 2.0 * math.pi * k / 3.0) for k in range(3)]

    coeffs = (a, b, c, d)
    return tuple(sorted(_polish(coeffs, u + shift) for u in raw))


def solve_harmonic(A: float, B: float, D: float) -> Roots:
    """Angles ``theta`` with ``A*cos(theta) + B*sin(theta) = D``.

    Returned angles are not wrapped; at most two, one when the line is tangent.
    """
    R = math.hypot(A, B)
    if R == 0.0:
        return ()
    ratio = D / R
    if abs(ratio) > 1.0 + EPS_COEFF:
        return ()
    base = math.atan2(B, A)
    if abs(ratio) >= 1.0 - EPS_COEFF:
        return (base,) if ratio > 0.0 else (base + math.pi,)
    spread = math.acos(ratio)
    return (base - spread, base + spread)


class RootKind(Enum):
    NONE = 0
    ONE = 1
    MULTIPLE = 2


def merge_close_roots(roots: Iterable[float], tolerance: float = EPSILON_PARAM) -> List[float]:
    """Collapse runs of sorted roots closer than ``tolerance`` into their mean."""
    clusters: List[List[float]] = []
    for r in sorted(roots):
        if clusters and r - clusters[-1][-1] <= tolerance:
            clusters[-1].append(r)
        else:
            clusters.append([r])
    return [sum(c) / len(c) for c in clusters]


def classify_roots(roots: Iterable[float], tolerance: float = EPSILON_PARAM) -> RootKind:
    n = len(merge_close_roots(roots, tolerance))
    if n == 0:
        return RootKind.NONE
    return RootKind.ONE if n == 1 else RootKind.MULTIPLE


def expect_single_root(roots: Iterable[float], tolerance: float = EPSILON_PARAM, **context) -> Optional[float]:
    """Return the unique root (None when there is none).

    Roots closer than ``tolerance`` count as one (a double root at a
    tangency). Several distinct roots violate the caller's monotonicity
    assumption and raise AmbiguousRootError with ``context`` attached.
    """
    merged = merge_close_roots(roots, tolerance)
    if not merged:
        return None
    if len(merged) > 1:
        logger.error("ambiguous root: %s context=%s", merged, context)
        raise AmbiguousRootError(merged, context)
    return merged[0]


__all__ = [
    'Roots', 'find_roots_linear', 'find_roots_quadratic', 'find_roots_cubic', 'solve_harmonic',
    'RootKind', 'merge_close_roots', 'classify_roots', 'expect_single_root',
]
