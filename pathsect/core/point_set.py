"""Tolerant point sets.

Two points are the same when they are ``roughly_equals`` (each coordinate
within ``EPSILON``). De-duplication sweeps the points in a total order and
compares each point against the already kept points whose primary coordinate
is within tolerance, so the outcome does not depend on input order and a
second pass never removes anything.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, Tuple

from .constants import EPSILON
from .geometry import Vec2, canonical, flipped_canonical

__all__ = ['dedup_points', 'dedup_tolerant', 'dedup_pairs', 'contains_point_roughly']

_SortKey = Callable[[Vec2], Tuple[float, float]]


def dedup_points(points: Iterable[Vec2], key: _SortKey = canonical) -> List[Vec2]:
    """Sorted (by ``key``) representatives of near-coincident points.

    The first point of each cluster in ``key`` order is kept.
    """
    ordered = sorted((Vec2(*p) for p in points), key=key)
    kept: List[Vec2] = []
    for p in ordered:
        primary = key(p)[0]
        duplicate = False
        for q in reversed(kept):
            if primary - key(q)[0] >= EPSILON:
                break
            if p.roughly_equals(q):
                duplicate = True
                break
        if not duplicate:
            kept.append(p)
    return kept


def dedup_tolerant(points: Iterable[Vec2]) -> List[Vec2]:
    """De-duplicate along both orderings; the result is in ``canonical`` order."""
    by_x = dedup_points(points, canonical)
    by_y = dedup_points(by_x, flipped_canonical)
    return sorted(by_y, key=canonical)


def contains_point_roughly(points: Sequence[Vec2], p: Vec2) -> bool:
    return any(p.roughly_equals(q) for q in points)


def dedup_pairs(pairs: Iterable[Sequence[float]]) -> list:
    """Drop pairs that coincide within tolerance with an earlier one.

    Insertion order and the pair objects themselves are preserved.
    """
    kept: list = []
    seen: List[Vec2] = []
    for pair in pairs:
        v = Vec2(float(pair[0]), float(pair[1]))
        if contains_point_roughly(seen, v):
            continue
        seen.append(v)
        kept.append(pair)
    return kept
