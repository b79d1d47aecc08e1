import numpy as np

from pathsect.core.constants import EPSILON
from pathsect.core.geometry import Vec2
from pathsect.core.point_set import contains_point_roughly, dedup_pairs, dedup_points, dedup_tolerant


def _clustered_points(rng, n_clusters=20, per_cluster=5):
    centers = rng.uniform(-1.0, 1.0, size=(n_clusters, 2))
    pts = []
    for c in centers:
        for _ in range(per_cluster):
            jitter = rng.uniform(-EPSILON / 4, EPSILON / 4, size=2)
            pts.append(Vec2(float(c[0] + jitter[0]), float(c[1] + jitter[1])))
    return pts


def test_dedup_merges_near_coincident():
    pts = [Vec2(0.0, 0.0), Vec2(EPSILON / 2, 0.0), Vec2(1.0, 1.0), Vec2(1.0, 1.0 + EPSILON / 3)]
    out = dedup_tolerant(pts)
    assert len(out) == 2
    assert out[0].roughly_equals(Vec2(0.0, 0.0))
    assert out[1].roughly_equals(Vec2(1.0, 1.0))


def test_dedup_keeps_points_differing_in_one_coordinate():
    pts = [Vec2(0.0, 0.0), Vec2(0.0, 2 * EPSILON), Vec2(2 * EPSILON, 0.0)]
    assert len(dedup_tolerant(pts)) == 3


def test_dedup_is_idempotent():
    rng = np.random.default_rng(5)
    pts = _clustered_points(rng)
    once = dedup_tolerant(pts)
    assert dedup_tolerant(once) == once


def test_dedup_is_order_independent():
    rng = np.random.default_rng(6)
    pts = _clustered_points(rng)
    shuffled = list(pts)
    rng.shuffle(shuffled)
    assert dedup_tolerant(pts) == dedup_tolerant(shuffled)
    assert dedup_tolerant(pts) == dedup_tolerant(list(reversed(pts)))


def test_dedup_result_pairwise_distinct():
    rng = np.random.default_rng(8)
    out = dedup_tolerant(_clustered_points(rng, n_clusters=50))
    for i, p in enumerate(out):
        assert not contains_point_roughly(out[i + 1:], p)


def test_dedup_points_sorted_by_key():
    pts = [Vec2(1.0, 0.0), Vec2(0.0, 1.0)]
    assert dedup_points(pts) == [Vec2(0.0, 1.0), Vec2(1.0, 0.0)]


def test_dedup_pairs_keeps_first_in_order():
    pairs = [(0.5, 0.25), (0.1, 0.9), (0.5 + EPSILON / 4, 0.25), (0.1, 0.9)]
    assert dedup_pairs(pairs) == [(0.5, 0.25), (0.1, 0.9)]
