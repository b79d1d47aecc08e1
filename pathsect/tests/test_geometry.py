"""Unit tests for geometry primitives and tolerant comparisons."""
import math

import pytest

from pathsect.core.constants import EPSILON
from pathsect.core.errors import DegenerateInputError
from pathsect.core.geometry import (
    Rect,
    Vec2,
    canonical,
    flipped_canonical,
    inside01,
    roughly_equals,
    roughly_equals_squared,
    roughly_zero,
    wrap_angle,
    wrap_angle_360,
)


class TestScalarHelpers:

    def test_roughly_zero_is_strict(self):
        assert roughly_zero(0.0)
        assert roughly_zero(EPSILON / 2)
        assert not roughly_zero(EPSILON)
        assert not roughly_zero(-EPSILON)

    def test_roughly_equals(self):
        assert roughly_equals(1.0, 1.0 + EPSILON / 4)
        assert not roughly_equals(1.0, 1.0 + 2 * EPSILON)

    def test_squared_tolerance_and_unit_range(self):
        assert roughly_equals_squared(0.25, 0.25 + EPSILON * EPSILON / 2)
        assert not roughly_equals_squared(0.25, 0.25 + EPSILON / 2)
        assert inside01(0.0) and inside01(1.0)
        assert not inside01(1.0 + EPSILON)

    def test_wrap_angle(self):
        assert wrap_angle(3 * math.pi / 2) == pytest.approx(-math.pi / 2)
        assert wrap_angle(0.25) == pytest.approx(0.25)

    def test_wrap_angle_360_ranges(self):
        assert wrap_angle_360(0.0, True) == pytest.approx(2 * math.pi)
        assert wrap_angle_360(0.0, False) == pytest.approx(-2 * math.pi)
        assert wrap_angle_360(-math.pi / 2, True) == pytest.approx(3 * math.pi / 2)
        assert wrap_angle_360(math.pi / 2, False) == pytest.approx(-3 * math.pi / 2)


class TestVec2:

    def test_arithmetic(self):
        a, b = Vec2(1.0, 2.0), Vec2(3.0, -1.0)
        assert a + b == Vec2(4.0, 1.0)
        assert a - b == Vec2(-2.0, 3.0)
        assert 2.0 * a == Vec2(2.0, 4.0)
        assert a * 2.0 == Vec2(2.0, 4.0)
        assert a / 2.0 == Vec2(0.5, 1.0)
        assert -a == Vec2(-1.0, -2.0)

    def test_products(self):
        a, b = Vec2(1.0, 0.0), Vec2(0.0, 1.0)
        assert a.dot(b) == 0.0
        assert a.cross(b) == 1.0
        assert b.cross(a) == -1.0
        assert Vec2(3.0, 4.0).length() == 5.0
        assert Vec2(3.0, 4.0).length_sq() == 25.0

    def test_rotation(self):
        v = Vec2(1.0, 0.0).rotate_by_angle(math.pi / 2)
        assert v.roughly_equals(Vec2(0.0, 1.0))
        assert Vec2(0.0, 2.0).angle() == pytest.approx(math.pi / 2)
        assert Vec2(1.0, 0.0).angle_between(Vec2(0.0, -1.0)) == pytest.approx(-math.pi / 2)

    def test_roughly_equals_is_component_wise(self):
        p = Vec2(1.0, 1.0)
        assert p.roughly_equals(Vec2(1.0 + EPSILON / 2, 1.0 - EPSILON / 2))
        assert not p.roughly_equals(Vec2(1.0 + 2 * EPSILON, 1.0))

    def test_canonical_orders(self):
        pts = [Vec2(1.0, 0.0), Vec2(0.0, 1.0), Vec2(0.0, 0.0)]
        assert sorted(pts, key=canonical) == [Vec2(0.0, 0.0), Vec2(0.0, 1.0), Vec2(1.0, 0.0)]
        assert sorted(pts, key=flipped_canonical) == [Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0)]


class TestRect:

    def test_negative_size_rejected(self):
        with pytest.raises(DegenerateInputError):
            Rect(0.0, 0.0, -1.0, 1.0)
        with pytest.raises(ValueError):
            Rect(0.0, 0.0, 1.0, -0.5)

    def test_intersection_overlap(self):
        r = Rect(0.0, 0.0, 2.0, 2.0).intersection(Rect(1.0, 1.0, 2.0, 2.0))
        assert r == Rect(1.0, 1.0, 1.0, 1.0)

    def test_intersection_disjoint(self):
        assert Rect(0.0, 0.0, 1.0, 1.0).intersection(Rect(2.0, 0.0, 1.0, 1.0)) is None

    def test_touching_edge_gives_degenerate_rect(self):
        r = Rect(0.0, 0.0, 1.0, 1.0).intersection(Rect(1.0, 0.5, 1.0, 1.0))
        assert r is not None
        assert r.width == 0.0
        assert r.height == 0.5

    def test_touching_corner_gives_point(self):
        r = Rect(0.0, 0.0, 1.0, 1.0).intersection(Rect(1.0, 1.0, 1.0, 1.0))
        assert r == Rect(1.0, 1.0, 0.0, 0.0)
        assert r.is_negligible()

    def test_enclosing_rect_of_two_points(self):
        r = Rect.enclosing_rect_of_two_points(Vec2(2.0, -1.0), Vec2(0.0, 3.0))
        assert r == Rect(0.0, -1.0, 2.0, 4.0)
        p = Rect.enclosing_rect_of_two_points(Vec2(1.0, 1.0), Vec2(1.0, 1.0))
        assert p.width == 0.0 and p.height == 0.0

    def test_enclosing_rect(self):
        r = Rect.enclosing_rect([Vec2(0.0, 0.0), Vec2(2.0, 1.0), Vec2(-1.0, 3.0)])
        assert r == Rect(-1.0, 0.0, 3.0, 3.0)
        assert Rect.enclosing_rect([]) is None

    def test_split_longer_side(self):
        left, right = Rect(0.0, 0.0, 4.0, 1.0).split_longer_side()
        assert left == Rect(0.0, 0.0, 2.0, 1.0)
        assert right == Rect(2.0, 0.0, 2.0, 1.0)
        bottom, top = Rect(0.0, 0.0, 1.0, 4.0).split_longer_side()
        assert bottom == Rect(0.0, 0.0, 1.0, 2.0)
        assert top == Rect(0.0, 2.0, 1.0, 2.0)

    def test_contains_point_inclusive(self):
        r = Rect(0.0, 0.0, 1.0, 1.0)
        assert r.contains_point(Vec2(1.0, 1.0))
        assert r.contains_point(Vec2(0.5, 0.0))
        assert not r.contains_point(Vec2(1.5, 0.5))

    def test_is_negligible(self):
        assert Rect(0.0, 0.0, EPSILON / 4, 0.0).is_negligible()
        assert not Rect(0.0, 0.0, EPSILON, 0.0).is_negligible()
