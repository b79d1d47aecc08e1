"""Geometry primitives and tolerant comparisons.

``Vec2`` is an immutable point/vector value, ``Rect`` an axis-aligned
rectangle with non-negative size. Scalar helpers implement the tolerance
rules shared by the whole engine; the threshold itself lives in
``constants``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

import numpy as np

from .constants import EPSILON, EPSILON2, EPS_CONTAINS, TWO_PI
from .errors import DegenerateInputError

__all__ = [
	'roughly_zero', 'roughly_zero_squared', 'roughly_equals', 'roughly_equals_squared',
	'inside01', 'wrap_angle', 'wrap_angle_360',
	'Vec2', 'Rect', 'canonical', 'flipped_canonical', 'points_to_array',
]


def roughly_zero(v: float) -> bool:
	return -EPSILON < v < EPSILON


def roughly_zero_squared(v: float) -> bool:
	return -EPSILON2 < v < EPSILON2


def roughly_equals(a: float, b: float) -> bool:
	return roughly_zero(a - b)


def roughly_equals_squared(a: float, b: float) -> bool:
	return roughly_zero_squared(a - b)


def inside01(t: float) -> bool:
	return 0.0 <= t <= 1.0


def wrap_angle(theta: float) -> float:
	"""Wrap an angle into [-pi, pi]."""
	return theta + TWO_PI * round(-theta / TWO_PI)


def wrap_angle_360(theta: float, ccw: bool) -> float:
	"""Wrap a sweep angle to a full turn: (0, 2pi] when ``ccw`` else [-2pi, 0)."""
	if ccw:
		return theta - TWO_PI * math.ceil(theta / TWO_PI) + TWO_PI
	return theta - TWO_PI * math.floor(theta / TWO_PI) - TWO_PI


class Vec2(NamedTuple):
	"""Immutable 2D point / vector.

	Tuple ordering is lexicographic on ``(x, y)``, which is exactly the
	``canonical`` order.
	"""
	x: float
	y: float

	@staticmethod
	def zero() -> 'Vec2':
		return Vec2(0.0, 0.0)

	@staticmethod
	def from_angle(angle: float) -> 'Vec2':
		return Vec2(math.cos(angle), math.sin(angle))

	def __add__(self, other: 'Vec2') -> 'Vec2':  # type: ignore[override]
		return Vec2(self.x + other.x, self.y + other.y)

	def __sub__(self, other: 'Vec2') -> 'Vec2':
		return Vec2(self.x - other.x, self.y - other.y)

	def __mul__(self, k: float) -> 'Vec2':  # type: ignore[override]
		return Vec2(self.x * k, self.y * k)

	__rmul__ = __mul__

	def __truediv__(self, k: float) -> 'Vec2':
		return Vec2(self.x / k, self.y / k)

	def __neg__(self) -> 'Vec2':
		return Vec2(-self.x, -self.y)

	def dot(self, other: 'Vec2') -> float:
		return self.x * other.x + self.y * other.y

	def cross(self, other: 'Vec2') -> float:
		return self.x * other.y - self.y * other.x

	def length_sq(self) -> float:
		return self.dot(self)

	def length(self) -> float:
		return math.hypot(self.x, self.y)

	def normalized(self) -> 'Vec2':
		return self / self.length()

	def rot_scale(self, other: 'Vec2') -> 'Vec2':
		"""Complex multiplication: rotate and scale ``other`` by ``self``."""
		return Vec2(self.x * other.x - self.y * other.y, self.x * other.y + self.y * other.x)

	def rotate_by_angle(self, angle: float) -> 'Vec2':
		return Vec2.from_angle(angle).rot_scale(self)

	def angle(self) -> float:
		return math.atan2(self.y, self.x)

	def angle_between(self, other: 'Vec2') -> float:
		return math.atan2(self.cross(other), self.dot(other))

	def roughly_zero(self) -> bool:
		return roughly_zero(self.x) and roughly_zero(self.y)

	def roughly_equals(self, other: 'Vec2') -> bool:
		return roughly_equals(self.x, other.x) and roughly_equals(self.y, other.y)

	def __repr__(self) -> str:
		return f"({self.x:g},{self.y:g})"


def canonical(p: Vec2) -> Tuple[float, float]:
	"""Sort key ordering points by x, then y."""
	return (p.x, p.y)


def flipped_canonical(p: Vec2) -> Tuple[float, float]:
	"""Sort key ordering points by y, then x."""
	return (p.y, p.x)


def points_to_array(points: Iterable[Vec2]) -> np.ndarray:
	"""Stack points into an (N,2) float64 array."""
	arr = np.asarray([tuple(p) for p in points], dtype=np.float64)
	return arr.reshape(-1, 2)


@dataclass(frozen=True)
class Rect:
	"""Axis-aligned rectangle; a 0 x 0 rect represents a single point."""
	x: float
	y: float
	width: float
	height: float

	def __post_init__(self):
		if self.width < 0.0 or self.height < 0.0 or math.isnan(self.width) or math.isnan(self.height):
			raise DegenerateInputError(f"rect size must be non-negative, got {self.width} x {self.height}")

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def top(self) -> float:
		return self.y + self.height

	def intersects(self, other: 'Rect') -> bool:
		return not (self.x > other.right or other.x > self.right
			or self.y > other.top or other.y > self.top)

	def intersection(self, other: 'Rect') -> Optional['Rect']:
		"""Overlap of two rects; touching edges or corners give a degenerate rect."""
		if not self.intersects(other):
			return None
		x1 = max(self.x, other.x)
		x2 = min(self.right, other.right)
		y1 = max(self.y, other.y)
		y2 = min(self.top, other.top)
		return Rect(x1, y1, x2 - x1, y2 - y1)

	def contains_point(self, p: Vec2, slack: float = EPS_CONTAINS) -> bool:
		return (self.x - slack <= p.x <= self.right + slack
			and self.y - slack <= p.y <= self.top + slack)

	def is_negligible(self) -> bool:
		return roughly_zero(2.0 * self.width) and roughly_zero(2.0 * self.height)

	def split_longer_side(self) -> Tuple['Rect', 'Rect']:
		"""Two equal halves of the rect, cut across its longer side."""
		if self.width >= self.height:
			half = self.width / 2.0
			return (Rect(self.x, self.y, half, self.height),
				Rect(self.x + half, self.y, self.width - half, self.height))
		half = self.height / 2.0
		return (Rect(self.x, self.y, self.width, half),
			Rect(self.x, self.y + half, self.width, self.height - half))

	@staticmethod
	def enclosing_rect(points: Iterable[Vec2]) -> Optional['Rect']:
		arr = points_to_array(points)
		if arr.shape[0] == 0:
			return None
		lo = arr.min(axis=0)
		hi = arr.max(axis=0)
		return Rect(float(lo[0]), float(lo[1]), float(hi[0] - lo[0]), float(hi[1] - lo[1]))

	@staticmethod
	def enclosing_rect_of_two_points(p: Vec2, q: Vec2) -> 'Rect':
		x1, x2 = min(p.x, q.x), max(p.x, q.x)
		y1, y2 = min(p.y, q.y), max(p.y, q.y)
		return Rect(x1, y1, x2 - x1, y2 - y1)
