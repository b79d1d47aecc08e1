"""Central numerical tolerances and small geometry constants.

This module centralizes tiny numeric thresholds used across the codebase so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

import math

# Geometry tolerances
EPSILON: float = 1.0 / 32768.0       # coordinate tolerance for roughly_zero / roughly_equals
EPSILON2: float = EPSILON * EPSILON  # squared tolerance for length_sq comparisons
EPSILON_PARAM: float = EPSILON2      # merge threshold for parameter values on [0, 1]

# Auxiliary small epsilons
EPS_COEFF: float = 1e-12             # relative size below which a leading coefficient or discriminant counts as zero
EPS_CONTAINS: float = EPSILON2       # slack for inclusive rect containment of computed points

TWO_PI: float = 2.0 * math.pi

# Capacity bounds derived from curve degree
MAX_CRITICAL_POINTS: int = 6         # 0, 1 and up to 4 interior extrema (cubic, arc)
MAX_ENCLOSING_POINTS: int = 2        # entry and exit of a monotonic window

__all__ = [
    'EPSILON',
    'EPSILON2',
    'EPSILON_PARAM',
    'EPS_COEFF',
    'EPS_CONTAINS',
    'TWO_PI',
    'MAX_CRITICAL_POINTS',
    'MAX_ENCLOSING_POINTS',
]
