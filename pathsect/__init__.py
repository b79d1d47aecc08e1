"""Public package API for pathsect, a plane curve intersection engine.

This facade provides a flat import surface on top of the internal
implementation package ``pathsect.core``.

Example
-------
    from pathsect import Vec2, Line, CubicBezier, intersect

    c = CubicBezier(Vec2(0, 0), Vec2(2, 1), Vec2(-1, 1), Vec2(1, 0))
    for t1, t2 in intersect(Line(Vec2(0, 0.3), Vec2(1, 0.3)), c):
        print(c.at(t2))

The deeper modules (``pathsect.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:  # Python 3.8+ runtime version export
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("pathsect")  # populated when installed
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('pathsect.core.constants')
_errors = _imp('pathsect.core.errors')
_geom = _imp('pathsect.core.geometry')
_roots = _imp('pathsect.core.roots')
_curves = _imp('pathsect.core.curves')
_decomp = _imp('pathsect.core.decomposition')
_pset = _imp('pathsect.core.point_set')
_config = _imp('pathsect.core.config')
_stats = _imp('pathsect.core.stats')
_isect = _imp('pathsect.core.intersection')
_batch = _imp('pathsect.core.batch')
_simplify = _imp('pathsect.core.simplification')
_log = _imp('pathsect.core.logging_utils')

# Geometry primitives
Vec2 = _geom.Vec2
Rect = _geom.Rect
roughly_zero = _geom.roughly_zero
roughly_equals = _geom.roughly_equals

# Curves
Curve = _curves.Curve
Line = _curves.Line
QuadraticBezier = _curves.QuadraticBezier
CubicBezier = _curves.CubicBezier
EllipticArc = _curves.EllipticArc

# Decomposition
critical_points = _decomp.critical_points
cached_critical_points = _decomp.cached_critical_points
monotonic_segments = _decomp.monotonic_segments

# Intersection entry points
IntersectionPair = _isect.IntersectionPair
intersect = _isect.intersect
intersection_generic = _isect.intersection_generic
intersection_generic_monotonous = _isect.intersection_generic_monotonous
enclosing_points = _isect.enclosing_points
enclosing_args = _isect.enclosing_args
intersect_all = _batch.intersect_all
split_parameters = _batch.split_parameters
self_intersections = _batch.self_intersections
dedup_tolerant = _pset.dedup_tolerant
simplify_curves = _simplify.simplify_curves

# Configuration, stats, logging
IntersectionConfig = _config.IntersectionConfig
DEFAULT_CONFIG = _config.DEFAULT_CONFIG
IntersectionStats = _stats.IntersectionStats
configure_logging = _log.configure_logging
get_logger = _log.get_logger

# Tolerances
EPSILON = _const.EPSILON

# Errors
PathsectError = _errors.PathsectError
NonMonotonicSegmentError = _errors.NonMonotonicSegmentError
AmbiguousRootError = _errors.AmbiguousRootError
DegenerateInputError = _errors.DegenerateInputError
SubdivisionBudgetError = _errors.SubdivisionBudgetError

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
roots = _roots
curves = _curves
decomposition = _decomp
point_set = _pset
intersection = _isect
batch = _batch
simplification = _simplify
stats = _stats

__all__ = [
    '__version__',
    # geometry
    'Vec2', 'Rect', 'roughly_zero', 'roughly_equals', 'EPSILON',
    # curves
    'Curve', 'Line', 'QuadraticBezier', 'CubicBezier', 'EllipticArc',
    'critical_points', 'cached_critical_points', 'monotonic_segments',
    # intersection
    'IntersectionPair', 'intersect', 'intersection_generic', 'intersection_generic_monotonous',
    'enclosing_points', 'enclosing_args', 'intersect_all', 'split_parameters', 'self_intersections',
    'dedup_tolerant', 'simplify_curves',
    # configuration / diagnostics
    'IntersectionConfig', 'DEFAULT_CONFIG', 'IntersectionStats', 'configure_logging', 'get_logger',
    # errors
    'PathsectError', 'NonMonotonicSegmentError', 'AmbiguousRootError', 'DegenerateInputError',
    'SubdivisionBudgetError',
    # submodules
    'constants', 'geometry', 'roots', 'curves', 'decomposition', 'point_set', 'intersection', 'batch', 'stats',
    'simplification',
]
