"""Smoke test to ensure top-level package import works and the flat API layer
(`pathsect/__init__.py`) exposes the entry points.
"""

def test_import_pathsect_smoke():
    import pathsect  # noqa: F401
    assert hasattr(pathsect, 'intersect')
    assert hasattr(pathsect, 'intersection_generic')
    assert callable(pathsect.CubicBezier)
    assert isinstance(pathsect.__version__, str)


def test_all_names_resolve():
    import pathsect
    missing = [name for name in pathsect.__all__ if not hasattr(pathsect, name)]
    assert not missing, missing
