"""Implementation package for pathsect; import public names from ``pathsect``."""
