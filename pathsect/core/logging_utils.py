"""Logging utilities for pathsect.

Provides a consistent logger hierarchy and formatting without modifying the
process root logger. All pathsect code should obtain loggers via get_logger().
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT_NAME = 'pathsect'
_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _ensure_package_root() -> logging.Logger:
    """Ensure the 'pathsect' logger has a single stream handler and is isolated
    from the process root logger. Returns the 'pathsect' logger.
    """
    root = logging.getLogger(_ROOT_NAME)
    # Replace the NullHandler added by the package __init__ with a real handler
    has_non_null = any(not isinstance(h, logging.NullHandler) for h in root.handlers)
    if not has_non_null:
        for h in list(root.handlers):
            root.removeHandler(h)
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    return root


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: Union[str, int] = 'INFO') -> None:
    """Attach a stderr handler to the 'pathsect' logger family and set its level.

    This does NOT modify the process root logger.
    """
    root = _ensure_package_root()
    root.setLevel(_to_level(level))


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the 'pathsect' namespace.

    Without an explicit level the logger is left at NOTSET so it inherits from
    the 'pathsect' parent configured via configure_logging(). Handlers are not
    attached here; until configure_logging() is called records go to the
    package NullHandler.
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + '.'):
        name = f'{_ROOT_NAME}.{name}'
    log = logging.getLogger(name)
    log.setLevel(_to_level(level) if level is not None else logging.NOTSET)
    return log


__all__ = ['get_logger', 'configure_logging']
