import dataclasses
import logging

import pytest

from pathsect.core.config import DEFAULT_CONFIG, IntersectionConfig
from pathsect.core.logging_utils import configure_logging, get_logger
from pathsect.core.stats import IntersectionStats, depth_bound, format_stats_table


@pytest.fixture
def restore_pathsect_logger():
    root = logging.getLogger('pathsect')
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)
    root.propagate = propagate


class TestConfig:

    def test_defaults(self):
        assert DEFAULT_CONFIG == IntersectionConfig()
        assert DEFAULT_CONFIG.parallel is False
        assert DEFAULT_CONFIG.deduplicate is True
        assert DEFAULT_CONFIG.max_branches > 0

    def test_with_overrides_returns_copy(self):
        cfg = DEFAULT_CONFIG.with_overrides(parallel=True, max_workers=2)
        assert cfg.parallel is True and cfg.max_workers == 2
        assert DEFAULT_CONFIG.parallel is False

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.max_branches = 1


class TestLogging:

    def test_get_logger_namespace(self):
        assert get_logger('engine').name == 'pathsect.engine'
        assert get_logger('pathsect.core.roots').name == 'pathsect.core.roots'
        assert get_logger('pathsect').name == 'pathsect'

    def test_get_logger_level(self):
        assert get_logger('lvl', level='debug').level == logging.DEBUG
        assert get_logger('lvl').level == logging.NOTSET

    def test_configure_logging_isolated_from_root(self, restore_pathsect_logger):
        root_handlers = list(logging.getLogger().handlers)
        configure_logging('WARNING')
        log = restore_pathsect_logger
        assert log.level == logging.WARNING
        assert log.propagate is False
        assert any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
                   for h in log.handlers)
        assert logging.getLogger().handlers == root_handlers

    def test_configure_logging_is_idempotent(self, restore_pathsect_logger):
        configure_logging('INFO')
        n = len(restore_pathsect_logger.handlers)
        configure_logging('DEBUG')
        assert len(restore_pathsect_logger.handlers) == n
        assert restore_pathsect_logger.level == logging.DEBUG


class TestStats:

    def test_merge(self):
        a = IntersectionStats(segment_pairs=1, branches=10, pruned=3, emitted=1, max_depth=4)
        b = IntersectionStats(segment_pairs=2, branches=5, pruned=1, emitted=2, max_depth=7)
        a.merge(b)
        assert a.to_dict() == {
            'segment_pairs': 3, 'branches': 15, 'pruned': 4, 'emitted': 3, 'max_depth': 7,
            'prune_rate': pytest.approx(4 / 15),
        }

    def test_depth_bound_grows_logarithmically(self):
        assert depth_bound(1.0) < depth_bound(1024.0) <= depth_bound(1.0) + 2 * 10

    def test_format_table(self):
        table = format_stats_table(IntersectionStats(branches=3).to_dict())
        assert 'branches' in table and 'prune_rate' in table
        assert format_stats_table({}) == '<no stats>'
