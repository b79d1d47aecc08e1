"""Counters describing the work done by an intersection query.

An ``IntersectionStats`` can be passed to the engine entry points; they add
to it in place. Useful for checking the depth bound of the bisection and for
comparing the cost of queries.
"""
from __future__ import annotations

import math
import threading
from dataclasses import dataclass, field
from typing import Any, Dict

from .constants import EPSILON


@dataclass
class IntersectionStats:
    segment_pairs: int = 0      # monotonic window pairs fed to the refinement
    branches: int = 0           # box pairs examined (work-list pops)
    pruned: int = 0             # disjoint boxes or empty half restrictions
    emitted: int = 0            # pairs emitted before de-duplication
    max_depth: int = 0          # deepest bisection level reached
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def merge(self, other: 'IntersectionStats') -> None:
        with self._lock:
            self.segment_pairs += other.segment_pairs
            self.branches += other.branches
            self.pruned += other.pruned
            self.emitted += other.emitted
            self.max_depth = max(self.max_depth, other.max_depth)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'segment_pairs': self.segment_pairs,
            'branches': self.branches,
            'pruned': self.pruned,
            'emitted': self.emitted,
            'max_depth': self.max_depth,
            'prune_rate': (self.pruned / self.branches) if self.branches else 0.0,
        }


def depth_bound(box_size: float) -> int:
    """Bisection levels needed to bring a box of side ``box_size`` below tolerance.

    Each level halves the longer side, so both sides need halving:
    ``2 * ceil(log2(size / eps)) + 2`` levels suffice.
    """
    if box_size <= EPSILON:
        return 2
    return 2 * math.ceil(math.log2(box_size / EPSILON)) + 2


def format_stats_table(stats_dict) -> str:
    """Return a human readable two-column table of the stats."""
    if not stats_dict:
        return "<no stats>"
    rows = [(k, f"{v:.3f}" if isinstance(v, float) else str(v)) for k, v in stats_dict.items()]
    kw = max(len(k) for k, _ in rows)
    vw = max(len(v) for _, v in rows)
    lines = [f"{'stat'.ljust(kw)} {'value'.rjust(vw)}", "-" * (kw + vw + 1)]
    lines += [f"{k.ljust(kw)} {v.rjust(vw)}" for k, v in rows]
    return "\n".join(lines)


__all__ = ['IntersectionStats', 'depth_bound', 'format_stats_table']
