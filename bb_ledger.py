#!/usr/bin/env python3
"""
bb_ledger.py - Best-Score Ledgers for Branch & Bound
====================================================
Observers injected into the search engine. Each records the score of every
visited state against its key and answers with the incumbent used for
pruning. A ledger belongs to one top-level search; partitioned searches
keep one ledger per partition and merge them afterwards.
"""

from typing import Dict, Iterator, Protocol, Tuple

import numpy as np


class ScoreObserver(Protocol):
    """Record a state's score and return the best score known for pruning."""

    def record(self, key: int, score: int) -> int:
        ...


class GlobalBestLedger:
    """Single incumbent shared by the whole search tree."""

    def __init__(self, best: int = 0):
        self.best = best

    def record(self, key: int, score: int) -> int:
        if score > self.best:
            self.best = score
        return self.best

    def merge(self, other: 'GlobalBestLedger'):
        self.best = max(self.best, other.best)

    def __repr__(self) -> str:
        return f"GlobalBestLedger(best={self.best})"


class SubsetBestLedger:
    """
    Best score per action subset, in a dense array indexed by bitmask.

    Recording never prunes: a branch that cannot beat the entry for its own
    subset may still produce a better score for a different subset, so
    `record` answers 0.
    """

    def __init__(self, full_mask: int):
        if full_mask < 0:
            raise ValueError(f"Subset mask must be non-negative, got {full_mask}")
        self.full_mask = full_mask
        self.scores = np.zeros(full_mask + 1, dtype=np.int64)

    def record(self, key: int, score: int) -> int:
        if score > self.scores[key]:
            self.scores[key] = score
        return 0

    def __getitem__(self, key: int) -> int:
        return int(self.scores[key])

    def __len__(self) -> int:
        return len(self.scores)

    def merge(self, other: 'SubsetBestLedger'):
        if other.full_mask != self.full_mask:
            raise ValueError("Cannot merge ledgers over different action sets")
        np.maximum(self.scores, other.scores, out=self.scores)

    def nonzero_items(self) -> Iterator[Tuple[int, int]]:
        """Yield (mask, score) for every subset recorded with a positive score."""
        for mask in np.flatnonzero(self.scores):
            yield int(mask), int(self.scores[mask])

    def to_dict(self) -> Dict[int, int]:
        return dict(self.nonzero_items())

    @property
    def best(self) -> int:
        return int(self.scores.max()) if len(self.scores) else 0
