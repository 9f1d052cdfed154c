#!/usr/bin/env python3
"""
bb_subset_combiner.py - Disjoint Subset Recombination
=====================================================
Combines per-subset best scores into the best plan for two agents working
on disjoint action sets.

Ledger keys are the actions still *available* when a plan stopped, so the
actions a plan took are `full_mask ^ key`. Two plans took disjoint actions
exactly when `(full_mask ^ m1) & (full_mask ^ m2) == 0`, which is the same
as their keys jointly covering the full set.
"""

from typing import Mapping, Tuple, Union

import numpy as np

from bb_ledger import SubsetBestLedger


LedgerLike = Union[SubsetBestLedger, np.ndarray, Mapping[int, int]]


def _nonzero_entries(ledger: LedgerLike) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(ledger, SubsetBestLedger):
        ledger = ledger.scores

    if isinstance(ledger, np.ndarray):
        masks = np.flatnonzero(ledger)
        return masks.astype(np.int64), ledger[masks].astype(np.int64)

    items = [(int(m), int(s)) for m, s in ledger.items() if s > 0]
    masks = np.array([m for m, _ in items], dtype=np.int64)
    scores = np.array([s for _, s in items], dtype=np.int64)
    return masks, scores


def best_disjoint_pair(ledger: LedgerLike, full_mask: int) -> int:
    """
    Best combined score of two plans whose taken actions do not overlap.

    Only positive entries take part. A single plan paired with the idle plan
    (nothing taken, score 0) counts as well.
    """
    masks, scores = _nonzero_entries(ledger)
    if len(masks) == 0:
        return 0

    best = int(scores.max())
    for mask, score in zip(masks, scores):
        compatible = (masks | mask) == full_mask
        if compatible.any():
            best = max(best, int(score + scores[compatible].max()))

    return best
