#!/usr/bin/env python3
"""
bb_search_tree.py - Branch & Bound Search Engine
================================================
Depth-first branch-and-bound over the decision tree spanned by an action
catalog. The tree is never materialised: each recursive call owns its state
and recursion depth is bounded by the time budget.

The engine is shared by every problem. What gets tracked (one global
incumbent, or the best score per action subset) is decided by the observer
handed in, not by the engine.
"""

import logging
import time
from typing import Callable, Optional

from models import SearchStatistics
from bb_action_catalog import ActionCatalog
from bb_ledger import ScoreObserver, GlobalBestLedger

logger = logging.getLogger(__name__)


BoundFunction = Callable[[object], int]


class BranchAndBoundSearch:
    """
    Recursive branch-and-bound driver.

    With `prune=True` a state whose bound cannot beat the observer's
    incumbent is not expanded. `bound_fn` defaults to the catalog's own
    bound.
    """

    def __init__(self, catalog: ActionCatalog,
                 observer: Optional[ScoreObserver] = None,
                 bound_fn: Optional[BoundFunction] = None,
                 prune: bool = True):
        self.catalog = catalog
        self.observer = observer if observer is not None else GlobalBestLedger()
        self.bound_fn = (bound_fn or catalog.upper_bound) if prune else None
        self.statistics = SearchStatistics()

    def search(self, state) -> int:
        """Explore from `state` and return the best score seen below it."""
        start = time.time()
        best = self._expand(state, 0)

        self.statistics.time_elapsed += time.time() - start
        self.statistics.best_score = max(self.statistics.best_score, best)
        self.statistics.update_pruning_efficiency()

        logger.debug(
            f"Search finished: best={best}, explored={self.statistics.nodes_explored}, "
            f"pruned={self.statistics.nodes_pruned}, depth={self.statistics.max_depth}, "
            f"{self.statistics.time_elapsed:.3f}s"
        )
        return best

    def _expand(self, state, depth: int) -> int:
        stats = self.statistics
        stats.nodes_explored += 1
        if depth > stats.max_depth:
            stats.max_depth = depth

        best_known = self.observer.record(state.ledger_key, state.score)
        best_seen = state.score

        if state.time_left <= 0:
            return best_seen

        if self.bound_fn is not None and self.bound_fn(state) <= best_known:
            stats.nodes_pruned += 1
            return best_seen

        for child in self.catalog.successors(state):
            stats.nodes_generated += 1
            child_best = self._expand(child, depth + 1)
            if child_best > best_seen:
                best_seen = child_best

        return best_seen


def branch_and_bound(state, catalog: ActionCatalog,
                     bound_fn: Optional[BoundFunction] = None,
                     observer: Optional[ScoreObserver] = None) -> int:
    """Pruned search from `state`; returns the best score seen."""
    return BranchAndBoundSearch(catalog, observer=observer, bound_fn=bound_fn).search(state)


def exhaustive_search(state, catalog: ActionCatalog,
                      observer: Optional[ScoreObserver] = None) -> int:
    """Walk every branch without pruning; returns the best score seen."""
    return BranchAndBoundSearch(catalog, observer=observer, prune=False).search(state)
