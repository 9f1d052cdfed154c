#!/usr/bin/env python3
"""
bb_parallel.py - Partitioned Branch & Bound
===========================================
Splits the search on the first-level action choice. Every subtree is
searched with its own ledger against the shared read-only catalog, and the
ledgers are merged once all partitions finish.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, ProcessPoolExecutor, as_completed
from typing import List, Optional, Tuple, Union

from models import SearchStatistics
from bb_action_catalog import ActionCatalog
from bb_ledger import GlobalBestLedger, SubsetBestLedger
from bb_search_tree import BranchAndBoundSearch

logger = logging.getLogger(__name__)


Ledger = Union[GlobalBestLedger, SubsetBestLedger]


def _new_ledger(catalog: ActionCatalog, subset_mode: bool) -> Ledger:
    return SubsetBestLedger(catalog.full_mask) if subset_mode else GlobalBestLedger()


def _search_partition(catalog: ActionCatalog, state, subset_mode: bool,
                      incumbent: int) -> Tuple[int, Ledger, SearchStatistics]:
    """Worker entry point; module level so process pools can pickle it."""
    ledger = _new_ledger(catalog, subset_mode)
    if not subset_mode:
        ledger.best = incumbent
    engine = BranchAndBoundSearch(catalog, observer=ledger)
    best = engine.search(state)
    return best, ledger, engine.statistics


def parallel_search(catalog: ActionCatalog, state, subset_mode: bool = False,
                    workers: Optional[int] = None,
                    use_processes: bool = False) -> Tuple[int, Ledger, SearchStatistics]:
    """
    Search from `state` with one partition per first-level successor.

    Returns the best score seen, the merged ledger and the merged
    statistics. Results match a sequential search over the same catalog.
    """
    start = time.time()
    ledger = _new_ledger(catalog, subset_mode)
    ledger.record(state.ledger_key, state.score)

    statistics = SearchStatistics(nodes_explored=1, best_score=state.score)
    best = state.score

    children: List = []
    if state.time_left > 0:
        if subset_mode or catalog.upper_bound(state) > state.score:
            children = list(catalog.successors(state))
        else:
            statistics.nodes_pruned += 1

    if not children:
        statistics.time_elapsed = time.time() - start
        return best, ledger, statistics

    statistics.nodes_generated += len(children)
    workers = workers or min(len(children), os.cpu_count() or 1)
    executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
    logger.info(
        f"Partitioned search: {len(children)} partitions on {workers} "
        f"{'process' if use_processes else 'thread'} workers"
    )

    incumbent = 0 if subset_mode else ledger.best
    with executor_cls(max_workers=workers) as executor:
        futures = [
            executor.submit(_search_partition, catalog, child, subset_mode, incumbent)
            for child in children
        ]
        for future in as_completed(futures):
            partition_best, partition_ledger, partition_stats = future.result()
            best = max(best, partition_best)
            ledger.merge(partition_ledger)
            statistics.merge(partition_stats)

    statistics.max_depth += 1
    statistics.best_score = best
    statistics.time_elapsed = time.time() - start
    logger.debug(f"Partitioned search finished: best={best}, explored={statistics.nodes_explored}")
    return best, ledger, statistics
