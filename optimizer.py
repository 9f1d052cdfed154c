#!/usr/bin/env python3
"""
optimizer.py - Problem-Level Scheduling Optimizers
==================================================
Entry points for the two scheduling problems solved by the shared
branch-and-bound engine:

* valve scheduling: open valves inside a time budget to maximise released
  pressure, alone or together with a helper working on a disjoint set;
* robot production: build robots inside a time budget to maximise geodes.

Time budgets default to the values in `Config.OPTIMIZER`. Setting
`Config.PARALLEL['enabled']` partitions each search on its first action.
"""

import logging
from typing import Optional, Sequence, Tuple, Union

from models import Cave, Blueprint, SearchStatistics
from config import Config
from bb_action_catalog import ActionCatalog, ValveCatalog, ProductionCatalog
from bb_ledger import GlobalBestLedger, SubsetBestLedger
from bb_search_tree import BranchAndBoundSearch
from bb_subset_combiner import best_disjoint_pair
from bb_parallel import parallel_search
from utils import timer

logger = logging.getLogger(__name__)


def _run(catalog: ActionCatalog, state,
         subset_mode: bool = False) -> Tuple[int, Union[GlobalBestLedger, SubsetBestLedger], SearchStatistics]:
    """Run one top-level search with a fresh ledger."""
    if Config.get('PARALLEL.enabled', False):
        return parallel_search(
            catalog, state,
            subset_mode=subset_mode,
            workers=Config.get('PARALLEL.workers'),
            use_processes=Config.get('PARALLEL.use_processes', False),
        )

    ledger = SubsetBestLedger(catalog.full_mask) if subset_mode else GlobalBestLedger()
    engine = BranchAndBoundSearch(catalog, observer=ledger)
    best = engine.search(state)
    return best, ledger, engine.statistics


@timer
def max_pressure_release(cave: Cave, time_budget: Optional[int] = None) -> int:
    """Most pressure one agent can release within the time budget."""
    if time_budget is None:
        time_budget = Config.get('OPTIMIZER.valves.solo_time_budget')

    catalog = ValveCatalog(cave)
    best, _, stats = _run(catalog, catalog.initial_state(time_budget))

    logger.info(
        f"Pressure released in {time_budget} ticks: {best} "
        f"({stats.nodes_explored} states, {stats.nodes_pruned} pruned)"
    )
    return best


@timer
def max_pressure_release_with_helper(cave: Cave, time_budget: Optional[int] = None) -> int:
    """
    Most pressure two agents can release together within the time budget.

    A single search records the best score for every set of valves left
    closed; the two best plans over disjoint valve sets are then combined.
    """
    if time_budget is None:
        time_budget = Config.get('OPTIMIZER.valves.pair_time_budget')

    catalog = ValveCatalog(cave)
    _, ledger, stats = _run(catalog, catalog.initial_state(time_budget), subset_mode=True)
    best = best_disjoint_pair(ledger, catalog.full_mask)

    logger.info(
        f"Pressure released by two agents in {time_budget} ticks: {best} "
        f"({stats.nodes_explored} states, {sum(1 for _ in ledger.nonzero_items())} subsets)"
    )
    return best


def max_geodes(blueprint: Blueprint, time_budget: Optional[int] = None) -> int:
    """Most geodes a blueprint can yield within the time budget."""
    if time_budget is None:
        time_budget = Config.get('OPTIMIZER.production.short_time_budget')

    catalog = ProductionCatalog(blueprint)
    best, _, stats = _run(catalog, catalog.initial_state(time_budget))

    logger.info(
        f"Blueprint {blueprint.blueprint_id}: {best} geodes in {time_budget} ticks "
        f"({stats.nodes_explored} states, {stats.time_elapsed:.2f}s)"
    )
    return best


@timer
def quality_level_sum(blueprints: Sequence[Blueprint], time_budget: Optional[int] = None) -> int:
    """Sum over blueprints of id times the most geodes it yields."""
    if time_budget is None:
        time_budget = Config.get('OPTIMIZER.production.short_time_budget')

    return sum(bp.blueprint_id * max_geodes(bp, time_budget) for bp in blueprints)


@timer
def geode_product(blueprints: Sequence[Blueprint], time_budget: Optional[int] = None,
                  limit: Optional[int] = None) -> int:
    """Product of the most geodes over the first `limit` blueprints."""
    if time_budget is None:
        time_budget = Config.get('OPTIMIZER.production.long_time_budget')
    if limit is None:
        limit = Config.get('OPTIMIZER.production.long_horizon_blueprints')

    product = 1
    for bp in blueprints[:limit]:
        product *= max_geodes(bp, time_budget)
    return product
