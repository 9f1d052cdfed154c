#!/usr/bin/env python3
"""
bb_action_catalog.py - Action Catalogs for Branch & Bound
=========================================================
The fixed menu of actions available from a search state. A catalog builds
the initial state for a time budget, expands a state into its successors in
a fixed order, and supplies its default admissible bound.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional, Sequence

from models import (
    Cave, Blueprint, Resource, ValveState, ProductionState, Minerals, RESOURCE_COUNT
)
from bb_bounding_functions import pressure_upper_bound, geode_upper_bound


def _check_time_budget(time_budget: int):
    if isinstance(time_budget, bool) or not isinstance(time_budget, int):
        raise ValueError(f"Time budget must be an integer, got {time_budget!r}")
    if time_budget < 0:
        raise ValueError(f"Time budget must be non-negative, got {time_budget}")


class ActionCatalog(ABC):
    """Abstract base class for problem-specific action menus."""

    @property
    @abstractmethod
    def full_mask(self) -> int:
        """Bitmask of every discrete action; 0 when actions are not subset-keyed."""
        pass

    @abstractmethod
    def initial_state(self, time_budget: int):
        """Root search state for the given time budget."""
        pass

    @abstractmethod
    def successors(self, state) -> Iterator:
        """Child states, one per action schedulable before time runs out."""
        pass

    @abstractmethod
    def upper_bound(self, state) -> int:
        """Admissible estimate of the best score reachable from `state`."""
        pass


class ValveCatalog(ActionCatalog):
    """Open one of the still closed valves."""

    def __init__(self, cave: Cave):
        self.cave = cave
        self._rates = cave.rates

    @property
    def full_mask(self) -> int:
        return self.cave.full_mask

    def initial_state(self, time_budget: int) -> ValveState:
        _check_time_budget(time_budget)
        return ValveState(
            location=self.cave.start,
            still_closed=self.cave.full_mask,
            time_left=time_budget,
            score=0,
        )

    def successors(self, state: ValveState) -> Iterator[ValveState]:
        distances = self.cave.distances
        remaining = state.still_closed

        while remaining:
            low_bit = remaining & -remaining
            valve = low_bit.bit_length() - 1
            remaining ^= low_bit

            cost = int(distances[state.location, valve]) + 1
            if cost > state.time_left:
                continue

            time_left = state.time_left - cost
            yield ValveState(
                location=valve,
                still_closed=state.still_closed ^ low_bit,
                time_left=time_left,
                score=state.score + self._rates[valve] * time_left,
            )

    def upper_bound(self, state: ValveState) -> int:
        return pressure_upper_bound(state, self.cave)


class ProductionCatalog(ActionCatalog):
    """
    Build the next robot.

    Waiting for resources is folded into the action: the child state sits
    right after the build completes. Robots of a non-geode kind are never
    proposed once their count reaches the kind's cap.
    """

    BUILD_ORDER = (Resource.GEODE, Resource.OBSIDIAN, Resource.CLAY, Resource.ORE)

    def __init__(self, blueprint: Blueprint, robot_limits: Optional[Sequence[int]] = None):
        self.blueprint = blueprint
        if robot_limits is None:
            robot_limits = blueprint.limits
        if len(robot_limits) != RESOURCE_COUNT:
            raise ValueError(f"Expected {RESOURCE_COUNT} robot limits, got {len(robot_limits)}")
        self.robot_limits: Minerals = tuple(robot_limits)

    @property
    def full_mask(self) -> int:
        return 0

    def initial_state(self, time_budget: int) -> ProductionState:
        _check_time_budget(time_budget)
        return ProductionState(balance=(0, 0, 0, 0), robots=(1, 0, 0, 0), time_left=time_budget)

    def _ticks_until_affordable(self, state: ProductionState, cost: Minerals) -> Optional[int]:
        wait = 0
        for resource in range(RESOURCE_COUNT):
            shortfall = cost[resource] - state.balance[resource]
            if shortfall <= 0:
                continue
            producers = state.robots[resource]
            if producers == 0:
                return None
            wait = max(wait, -(-shortfall // producers))
        return wait

    def successors(self, state: ProductionState) -> Iterator[ProductionState]:
        for kind in self.BUILD_ORDER:
            if kind != Resource.GEODE and state.robots[kind] >= self.robot_limits[kind]:
                continue

            cost = self.blueprint.costs[kind]
            wait = self._ticks_until_affordable(state, cost)
            if wait is None:
                continue

            # The new robot must get at least one tick of work.
            elapsed = wait + 1
            if elapsed >= state.time_left:
                continue

            balance = tuple(
                state.balance[r] + state.robots[r] * elapsed - cost[r] for r in range(RESOURCE_COUNT)
            )
            robots = tuple(n + 1 if r == kind else n for r, n in enumerate(state.robots))
            yield ProductionState(balance=balance, robots=robots, time_left=state.time_left - elapsed)

    def upper_bound(self, state: ProductionState) -> int:
        return geode_upper_bound(state, self.blueprint)
