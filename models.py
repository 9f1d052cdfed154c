"""
models.py - Core Data Models for the Scheduling Optimizer
=========================================================
Defines the action catalogs payloads (valves, blueprints), the search
states walked by the branch-and-bound engine, and search statistics.
"""

from dataclasses import dataclass, field
from typing import Tuple, Sequence, Optional
from enum import IntEnum
import numpy as np


# A single Python int is used as the action bitmask.
MAX_ACTIONS = 63

Minerals = Tuple[int, int, int, int]


class Resource(IntEnum):
    """Resource kinds, in production tier order."""
    ORE = 0
    CLAY = 1
    OBSIDIAN = 2
    GEODE = 3


RESOURCE_COUNT = len(Resource)


@dataclass(frozen=True)
class Valve:
    """A named node of the tunnel graph with its release rate."""
    name: str
    rate: int
    tunnels: Tuple[str, ...] = ()


@dataclass(eq=False)
class Cave:
    """
    Valve scheduling instance.

    `valves` holds the openable valves sorted by decreasing rate, so bit `i`
    of an action mask refers to `valves[i]`. The distance matrix has one
    extra trailing row/column for the start location.
    """
    valves: Tuple[Valve, ...]
    distances: np.ndarray
    start: int

    def __post_init__(self):
        if len(self.valves) > MAX_ACTIONS:
            raise ValueError(f"At most {MAX_ACTIONS} valves are supported, got {len(self.valves)}")
        rates = [v.rate for v in self.valves]
        if any(r <= 0 for r in rates) or rates != sorted(rates, reverse=True):
            raise ValueError("Valves must have positive rates in decreasing order")
        self.distances.setflags(write=False)

    @classmethod
    def from_matrix(cls, valves: Sequence[Valve], distances, start: Optional[int] = None) -> 'Cave':
        """
        Build a cave from a caller supplied transition cost matrix.

        The matrix is indexed like `valves` with the start location last
        unless `start` says otherwise.
        """
        matrix = np.array(distances, dtype=np.int64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Distance matrix must be square, got shape {matrix.shape}")
        if not np.array_equal(matrix, matrix.T):
            raise ValueError("Distance matrix must be symmetric")
        if np.any(np.diag(matrix) != 0) or np.any(matrix < 0):
            raise ValueError("Distance matrix needs a zero diagonal and non-negative entries")
        if matrix.shape[0] != len(valves) + 1:
            raise ValueError("Distance matrix needs one row per valve plus the start location")
        n = len(valves)
        if np.any(matrix[:n, :n] + np.eye(n, dtype=np.int64) < 1):
            raise ValueError("Distinct valves must be at least one transition apart")

        start_index = len(valves) if start is None else start
        return cls(valves=tuple(valves), distances=matrix, start=start_index)

    @property
    def size(self) -> int:
        """Number of openable valves."""
        return len(self.valves)

    @property
    def full_mask(self) -> int:
        """Bitmask with every valve closed."""
        return (1 << len(self.valves)) - 1

    @property
    def rates(self) -> Tuple[int, ...]:
        return tuple(v.rate for v in self.valves)


@dataclass(frozen=True)
class Blueprint:
    """
    Robot production instance.

    `costs[kind][resource]` is the amount of `resource` needed to build a
    robot of `kind`. `limits` caps the robots worth having per resource: no
    more than the most that can be spent on a single build.
    """
    blueprint_id: int
    costs: Tuple[Minerals, Minerals, Minerals, Minerals]
    limits: Minerals = field(init=False)

    def __post_init__(self):
        if len(self.costs) != RESOURCE_COUNT or any(len(c) != RESOURCE_COUNT for c in self.costs):
            raise ValueError(f"Blueprint {self.blueprint_id} needs a 4x4 cost table")
        costs = tuple(tuple(int(x) for x in c) for c in self.costs)
        if any(x < 0 for c in costs for x in c):
            raise ValueError(f"Blueprint {self.blueprint_id} has negative costs")
        object.__setattr__(self, 'costs', costs)

        limits = [max(c[r] for c in costs) for r in range(RESOURCE_COUNT)]
        limits[Resource.GEODE] = 0  # never consulted; geode robots are uncapped
        object.__setattr__(self, 'limits', tuple(limits))

    @classmethod
    def standard(cls, blueprint_id: int, ore_robot_ore: int, clay_robot_ore: int,
                 obsidian_robot_ore: int, obsidian_robot_clay: int,
                 geode_robot_ore: int, geode_robot_obsidian: int) -> 'Blueprint':
        """Build the usual blueprint shape from its six cost figures."""
        return cls(
            blueprint_id=blueprint_id,
            costs=(
                (ore_robot_ore, 0, 0, 0),
                (clay_robot_ore, 0, 0, 0),
                (obsidian_robot_ore, obsidian_robot_clay, 0, 0),
                (geode_robot_ore, 0, geode_robot_obsidian, 0),
            ),
        )


@dataclass(frozen=True)
class ValveState:
    """Search state for valve scheduling."""
    location: int
    still_closed: int
    time_left: int
    score: int = 0

    @property
    def ledger_key(self) -> int:
        return self.still_closed


@dataclass(frozen=True)
class ProductionState:
    """Search state for robot production."""
    balance: Minerals
    robots: Minerals
    time_left: int

    @property
    def score(self) -> int:
        """Geodes guaranteed if nothing else is ever built."""
        return self.balance[Resource.GEODE] + self.robots[Resource.GEODE] * self.time_left

    @property
    def ledger_key(self) -> int:
        return 0


@dataclass
class SearchStatistics:
    """Statistics collected during a branch-and-bound run."""
    nodes_explored: int = 0
    nodes_pruned: int = 0
    nodes_generated: int = 0
    best_score: int = 0
    max_depth: int = 0
    time_elapsed: float = 0.0
    pruning_efficiency: float = 0.0

    def update_pruning_efficiency(self):
        """Update pruning efficiency metric."""
        total = self.nodes_explored
        if total > 0:
            self.pruning_efficiency = self.nodes_pruned / total

    def merge(self, other: 'SearchStatistics'):
        """Fold another run's counters into this one."""
        self.nodes_explored += other.nodes_explored
        self.nodes_pruned += other.nodes_pruned
        self.nodes_generated += other.nodes_generated
        self.best_score = max(self.best_score, other.best_score)
        self.max_depth = max(self.max_depth, other.max_depth)
        self.time_elapsed += other.time_elapsed
        self.update_pruning_efficiency()
