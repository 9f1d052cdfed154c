"""
Shared fixtures: sample instances and brute-force reference solvers that
share no code with the search engine.
"""

import copy
from functools import lru_cache

import pytest

from config import Config
from distance_oracle import build_cave
from models import Valve, Blueprint, Resource


SAMPLE_VALVES = [
    Valve("AA", 0, ("DD", "II", "BB")),
    Valve("BB", 13, ("CC", "AA")),
    Valve("CC", 2, ("DD", "BB")),
    Valve("DD", 20, ("CC", "AA", "EE")),
    Valve("EE", 3, ("FF", "DD")),
    Valve("FF", 0, ("EE", "GG")),
    Valve("GG", 0, ("FF", "HH")),
    Valve("HH", 22, ("GG",)),
    Valve("II", 0, ("AA", "JJ")),
    Valve("JJ", 21, ("II",)),
]


@pytest.fixture
def sample_valves():
    return list(SAMPLE_VALVES)


@pytest.fixture
def sample_graph():
    return {v.name: v.tunnels for v in SAMPLE_VALVES}


@pytest.fixture
def sample_cave():
    return build_cave(SAMPLE_VALVES)


@pytest.fixture
def sample_blueprints():
    return [
        Blueprint.standard(1, 4, 2, 3, 14, 2, 7),
        Blueprint.standard(2, 2, 3, 3, 8, 3, 12),
    ]


@pytest.fixture(autouse=True)
def restore_config():
    """Tests may tweak the class-level configuration; put it back afterwards."""
    saved = {name: copy.deepcopy(getattr(Config, name)) for name in ('OPTIMIZER', 'PARALLEL', 'LOGGING')}
    yield
    for name, value in saved.items():
        setattr(Config, name, value)


@pytest.fixture
def brute_force_pressure():
    """Best additional pressure from a valve state, trying every opening order."""
    def solve(cave, location, still_closed, time_left):
        best = 0
        for valve in range(cave.size):
            if not still_closed >> valve & 1:
                continue
            cost = int(cave.distances[location][valve]) + 1
            if cost > time_left:
                continue
            remaining = time_left - cost
            gained = cave.valves[valve].rate * remaining
            best = max(best, gained + solve(cave, valve, still_closed & ~(1 << valve), remaining))
        return best

    def run(cave, state):
        return state.score + solve(cave, state.location, state.still_closed, state.time_left)

    return run


@pytest.fixture
def brute_force_geodes():
    """Final geode count from a production state, simulated tick by tick."""
    solvers = {}

    def make_solver(blueprint):
        @lru_cache(maxsize=None)
        def solve(balance, robots, time_left):
            if time_left == 0:
                return balance[Resource.GEODE]

            produced = tuple(b + r for b, r in zip(balance, robots))
            best = solve(produced, robots, time_left - 1)

            for kind, cost in enumerate(blueprint.costs):
                if all(b >= c for b, c in zip(balance, cost)):
                    after = tuple(p - c for p, c in zip(produced, cost))
                    grown = tuple(n + 1 if i == kind else n for i, n in enumerate(robots))
                    best = max(best, solve(after, grown, time_left - 1))
            return best

        return solve

    def run(blueprint, state):
        if blueprint not in solvers:
            solvers[blueprint] = make_solver(blueprint)
        return solvers[blueprint](state.balance, state.robots, state.time_left)

    return run
