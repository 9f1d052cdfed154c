"""
End-to-end tests for the problem-level optimizers on known instances.
"""

import pytest

from config import Config
from distance_oracle import build_cave
from models import Valve, Blueprint
from optimizer import (
    max_pressure_release, max_pressure_release_with_helper,
    max_geodes, quality_level_sum, geode_product
)


class TestPressureRelease:

    def test_solo_sample(self, sample_cave):
        assert max_pressure_release(sample_cave, 30) == 1651

    def test_pair_sample(self, sample_cave):
        assert max_pressure_release_with_helper(sample_cave, 26) == 1707

    def test_default_budgets_come_from_config(self, sample_cave):
        assert max_pressure_release(sample_cave) == 1651
        assert max_pressure_release_with_helper(sample_cave) == 1707

    def test_config_budget_override(self, sample_cave):
        Config.set('OPTIMIZER.valves.solo_time_budget', 5)
        assert max_pressure_release(sample_cave) == max_pressure_release(sample_cave, 5)

    def test_two_agents_split_a_fork(self):
        cave = build_cave([
            Valve("AA", 0, ("A", "B")),
            Valve("A", 10, ("AA",)),
            Valve("B", 10, ("AA",)),
        ])
        assert max_pressure_release(cave, 3) == 10
        assert max_pressure_release_with_helper(cave, 3) == 20

    def test_openable_start(self):
        cave = build_cave([Valve("AA", 5, ("B",)), Valve("B", 3, ("AA",))])
        assert max_pressure_release(cave, 3) == 10

    def test_helper_never_hurts(self, sample_cave):
        for budget in (4, 8, 12):
            assert max_pressure_release_with_helper(sample_cave, budget) >= max_pressure_release(sample_cave, budget)

    def test_no_openable_valves(self):
        cave = build_cave([Valve("AA", 0, ("B",)), Valve("B", 0, ("AA",))])
        assert max_pressure_release(cave, 30) == 0
        assert max_pressure_release_with_helper(cave, 26) == 0


class TestGeodes:

    def test_short_horizon_sample(self, sample_blueprints):
        assert max_geodes(sample_blueprints[0], 24) == 9
        assert max_geodes(sample_blueprints[1], 24) == 12

    def test_quality_level_sum(self, sample_blueprints):
        assert quality_level_sum(sample_blueprints) == 33

    def test_long_horizon_sample(self, sample_blueprints):
        assert max_geodes(sample_blueprints[0], 32) == 56

    def test_geode_product_respects_limit(self, sample_blueprints):
        assert geode_product(sample_blueprints, 24, limit=1) == 9
        assert geode_product(sample_blueprints, 24, limit=2) == 108

    def test_unaffordable_geode_robot(self):
        blueprint = Blueprint.standard(1, 2, 2, 2, 100, 2, 100)
        assert max_geodes(blueprint, 24) == 0

    def test_malformed_blueprint_rejected(self):
        with pytest.raises(ValueError):
            Blueprint(blueprint_id=1, costs=((1, 0, 0, 0), (1, 0, 0, 0), (1, 1, 0, 0)))
        with pytest.raises(ValueError):
            Blueprint.standard(1, -1, 2, 3, 4, 5, 6)

    def test_blueprint_limits(self, sample_blueprints):
        assert sample_blueprints[0].limits[:3] == (4, 14, 7)
