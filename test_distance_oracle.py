"""
Tests for BFS distances, the distance oracle and cave construction.
"""

import itertools

import numpy as np
import pytest

from distance_oracle import (
    bfs_distance, bfs_distances, DistanceOracle, UnreachableNodeError, build_cave
)
from models import Valve, Cave


class TestBfsDistance:

    def test_symmetric_on_connected_graph(self, sample_graph):
        for a, b in itertools.product(sample_graph, repeat=2):
            assert bfs_distance(sample_graph, a, b) == bfs_distance(sample_graph, b, a)

    def test_distance_to_self_is_zero(self, sample_graph):
        for node in sample_graph:
            assert bfs_distance(sample_graph, node, node) == 0

    def test_known_distances(self, sample_graph):
        assert bfs_distance(sample_graph, "AA", "DD") == 1
        assert bfs_distance(sample_graph, "AA", "JJ") == 2
        assert bfs_distance(sample_graph, "AA", "HH") == 5
        assert bfs_distance(sample_graph, "HH", "JJ") == 7

    def test_all_distances_from_start(self, sample_graph):
        distances = bfs_distances(sample_graph, "AA")
        assert set(distances) == set(sample_graph)
        assert distances["EE"] == 2

    def test_unreachable_node_raises(self):
        graph = {"A": ["B"], "B": ["A"], "C": []}
        with pytest.raises(UnreachableNodeError):
            bfs_distance(graph, "A", "C")

    def test_unknown_start_raises(self, sample_graph):
        with pytest.raises(KeyError):
            bfs_distances(sample_graph, "ZZ")


class TestDistanceOracle:

    def test_matrix_is_symmetric_with_zero_diagonal(self, sample_graph):
        oracle = DistanceOracle(sample_graph, ["AA", "BB", "DD", "HH", "JJ"])
        assert np.array_equal(oracle.matrix, oracle.matrix.T)
        assert np.all(np.diag(oracle.matrix) == 0)
        assert oracle.size == 5
        assert oracle.distance(oracle.index("HH"), oracle.index("JJ")) == 7

    def test_matrix_is_read_only(self, sample_graph):
        oracle = DistanceOracle(sample_graph, ["AA", "BB"])
        with pytest.raises(ValueError):
            oracle.matrix[0, 1] = 5

    def test_disconnected_nodes_raise(self):
        graph = {"A": ["B"], "B": ["A"], "C": ["D"], "D": ["C"]}
        with pytest.raises(UnreachableNodeError):
            DistanceOracle(graph, ["A", "C"])


class TestBuildCave:

    def test_keeps_positive_rates_sorted(self, sample_cave):
        assert [v.name for v in sample_cave.valves] == ["HH", "JJ", "DD", "BB", "EE", "CC"]
        assert sample_cave.start == 6
        assert sample_cave.full_mask == 0b111111
        assert sample_cave.distances.shape == (7, 7)

    def test_start_row_distances(self, sample_cave):
        start_row = sample_cave.distances[sample_cave.start]
        assert list(start_row) == [5, 2, 1, 1, 2, 2, 0]

    def test_start_with_positive_rate_is_also_a_valve(self):
        cave = build_cave([Valve("AA", 5, ("BB",)), Valve("BB", 3, ("AA",))])
        assert [v.name for v in cave.valves] == ["AA", "BB"]
        assert cave.distances[cave.start, 0] == 0
        assert cave.distances[cave.start, 1] == 1

    def test_unknown_start_raises(self, sample_valves):
        with pytest.raises(ValueError):
            build_cave(sample_valves, start="ZZ")


class TestCaveFromMatrix:

    def test_accepts_direct_costs(self):
        valves = [Valve("A", 5), Valve("B", 3)]
        cave = Cave.from_matrix(valves, [[0, 1, 0], [1, 0, 2], [0, 2, 0]])
        assert cave.start == 2
        assert cave.rates == (5, 3)

    @pytest.mark.parametrize("matrix", [
        [[0, 1], [1, 0]],                          # missing start row
        [[0, 1, 1], [2, 0, 1], [1, 1, 0]],         # asymmetric
        [[1, 1, 1], [1, 0, 1], [1, 1, 0]],         # non-zero diagonal
        [[0, 0, 1], [0, 0, 1], [1, 1, 0]],         # two valves on one spot
    ])
    def test_rejects_malformed_matrices(self, matrix):
        with pytest.raises(ValueError):
            Cave.from_matrix([Valve("A", 5), Valve("B", 3)], matrix)
