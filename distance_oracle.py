"""
distance_oracle.py - Shortest Transition Counts Between Relevant Nodes
======================================================================
Breadth-first distances over an unweighted tunnel graph, cached once per
instance in a dense symmetric matrix indexed by node position.
"""

import logging
from collections import deque
from typing import Dict, List, Mapping, Sequence

import numpy as np

from models import Valve, Cave

logger = logging.getLogger(__name__)


Graph = Mapping[str, Sequence[str]]


class UnreachableNodeError(ValueError):
    """Raised when the graph does not connect two nodes."""
    pass


def bfs_distances(graph: Graph, start: str) -> Dict[str, int]:
    """Return the transition count from `start` to every node it reaches."""
    if start not in graph:
        raise KeyError(f"Unknown node: {start}")

    distances = {start: 0}
    queue = deque([start])

    while queue:
        node = queue.popleft()
        for neighbour in graph.get(node, ()):
            if neighbour not in distances:
                distances[neighbour] = distances[node] + 1
                queue.append(neighbour)

    return distances


def bfs_distance(graph: Graph, start: str, end: str) -> int:
    """Minimum number of transitions from `start` to `end`."""
    distances = bfs_distances(graph, start)
    if end not in distances:
        raise UnreachableNodeError(f"No path from {start} to {end}")
    return distances[end]


class DistanceOracle:
    """
    All-pairs distance table for the relevant nodes of a graph.

    The full graph is only walked while building the table; afterwards the
    oracle holds nothing but the node order and the read-only matrix.
    """

    def __init__(self, graph: Graph, nodes: Sequence[str]):
        self.nodes: List[str] = list(nodes)
        self._index = {name: i for i, name in enumerate(self.nodes)}

        size = len(self.nodes)
        matrix = np.full((size, size), -1, dtype=np.int64)

        for i, source in enumerate(self.nodes):
            reached = bfs_distances(graph, source)
            for j in range(i, size):
                target = self.nodes[j]
                if target not in reached:
                    raise UnreachableNodeError(f"No path from {source} to {target}")
                matrix[i, j] = reached[target]
                matrix[j, i] = reached[target]

        matrix.setflags(write=False)
        self._matrix = matrix
        logger.debug(f"Distance oracle built for {size} nodes")

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def size(self) -> int:
        return len(self.nodes)

    def index(self, name: str) -> int:
        return self._index[name]

    def distance(self, a: int, b: int) -> int:
        return int(self._matrix[a, b])


def build_cave(valves: Sequence[Valve], start: str = "AA") -> Cave:
    """
    Reduce a full valve graph to its openable valves plus the start.

    Zero-rate valves only serve as BFS substrate. Openable valves are
    ordered by decreasing rate (ties by name); the start location takes the
    last matrix slot.
    """
    graph = {v.name: tuple(v.tunnels) for v in valves}
    if start not in graph:
        raise ValueError(f"Start valve {start} is not part of the graph")

    openable = sorted((v for v in valves if v.rate > 0), key=lambda v: (-v.rate, v.name))
    oracle = DistanceOracle(graph, [v.name for v in openable] + [start])

    # Copy so the cave owns a private array.
    cave = Cave(valves=tuple(openable), distances=np.array(oracle.matrix), start=len(openable))
    logger.info(f"Cave built: {cave.size} openable valves out of {len(valves)}")
    return cave
