#!/usr/bin/env python3
"""
bb_bounding_functions.py - Admissible Upper Bounds for Branch & Bound
=====================================================================
Relaxations that never underestimate the best score reachable from a
search state. Both are evaluated at every visited state, so neither
recurses.
"""

from models import Cave, Blueprint, Resource, ValveState, ProductionState


def pressure_upper_bound(state: ValveState, cave: Cave) -> int:
    """
    Open the closed valves in decreasing rate order as fast as possible.

    The first valve costs the shortest walk to any closed valve plus one
    tick to open it; every later valve costs two ticks, the least any real
    move plus opening can take.
    """
    still_closed = state.still_closed
    if not still_closed or state.time_left <= 0:
        return state.score

    rates = cave.rates
    closed = [i for i in range(len(rates)) if still_closed >> i & 1]
    first_step = min(int(cave.distances[state.location, i]) for i in closed) + 1

    time_left = state.time_left - first_step
    score = state.score
    for i in closed:  # valves are stored by decreasing rate
        if time_left <= 0:
            break
        score += rates[i] * time_left
        time_left -= 2

    return score


def geode_upper_bound(state: ProductionState, blueprint: Blueprint) -> int:
    """
    Geodes reachable when ore is free and a clay robot arrives every tick.

    Obsidian and geode robots are built whenever clay or obsidian covers
    them, both in the same tick if possible.
    """
    clay, obsidian, geodes = (state.balance[Resource.CLAY],
                              state.balance[Resource.OBSIDIAN],
                              state.balance[Resource.GEODE])
    clay_robots, obsidian_robots, geode_robots = (state.robots[Resource.CLAY],
                                                  state.robots[Resource.OBSIDIAN],
                                                  state.robots[Resource.GEODE])

    obsidian_cost = blueprint.costs[Resource.OBSIDIAN][Resource.CLAY]
    geode_cost = blueprint.costs[Resource.GEODE][Resource.OBSIDIAN]

    for _ in range(state.time_left):
        new_obsidian_robot = 0
        new_geode_robot = 0

        if obsidian_cost <= clay:
            clay -= obsidian_cost
            new_obsidian_robot = 1

        if geode_cost <= obsidian:
            obsidian -= geode_cost
            new_geode_robot = 1

        clay += clay_robots
        obsidian += obsidian_robots
        geodes += geode_robots

        clay_robots += 1
        obsidian_robots += new_obsidian_robot
        geode_robots += new_geode_robot

    return geodes
