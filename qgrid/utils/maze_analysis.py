"""Analyze a maze: shortest path and reachable cells."""

from collections import deque
from typing import Dict, List, Optional, Set

from ..domain.types import Coord, EnvConfig, ACTIONS, ACTION_DELTAS


def _neighbors(config: EnvConfig, cell: Coord):
    for action in ACTIONS:
        dx, dy = ACTION_DELTAS[action]
        nxt = (cell[0] + dx, cell[1] + dy)
        if config.in_bounds(nxt) and nxt not in config.walls:
            yield nxt


def find_shortest_path(config: EnvConfig) -> Optional[List[Coord]]:
    """Use BFS to find a shortest path from start to goal, or None."""
    start, goal = config.start, config.goal
    queue = deque([start])
    parent: Dict[Coord, Coord] = {}
    visited = {start}

    while queue:
        current = queue.popleft()

        if current == goal:
            # Reconstruct path
            path = [current]
            while current in parent:
                current = parent[current]
                path.append(current)
            path.reverse()
            return path

        for neighbor in _neighbors(config, current):
            if neighbor not in visited:
                visited.add(neighbor)
                parent[neighbor] = current
                queue.append(neighbor)

    return None


def shortest_path_length(config: EnvConfig) -> Optional[int]:
    """Number of moves on a shortest path, or None if the goal is unreachable."""
    path = find_shortest_path(config)
    return len(path) - 1 if path is not None else None


def reachable_cells(config: EnvConfig, origin: Optional[Coord] = None) -> Set[Coord]:
    """All open cells reachable from ``origin`` (the start cell by default)."""
    origin = config.start if origin is None else origin
    queue = deque([origin])
    reachable = {origin}

    while queue:
        current = queue.popleft()
        for neighbor in _neighbors(config, current):
            if neighbor not in reachable:
                reachable.add(neighbor)
                queue.append(neighbor)

    return reachable
