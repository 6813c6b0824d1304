"""ASCII rendering of the grid world."""

from typing import Optional

from ..domain.types import Coord, EnvConfig, UP, RIGHT, DOWN, LEFT
from ..domain.environment import GridEnvironment
from ..domain.value_table import ValueTable

# Cell markers
EMPTY = "."
WALL = "#"
GOAL = "G"
START = "S"
AGENT = "A"

POLICY_ARROWS = {
    UP: "^",
    RIGHT: ">",
    DOWN: "v",
    LEFT: "<"
}


def cell_marker(config: EnvConfig, coord: Coord, agent: Optional[Coord] = None) -> str:
    """Marker for a single cell; the agent hides start and goal markers."""
    if agent is not None and coord == agent:
        return AGENT
    if coord == config.start:
        return START
    if coord == config.goal:
        return GOAL
    if coord in config.walls:
        return WALL
    return EMPTY


def render_grid(config: EnvConfig, agent: Optional[Coord] = None) -> str:
    """Render the grid as rows of space-separated markers."""
    rows = []
    for y in range(config.height):
        rows.append(" ".join(cell_marker(config, (x, y), agent) for x in range(config.width)))
    return "\n".join(rows)


def render_policy(env: GridEnvironment, table: ValueTable) -> str:
    """Render the greedy action of every open cell as an arrow."""
    table.ensure_matches(env.width, env.height)
    config = env.config
    rows = []
    for y in range(env.height):
        cells = []
        for x in range(env.width):
            coord = (x, y)
            if coord in config.walls:
                cells.append(WALL)
            elif coord == config.goal:
                cells.append(GOAL)
            else:
                cells.append(POLICY_ARROWS[table.best_action(env.state_id(coord))])
        rows.append(" ".join(cells))
    return "\n".join(rows)
