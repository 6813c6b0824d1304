"""Grid factory for building validated environments and the default maze."""

from typing import Optional, Iterable, FrozenSet
from ..domain.types import (
    Coord, EnvConfig, ConfigurationError, MIN_GRID_SIZE, MAX_GRID_SIZE
)
from ..domain.environment import GridEnvironment

# Obstacles of the default maze, used when the grid is at least 5x5
DEFAULT_WALLS: FrozenSet[Coord] = frozenset({(2, 1), (2, 2), (2, 3), (1, 3)})


def validate_grid_size(width: int, height: int) -> None:
    """
    Check grid dimensions against the configured bounds.

    Raises:
        ConfigurationError: If either dimension is outside 2..10
    """
    if not (MIN_GRID_SIZE <= width <= MAX_GRID_SIZE and MIN_GRID_SIZE <= height <= MAX_GRID_SIZE):
        raise ConfigurationError(
            f"Invalid size {width}x{height}. "
            f"Use {MIN_GRID_SIZE}..{MAX_GRID_SIZE}x{MIN_GRID_SIZE}..{MAX_GRID_SIZE}"
        )


def default_walls(width: int, height: int) -> FrozenSet[Coord]:
    """Walls of the built-in example maze (none on grids smaller than 5x5)."""
    if width >= 5 and height >= 5:
        return DEFAULT_WALLS
    return frozenset()


def create_default_config(width: int = 5, height: int = 5,
                          step_reward: float = -1.0,
                          goal_reward: float = 10.0) -> EnvConfig:
    """
    Create the default maze: start top-left, goal bottom-right.

    Args:
        width: Grid width (2..10)
        height: Grid height (2..10)
        step_reward: Reward for every non-goal step
        goal_reward: Reward for reaching the goal

    Returns:
        Validated EnvConfig
    """
    validate_grid_size(width, height)
    return EnvConfig(
        width=width,
        height=height,
        start=(0, 0),
        goal=(width - 1, height - 1),
        walls=default_walls(width, height),
        step_reward=step_reward,
        goal_reward=goal_reward
    )


def create_config(width: int, height: int, start: Coord, goal: Coord,
                  walls: Iterable[Coord] = (),
                  step_reward: float = -1.0,
                  goal_reward: float = 10.0,
                  step_limit: Optional[int] = None) -> EnvConfig:
    """Create a custom maze configuration with size validation."""
    validate_grid_size(width, height)
    return EnvConfig(
        width=width,
        height=height,
        start=start,
        goal=goal,
        walls=tuple(walls),
        step_reward=step_reward,
        goal_reward=goal_reward,
        step_limit=step_limit
    )


def create_environment(config: Optional[EnvConfig] = None) -> GridEnvironment:
    """Wrap a configuration (default maze if omitted) in an environment."""
    return GridEnvironment(config or create_default_config())
