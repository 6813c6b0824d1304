"""Core type definitions for the Q-learning grid world."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Dict, FrozenSet, List

# Coordinate type for grid positions
Coord = Tuple[int, int]

# Action ids. The order is part of the value-table file format.
UP = 0
RIGHT = 1
DOWN = 2
LEFT = 3
NUM_ACTIONS = 4
ACTIONS = (UP, RIGHT, DOWN, LEFT)

ACTION_NAMES: Dict[int, str] = {
    UP: "up",
    RIGHT: "right",
    DOWN: "down",
    LEFT: "left"
}

ACTION_DELTAS: Dict[int, Coord] = {
    UP: (0, -1),
    RIGHT: (1, 0),
    DOWN: (0, 1),
    LEFT: (-1, 0)
}

# Grid size bounds accepted from configuration
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 10


class QGridError(Exception):
    """Base class for qgrid errors."""


class ConfigurationError(QGridError, ValueError):
    """Invalid grid size, maze layout or other configuration."""


class ValueTableLoadError(QGridError):
    """A persisted value table could not be read."""


class DimensionMismatchError(QGridError):
    """Value table dimensions differ from the active environment."""

    def __init__(self, table_size: Coord, env_size: Coord):
        self.table_size = table_size
        self.env_size = env_size
        super().__init__(
            f"Loaded table size {table_size[0]}x{table_size[1]} "
            f"doesn't match env {env_size[0]}x{env_size[1]}"
        )


def as_coord(value, name: str = "coordinate") -> Coord:
    """Convert a 2-sequence of ints into a Coord or raise ConfigurationError."""
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise ConfigurationError(f"{name.capitalize()} must be a pair of integers, got {value!r}")
    return (value[0], value[1])


@dataclass(frozen=True)
class EnvConfig:
    """Static configuration of a grid environment."""
    width: int
    height: int
    start: Coord = (0, 0)
    goal: Optional[Coord] = None  # defaults to the bottom-right cell
    walls: FrozenSet[Coord] = frozenset()
    step_reward: float = -1.0
    goal_reward: float = 10.0
    step_limit: Optional[int] = None  # defaults to width * height * 4

    def __post_init__(self):
        for name, value in (("width", self.width), ("height", self.height)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(f"Grid {name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {self.width}x{self.height}"
            )
        # frozen dataclass: defaults are filled in through object.__setattr__
        object.__setattr__(self, "start", as_coord(self.start, "start"))
        if self.goal is None:
            object.__setattr__(self, "goal", (self.width - 1, self.height - 1))
        else:
            object.__setattr__(self, "goal", as_coord(self.goal, "goal"))
        if not isinstance(self.walls, (set, frozenset, list, tuple)):
            raise ConfigurationError(f"Walls must be a collection of coordinates, got {self.walls!r}")
        object.__setattr__(self, "walls", frozenset(as_coord(w, "wall") for w in self.walls))
        if self.step_limit is None:
            object.__setattr__(self, "step_limit", self.width * self.height * 4)

        for wall in self.walls:
            if not self.in_bounds(wall):
                raise ConfigurationError(f"Wall {wall} is outside the {self.width}x{self.height} grid")
        for name, coord in (("start", self.start), ("goal", self.goal)):
            if not self.in_bounds(coord):
                raise ConfigurationError(f"{name.capitalize()} {coord} is outside the {self.width}x{self.height} grid")
            if coord in self.walls:
                raise ConfigurationError(f"{name.capitalize()} {coord} is a wall cell")
        if self.step_limit <= 0:
            raise ConfigurationError(f"Step limit must be positive, got {self.step_limit}")

    def in_bounds(self, coord: Coord) -> bool:
        """Check if coordinate is within grid bounds."""
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def size(self) -> Coord:
        return (self.width, self.height)


@dataclass
class TrainingConfig:
    """Hyperparameters for Q-learning training."""
    learning_rate: float = 0.1  # alpha
    discount_factor: float = 0.99  # gamma
    epsilon_start: float = 1.0
    epsilon_min: float = 0.05
    epsilon_decay: float = 0.0025  # tuned for ~10k episodes
    report_interval: int = 100


@dataclass
class Episode:
    """Represents a single training episode."""
    number: int
    steps: int
    total_reward: float
    reached_goal: bool
    epsilon_used: float


@dataclass
class WindowStats:
    """Aggregate statistics over one reporting window of training."""
    episode: int
    episodes: int
    mean_steps: float
    mean_return: float
    epsilon: float


@dataclass
class TrainingResult:
    """Result of a training run."""
    episodes: List[Episode]
    total_episodes: int
    successful_episodes: int
    average_reward: float
    final_epsilon: float
    reports: List[WindowStats] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        return self.successful_episodes / self.total_episodes if self.total_episodes > 0 else 0.0


@dataclass
class PathfindingResult:
    """Result of one greedy (evaluation) episode."""
    path: List[Coord] = field(default_factory=list)
    actions: List[int] = field(default_factory=list)
    total_reward: float = 0.0
    steps_taken: int = 0
    found: bool = False

    @property
    def success(self) -> bool:
        """Whether the goal was reached."""
        return self.found and len(self.path) > 0
