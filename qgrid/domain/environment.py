"""Deterministic grid world environment."""

from typing import Tuple
from .types import Coord, EnvConfig, ACTION_DELTAS


class GridEnvironment:
    """Grid world with static walls, a start cell and a goal cell.

    The environment holds no episode state: ``step`` is a pure function of
    its inputs and the static configuration, so callers keep track of the
    agent position themselves.
    """

    def __init__(self, config: EnvConfig):
        self.config = config

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def start(self) -> Coord:
        return self.config.start

    @property
    def goal(self) -> Coord:
        return self.config.goal

    @property
    def step_limit(self) -> int:
        return self.config.step_limit

    @property
    def num_states(self) -> int:
        return self.width * self.height

    def is_valid(self, pos: Coord) -> bool:
        """Check that a position is inside the grid and not a wall."""
        return self.config.in_bounds(pos) and pos not in self.config.walls

    def state_id(self, pos: Coord) -> int:
        """Encode a position as ``y * width + x``."""
        x, y = pos
        return y * self.width + x

    def position(self, state: int) -> Coord:
        """Decode a state id back into an ``(x, y)`` position."""
        if not 0 <= state < self.num_states:
            raise ValueError(f"State id {state} outside [0, {self.num_states})")
        return (state % self.width, state // self.width)

    def step(self, pos: Coord, action: int) -> Tuple[Coord, float, bool]:
        """
        Apply an action to a position and return (next_position, reward, done).

        Moving off the grid or into a wall leaves the agent where it was and
        costs the ordinary step reward.

        Args:
            pos: Current position
            action: Action to take (0=up, 1=right, 2=down, 3=left)

        Returns:
            Tuple of (next_position, reward, episode_done)
        """
        delta = ACTION_DELTAS.get(action)
        if delta is None:
            raise ValueError(f"Unknown action {action}")

        next_pos = (pos[0] + delta[0], pos[1] + delta[1])
        if not self.is_valid(next_pos):
            next_pos = pos

        done = next_pos == self.goal
        reward = self.config.goal_reward if done else self.config.step_reward
        return next_pos, reward, done
