"""Epsilon-greedy exploration with an exponential decay schedule."""

import math
from dataclasses import dataclass

from .types import NUM_ACTIONS, TrainingConfig
from .value_table import ValueTable
from ..utils.rng import SeededRNG


def epsilon_for_episode(episode: int, start: float, minimum: float, decay: float) -> float:
    """Exploration rate for a 1-based episode index, never below ``minimum``."""
    return max(minimum, start * math.exp(-decay * episode))


@dataclass
class EpsilonSchedule:
    """Exponential epsilon decay, recomputed once per episode."""
    start: float = 1.0
    minimum: float = 0.05
    decay: float = 0.0025

    @classmethod
    def from_config(cls, config: TrainingConfig) -> "EpsilonSchedule":
        return cls(config.epsilon_start, config.epsilon_min, config.epsilon_decay)

    def __call__(self, episode: int) -> float:
        return epsilon_for_episode(episode, self.start, self.minimum, self.decay)


class ExplorationPolicy:
    """Chooses between a uniform random action and the greedy action."""

    def __init__(self, table: ValueTable, rng: SeededRNG):
        self.table = table
        self.rng = rng

    def decide(self, state: int, epsilon: float) -> int:
        """Select an action using epsilon-greedy policy."""
        if self.rng.random() < epsilon:
            return self.rng.randint(0, NUM_ACTIONS - 1)
        return self.table.best_action(state)
