"""
Maze serialization utilities for saving and loading mazes.
Mazes are stored as JSON with metadata.
"""

import json
import os
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Any

from ..domain.types import EnvConfig, ConfigurationError
from .grid_factory import create_config

MAZE_FORMAT_VERSION = "1.0"


class MazeData:
    """Container for maze data with metadata."""

    def __init__(self, width: int, height: int, walls: List[Tuple[int, int]],
                 start: Tuple[int, int], goal: Tuple[int, int],
                 name: str = "", description: str = ""):
        self.width = width
        self.height = height
        self.walls = walls
        self.start = start
        self.goal = goal
        self.name = name
        self.description = description
        self.created_at = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert maze data to dictionary for serialization."""
        return {
            'width': self.width,
            'height': self.height,
            'walls': [list(w) for w in sorted(self.walls)],
            'start': list(self.start),
            'goal': list(self.goal),
            'name': self.name,
            'description': self.description,
            'created_at': self.created_at,
            'version': MAZE_FORMAT_VERSION
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MazeData':
        """Create maze data from dictionary."""
        try:
            maze = cls(
                width=int(data['width']),
                height=int(data['height']),
                walls=[tuple(w) for w in data.get('walls', [])],
                start=tuple(data['start']),
                goal=tuple(data['goal']),
                name=data.get('name', ''),
                description=data.get('description', '')
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid maze document: {e}") from e
        maze.created_at = data.get('created_at', maze.created_at)
        return maze

    def to_env_config(self, step_reward: float = -1.0, goal_reward: float = 10.0) -> EnvConfig:
        """Build a validated environment configuration from this maze."""
        return create_config(
            width=self.width,
            height=self.height,
            start=self.start,
            goal=self.goal,
            walls=self.walls,
            step_reward=step_reward,
            goal_reward=goal_reward
        )


def maze_from_config(config: EnvConfig, name: str = "") -> MazeData:
    """Extract maze data from an environment configuration."""
    return MazeData(
        width=config.width,
        height=config.height,
        walls=sorted(config.walls),
        start=config.start,
        goal=config.goal,
        name=name or f"maze_{config.width}x{config.height}"
    )


def save_maze(maze_data: MazeData, filepath: str) -> str:
    """Save maze data to a JSON file."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, 'w') as f:
        json.dump(maze_data.to_dict(), f, indent=2)
    return filepath


def load_maze(filepath: str) -> MazeData:
    """
    Load maze data from a JSON file.

    Raises:
        ConfigurationError: If the file is missing or not a valid maze
    """
    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading maze {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Error loading maze {filepath}: expected a JSON object")
    return MazeData.from_dict(data)
