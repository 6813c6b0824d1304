import pytest

from qgrid.domain.environment import GridEnvironment
from qgrid.domain.types import EnvConfig
from qgrid.utils.grid_factory import create_default_config


@pytest.fixture
def default_env():
    """5x5 default maze: start (0, 0), goal (4, 4)."""
    return GridEnvironment(create_default_config(5, 5))


@pytest.fixture
def open_env():
    """2x2 grid with no walls."""
    return GridEnvironment(EnvConfig(width=2, height=2))


@pytest.fixture
def walled_in_env():
    """3x3 grid whose start cell is sealed off from the goal."""
    return GridEnvironment(EnvConfig(width=3, height=3, walls=frozenset({(1, 0), (0, 1)})))
