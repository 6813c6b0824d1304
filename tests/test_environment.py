import pytest

from qgrid.domain.environment import GridEnvironment
from qgrid.domain.types import (
    EnvConfig, ConfigurationError, UP, RIGHT, DOWN, LEFT, ACTIONS, as_coord
)
from qgrid.utils.grid_factory import (
    validate_grid_size, create_default_config, create_config, DEFAULT_WALLS
)


def test_state_id_bijection():
    for width, height in [(2, 2), (5, 5), (10, 3), (4, 9)]:
        env = GridEnvironment(EnvConfig(width=width, height=height))
        seen = set()
        for y in range(height):
            for x in range(width):
                state = env.state_id((x, y))
                assert 0 <= state < width * height
                assert env.position(state) == (x, y)
                seen.add(state)
        assert len(seen) == width * height


def test_position_rejects_out_of_range_state(default_env):
    with pytest.raises(ValueError):
        default_env.position(25)
    with pytest.raises(ValueError):
        default_env.position(-1)


def test_move_into_open_cell(default_env):
    pos, reward, done = default_env.step((0, 0), RIGHT)
    assert pos == (1, 0)
    assert reward == -1.0
    assert done is False


@pytest.mark.parametrize("pos, action", [
    ((0, 0), UP),      # top edge
    ((0, 0), LEFT),    # left edge
    ((4, 2), RIGHT),   # right edge
    ((3, 4), DOWN),    # bottom edge
    ((1, 1), RIGHT),   # wall at (2, 1)
    ((1, 2), DOWN),    # wall at (1, 3)
])
def test_bump_stays_put_with_step_reward(default_env, pos, action):
    next_pos, reward, done = default_env.step(pos, action)
    assert next_pos == pos
    assert reward == default_env.config.step_reward
    assert done is False


def test_reaching_goal_terminates_with_goal_reward(default_env):
    pos, reward, done = default_env.step((4, 3), DOWN)
    assert pos == (4, 4)
    assert reward == 10.0
    assert done is True


def test_done_iff_goal_position(default_env):
    for y in range(5):
        for x in range(5):
            if (x, y) in DEFAULT_WALLS:
                continue
            for action in ACTIONS:
                pos, reward, done = default_env.step((x, y), action)
                assert done == (pos == default_env.goal)
                assert reward == (10.0 if done else -1.0)


def test_step_is_deterministic(default_env):
    first = [default_env.step((3, 3), a) for a in ACTIONS]
    second = [default_env.step((3, 3), a) for a in ACTIONS]
    assert first == second


def test_unknown_action_rejected(default_env):
    with pytest.raises(ValueError):
        default_env.step((0, 0), 4)


def test_default_config_values():
    config = create_default_config(5, 5)
    assert config.start == (0, 0)
    assert config.goal == (4, 4)
    assert config.walls == DEFAULT_WALLS
    assert config.step_limit == 100
    assert config.step_reward == -1.0
    assert config.goal_reward == 10.0


def test_small_default_grid_has_no_walls():
    config = create_default_config(4, 6)
    assert config.walls == frozenset()
    assert config.goal == (3, 5)
    assert config.step_limit == 96


@pytest.mark.parametrize("width, height", [(1, 5), (5, 1), (11, 5), (5, 11), (0, 0)])
def test_invalid_grid_size(width, height):
    with pytest.raises(ConfigurationError):
        validate_grid_size(width, height)


def test_grid_size_bounds_are_inclusive():
    validate_grid_size(2, 2)
    validate_grid_size(10, 10)


def test_start_on_wall_rejected():
    with pytest.raises(ConfigurationError, match="wall"):
        create_config(5, 5, start=(2, 1), goal=(4, 4), walls=DEFAULT_WALLS)


def test_goal_outside_grid_rejected():
    with pytest.raises(ConfigurationError):
        EnvConfig(width=3, height=3, goal=(3, 3))


def test_config_is_immutable():
    config = create_default_config()
    with pytest.raises(AttributeError):
        config.width = 7


@pytest.mark.parametrize("value", [(1,), (1, 2, 3), ("1", 2), (0.5, 0), 7, None, (False, 1)])
def test_as_coord_rejects_non_integer_pairs(value):
    with pytest.raises(ConfigurationError, match="pair of integers"):
        as_coord(value)


def test_as_coord_accepts_lists():
    assert as_coord([3, 4]) == (3, 4)


def test_float_start_rejected():
    with pytest.raises(ConfigurationError):
        EnvConfig(width=5, height=5, start=(0.5, 0))


def test_non_integer_width_rejected():
    with pytest.raises(ConfigurationError):
        EnvConfig(width=5.0, height=5)
