import numpy as np
import pytest

from connectfour.game.engine import GameEngine
from connectfour.game.env import ConnectFourEnv, PIECE_COLORS, HOLE_COLOR
from connectfour.utils import COLS, ROWS, GameStatus, Player

from tests.helpers import DRAW_SEQUENCE


@pytest.fixture
def env():
    environment = ConnectFourEnv()
    yield environment
    environment.close()


def test_reset_returns_empty_board(env: ConnectFourEnv) -> None:
    env.engine.drop(3)
    observation, info = env.reset(seed=0)
    assert observation.shape == (ROWS, COLS)
    assert observation.dtype == np.int8
    assert not observation.any()
    assert info['valid_moves'] == list(range(COLS))
    assert info['current_player'] == Player.RED.value
    assert info['status'] == "IN_PROGRESS"
    assert env.observation_space.contains(observation)


def test_step_places_piece_at_bottom(env: ConnectFourEnv) -> None:
    env.reset()
    observation, reward, terminated, truncated, info = env.step(2)
    assert observation[0, 2] == Player.RED.value
    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info['current_player'] == Player.YELLOW.value
    assert info['moves_made'] == 1


def test_invalid_action_is_truncated(env: ConnectFourEnv) -> None:
    env.reset()
    observation, reward, terminated, truncated, info = env.step(COLS)
    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']
    assert info['error'] == "Invalid column"
    assert not observation.any()


def test_winning_step_rewards_the_mover(env: ConnectFourEnv) -> None:
    env.reset()
    for column in [0, 1, 0, 1, 0, 1]:
        env.step(column)
    _, reward, terminated, _, info = env.step(0)
    assert reward == env.reward_win
    assert terminated
    assert info['status'] == "RED_WINS"
    assert sorted(info['winning_line']) == [(0, 0), (0, 1), (0, 2), (0, 3)]
    assert info['valid_moves'] == []


def test_drawing_step(env: ConnectFourEnv) -> None:
    env.reset()
    for column in DRAW_SEQUENCE[:-1]:
        env.step(column)
    _, reward, terminated, _, info = env.step(DRAW_SEQUENCE[-1])
    assert reward == env.reward_draw
    assert terminated
    assert info['status'] == GameStatus.DRAW.name


def test_shares_an_existing_engine() -> None:
    engine = GameEngine()
    env = ConnectFourEnv(engine=engine)
    env.step(5)
    assert engine.snapshot().cell(5, 0) == Player.RED


def test_rejects_unknown_render_mode() -> None:
    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode="opengl")


def test_render_without_mode_returns_none(env: ConnectFourEnv) -> None:
    assert env.render() is None


def test_ascii_render() -> None:
    env = ConnectFourEnv(render_mode="ascii")
    env.reset()
    env.step(0)
    text = env.render()
    assert "|R . . . . . .|" in text
    assert "Yellow's Turn" in text


def test_rgb_render_draws_bottom_row_at_the_bottom() -> None:
    env = ConnectFourEnv(render_mode="rgb_array")
    env.reset()
    env.step(0)
    env.step(6)
    frame = env.render()
    assert frame.shape == (ROWS * 50, COLS * 50, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[ROWS * 50 - 25, 25]) == PIECE_COLORS[Player.RED]
    assert tuple(frame[ROWS * 50 - 25, COLS * 50 - 25]) == PIECE_COLORS[Player.YELLOW]
    assert tuple(frame[25, 25]) == HOLE_COLOR


def test_observation_and_info_mirror_the_snapshot(env: ConnectFourEnv) -> None:
    env.reset()
    for column in [3, 3, 4]:
        observation, _, _, _, info = env.step(column)
    snapshot = env.engine.snapshot()
    np.testing.assert_array_equal(observation, snapshot.to_grid())
    assert info['moves_made'] == snapshot.move_count == 3
    assert info['valid_moves'] == snapshot.valid_moves()
    assert info['current_player'] == snapshot.turn.value
