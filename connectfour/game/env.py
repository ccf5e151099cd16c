"""
env.py - Gymnasium environment adapter for the Connect Four engine

ConnectFourEnv exposes a GameEngine through the Gymnasium interface. Both
seats are played by whoever calls step(); the environment never chooses moves
itself. Everything it reports is read back from engine snapshots.
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Tuple, Union

from connectfour.debug import debug
from connectfour.game.engine import GameEngine, Snapshot
from connectfour.utils import ROWS, COLS, Player, GameStatus

CELL_PIXELS = 50
PIECE_RADIUS = 20

# Colors taken from the desktop board
BOARD_COLOR = (44, 62, 80)
HOLE_COLOR = (255, 255, 255)
PIECE_COLORS = {
    Player.RED: (231, 76, 60),
    Player.YELLOW: (241, 196, 15),
}


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Observations are the 6x7 grid with row 0 at the bottom (0 empty, 1 red,
    2 yellow). Rewards are from the point of view of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, engine: Optional[GameEngine] = None):
        """
        Initialize the environment.

        Args:
            render_mode: One of metadata['render_modes'], or None
            engine: Engine to drive; a fresh one is created if omitted
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.engine = engine if engine is not None else GameEngine()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.engine.restart()

        if self.render_mode == "human":
            self.render()

        snapshot = self.engine.snapshot()
        return snapshot.to_grid(), self._get_info(snapshot)

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the player to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        mover = self.engine.snapshot().turn
        placed = self.engine.drop(int(action))

        if not placed:
            snapshot = self.engine.snapshot()
            debug.warning(f"Invalid action {action}: {snapshot.error or snapshot.status.name}", "env")
            info = self._get_info(snapshot)
            info['invalid_move'] = True
            return snapshot.to_grid(), self.reward_invalid_move, False, True, info

        snapshot = self.engine.snapshot()
        reward = self.reward_step
        terminated = snapshot.is_game_over

        if snapshot.status.winner() == mover:
            reward = self.reward_win
        elif snapshot.status == GameStatus.DRAW:
            reward = self.reward_draw

        if terminated:
            debug.info(f"Episode finished: {snapshot.status.name}", "env")

        if self.render_mode == "human":
            self.render()

        return snapshot.to_grid(), reward, terminated, False, self._get_info(snapshot)

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.engine.snapshot().render()

        if self.render_mode == "human":
            print(self.engine.snapshot().render())
            return None

        return self._render_rgb(self.engine.snapshot())

    def _render_rgb(self, snapshot: Snapshot) -> np.ndarray:
        """Draw the board as an RGB image, top row of the board at the top."""
        frame = np.zeros((ROWS * CELL_PIXELS, COLS * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = BOARD_COLOR

        ys, xs = np.ogrid[:CELL_PIXELS, :CELL_PIXELS]
        centre = CELL_PIXELS // 2
        disc = (xs - centre) ** 2 + (ys - centre) ** 2 <= PIECE_RADIUS ** 2

        for col in range(COLS):
            for row in range(ROWS):
                owner = snapshot.cell(col, row)
                color = HOLE_COLOR if owner is None else PIECE_COLORS[owner]
                top = (ROWS - 1 - row) * CELL_PIXELS
                left = col * CELL_PIXELS
                tile = frame[top:top + CELL_PIXELS, left:left + CELL_PIXELS]
                tile[disc] = color

        return frame

    def _get_info(self, snapshot: Snapshot) -> Dict:
        valid_moves = snapshot.valid_moves()

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': snapshot.turn.value,
            'status': snapshot.status.name,
            'moves_made': snapshot.move_count,
            'winning_line': list(snapshot.winning_line),
            'error': snapshot.error,
        }

    def close(self):
        pass

