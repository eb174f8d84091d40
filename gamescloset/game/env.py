"""
env.py - Gymnasium environment for playing Connect Four against the AI

The agent plays Team.A in a one-human session; the session answers every
accepted action with the AIPlayer's move before ``step`` returns, so each
step covers a full exchange.
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from gamescloset.debug import debug
from gamescloset.exceptions import IllegalMove
from gamescloset.game.session import GameSession, Lifecycle, SessionConfig, start_session
from gamescloset.utils import ROWS, COLS, Outcome, Team


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Observations are the board grid (row 0 at the bottom) with 0 for empty,
    1 for the agent and 2 for the AI.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, ai_player=None,
                 width: int = COLS, height: int = ROWS):
        """
        Initialize the environment.

        Args:
            render_mode: 'ascii' to return the board string, 'human' to print it
            ai_player: Opponent passed on to the session (default AIPlayer)
            width: Board width
            height: Board height
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.config = SessionConfig(human_seats=1, width=width, height=height).validate()
        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(low=0, high=2, shape=(height, width), dtype=np.int8)

        self.render_mode = render_mode
        self.ai_player = ai_player
        self.session: Optional[GameSession] = None

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Args:
            seed: Random seed (the engine itself is deterministic)
            options: Unused

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        if self.session is None or self.session.lifecycle == Lifecycle.MENU:
            self.session = start_session(self.config, self.ai_player)
        else:
            self.session.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column and the AI's reply.

        Args:
            action: Column to drop into

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self.session is None:
            raise RuntimeError("call reset() before step()")

        try:
            self.session.submit_move(int(action), Team.A)
        except IllegalMove as e:
            debug.info(f"Invalid action {action}: {e.reason}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        result = self.session.result
        if result is not None:
            terminated = True
            if result.outcome == Outcome.DRAW:
                reward = self.reward_draw
            elif result.winner == Team.A:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Episode over: {result}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode is None or self.session is None:
            return None

        text = self.session.board.render()
        if self.render_mode == "human":
            print(text)
            return None
        return text

    def _get_observation(self) -> np.ndarray:
        return self.session.board.snapshot().grid.astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        board = self.session.board
        result = self.session.result
        legal = sorted(board.legal_columns()) if result is None else []

        return {
            'valid_moves': legal,
            'num_valid_moves': len(legal),
            'active_team': self.session.active_team.name if self.session.active_team else None,
            'game_result': str(result) if result is not None else Outcome.ONGOING.name,
            'moves_made': len(board.moves),
            'winning_line': list(result.line) if result is not None else [],
            'last_move': board.last_move,
        }
