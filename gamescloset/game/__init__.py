"""
gamescloset.game - Core game mechanics for Connect Four

This package contains the board representation, the game session state
machine and the Gymnasium environment built on top of them.
"""

from gamescloset.game.board import Board, BoardSnapshot
from gamescloset.game.session import (GameSession, Lifecycle, Role, SessionConfig, SessionState,
                                      start_session, submit_move, current_state, reset, to_menu)
from gamescloset.game.env import ConnectFourEnv

__all__ = ['Board', 'BoardSnapshot', 'GameSession', 'Lifecycle', 'Role', 'SessionConfig',
           'SessionState', 'start_session', 'submit_move', 'current_state', 'reset', 'to_menu', 'ConnectFourEnv']
