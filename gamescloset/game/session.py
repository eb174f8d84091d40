"""
session.py - Game lifecycle, turn order and player roles for Connect Four

This module provides:
1. GameSession, the state machine that owns the Board for one game and
   drives AI seats synchronously after every accepted move
2. The functional interface used by front ends (start_session, submit_move,
   current_state, reset, to_menu)
"""

from enum import Enum, auto
from typing import Dict, NamedTuple, Optional

from gamescloset.debug import debug
from gamescloset.exceptions import AIMoveError, ColumnFull, ColumnOutOfRange, IllegalMove
from gamescloset.game.board import Board, BoardSnapshot
from gamescloset.utils import ROWS, COLS, CONNECT_N, Team, TerminalState


class Lifecycle(Enum):
    """Enumeration of the session states."""
    MENU = auto()
    CONFIGURING = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


class Role(Enum):
    """Who plays a seat."""
    HUMAN = auto()
    AI = auto()


class SessionConfig(NamedTuple):
    """Settings chosen before a game starts."""
    human_seats: int = 1
    width: int = COLS
    height: int = ROWS

    def validate(self) -> 'SessionConfig':
        if self.human_seats not in (0, 1, 2):
            raise ValueError(f"human_seats must be 0, 1 or 2, got {self.human_seats}")
        if max(self.width, self.height) < CONNECT_N or min(self.width, self.height) < 1:
            raise ValueError(f"a {self.width}x{self.height} board cannot hold a line of {CONNECT_N}")
        return self

    def roles(self) -> Dict[Team, Role]:
        """Assign roles to seats; human seats are filled from Team.A."""
        return {
            Team.A: Role.HUMAN if self.human_seats >= 1 else Role.AI,
            Team.B: Role.HUMAN if self.human_seats == 2 else Role.AI,
        }


class SessionState(NamedTuple):
    """What a front end needs to draw the game."""
    board: Optional[BoardSnapshot]
    active_team: Optional[Team]
    lifecycle: Lifecycle
    result: Optional[TerminalState]


class GameSession:
    """
    High-level Connect Four game manager.

    The session owns its Board exclusively. Moves go through ``submit_move``;
    when the seat to move afterwards belongs to the AI, its reply is computed
    and applied before ``submit_move`` returns.
    """

    def __init__(self, ai_player=None):
        """
        Initialize a session in the main menu.

        Args:
            ai_player: Object with ``choose_move(snapshot, team) -> column``;
                an AIPlayer with default weights is created if omitted
        """
        if ai_player is None:
            # Imported here: gamescloset.ai depends on gamescloset.game
            from gamescloset.ai.player import AIPlayer
            ai_player = AIPlayer()
        self.ai_player = ai_player
        self.lifecycle = Lifecycle.MENU
        self.config: Optional[SessionConfig] = None
        self.roles: Dict[Team, Role] = {}
        self.board: Optional[Board] = None
        self.result: Optional[TerminalState] = None

    @property
    def active_team(self) -> Optional[Team]:
        """Team to move, or None when no game is in progress."""
        if self.lifecycle != Lifecycle.IN_PROGRESS:
            return None
        return self.board.current_team

    def _transition(self, lifecycle: Lifecycle):
        debug.info(f"Session {self.lifecycle.name} -> {lifecycle.name}", "session")
        self.lifecycle = lifecycle

    def _reject(self, reason: str) -> IllegalMove:
        debug.info(f"Rejected: {reason}", "session")
        return IllegalMove(reason)

    # Lifecycle

    def select_game(self):
        """Leave the menu to configure a new game."""
        if self.lifecycle != Lifecycle.MENU:
            raise self._reject(f"cannot select a game while {self.lifecycle.name}")
        self._transition(Lifecycle.CONFIGURING)

    def configure(self, config: SessionConfig):
        """Record the seat and board configuration for the next start."""
        if self.lifecycle != Lifecycle.CONFIGURING:
            raise self._reject(f"cannot configure while {self.lifecycle.name}")
        self.config = config.validate()
        self.roles = self.config.roles()
        debug.debug(f"Configured roles: A={self.roles[Team.A].name}, B={self.roles[Team.B].name}",
                    "session")

    def start(self) -> BoardSnapshot:
        """
        Start the configured game.

        AI seats that are due to move play immediately, so with no human
        seats the game is finished when this returns.

        Returns:
            Snapshot of the board once a human is to move or the game is over
        """
        if self.lifecycle != Lifecycle.CONFIGURING:
            raise self._reject(f"cannot start while {self.lifecycle.name}")
        if self.config is None:
            self.configure(SessionConfig())

        self.board = Board(self.config.width, self.config.height)
        self.result = None
        self._transition(Lifecycle.IN_PROGRESS)
        self._play_ai_turns()
        return self.board.snapshot()

    def reset(self) -> BoardSnapshot:
        """Clear the board and start again with the same configuration."""
        if self.lifecycle not in (Lifecycle.IN_PROGRESS, Lifecycle.FINISHED):
            raise self._reject(f"cannot reset while {self.lifecycle.name}")

        debug.info("Resetting game", "session")
        self.board.reset()
        self.result = None
        self._transition(Lifecycle.IN_PROGRESS)
        self._play_ai_turns()
        return self.board.snapshot()

    def to_menu(self):
        """Abandon whatever is going on and return to the main menu."""
        self.config = None
        self.roles = {}
        self.board = None
        self.result = None
        self._transition(Lifecycle.MENU)

    # Moves

    def submit_move(self, column: int, team: Optional[Team] = None) -> BoardSnapshot:
        """
        Play a human move.

        Args:
            column: Column to drop into
            team: The team the caller plays for; if given it must be the
                team to move

        Returns:
            Snapshot after the move and any AI replies

        Raises:
            IllegalMove: if the game is not in progress, it is not the
                caller's turn, or the column cannot be played. The board is
                unchanged in every case.
            AIMoveError: if the AI reply is not a playable column. The human
                move is taken back, so the same human may move again.
        """
        if self.lifecycle != Lifecycle.IN_PROGRESS:
            raise self._reject(f"no game in progress ({self.lifecycle.name})")

        active = self.board.current_team
        if team is not None and team != active:
            raise self._reject(f"it is {active.name}'s turn, not {team.name}'s")
        if self.roles[active] != Role.HUMAN:
            raise self._reject(f"{active.name} is played by the AI")

        before = self.board.snapshot()
        self._apply(column)
        try:
            self._play_ai_turns()
        except AIMoveError:
            self.board = Board.from_snapshot(before)
            raise
        return self.board.snapshot()

    def _apply(self, column: int):
        team = self.board.current_team
        try:
            row = self.board.drop(column)
        except (ColumnFull, ColumnOutOfRange) as e:
            raise self._reject(str(e)) from e

        debug.debug(f"{team.name} played column {column}, row {row}", "session")
        terminal = self.board.check_terminal((column, row))
        if terminal.is_game_over():
            self.result = terminal
            debug.info(f"Game over: {terminal}", "session")
            self._transition(Lifecycle.FINISHED)

    def _play_ai_turns(self):
        while self.lifecycle == Lifecycle.IN_PROGRESS and \
                self.roles[self.board.current_team] == Role.AI:
            team = self.board.current_team
            column = self.ai_player.choose_move(self.board.snapshot(), team)
            debug.debug(f"AI ({team.name}) chose column {column}", "session")
            if column not in self.board.legal_columns():
                debug.error(f"AI ({team.name}) chose unplayable column {column}", "session")
                raise AIMoveError(team, column)
            self._apply(column)

    def state(self) -> SessionState:
        return SessionState(
            board=self.board.snapshot() if self.board is not None else None,
            active_team=self.active_team,
            lifecycle=self.lifecycle,
            result=self.result,
        )


def start_session(config: SessionConfig = SessionConfig(), ai_player=None) -> GameSession:
    """
    Create a session and run it through configuration to a started game.

    Args:
        config: Seat and board configuration
        ai_player: Optional replacement for the default AIPlayer

    Returns:
        A session that is in progress (or already finished if no seat is human)
    """
    session = GameSession(ai_player)
    session.select_game()
    session.configure(config)
    session.start()
    return session


def submit_move(session: GameSession, column: int) -> BoardSnapshot:
    """Play ``column`` for the team to move; raises IllegalMove on rejection."""
    return session.submit_move(column)


def current_state(session: GameSession) -> SessionState:
    """Board, active team, lifecycle and result of a session."""
    return session.state()


def reset(session: GameSession) -> GameSession:
    """Restart the session's game on a cleared board."""
    session.reset()
    return session


def to_menu(session: GameSession) -> None:
    """Discard the session's game and return it to the menu."""
    session.to_menu()
