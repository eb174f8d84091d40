"""
exceptions.py - Error types raised by the Game Closet engine

Every failure of the core is reported as one of these exceptions; none of
them leave the board in a partially updated state.
"""


class GameError(Exception):
    """Base class for all engine errors."""


class ColumnFull(GameError):
    """A disc was dropped into a column whose fill level equals the board height."""

    def __init__(self, column: int):
        super().__init__(f"column {column} is full")
        self.column = column


class ColumnOutOfRange(GameError):
    """A column index outside the board was played."""

    def __init__(self, column: int, width: int):
        super().__init__(f"column {column} is outside 0..{width - 1}")
        self.column = column
        self.width = width


class IllegalMove(GameError):
    """
    A move was rejected by the session.

    ``reason`` names the rule that was broken: wrong turn, a session that is
    not in progress, or an illegal column (in which case the board error is
    chained as ``__cause__``).
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NoLegalMove(GameError):
    """The AI was asked to move on a board with no legal column."""


class AIMoveError(GameError):
    """An AI seat answered with a column the board cannot take."""

    def __init__(self, team, column: int):
        super().__init__(f"AI for {team.name} chose unplayable column {column}")
        self.team = team
        self.column = column
