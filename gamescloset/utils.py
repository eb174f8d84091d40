"""
utils.py - Constants, enumerations and helpers shared by the Game Closet engine

This module provides the board dimensions, the team / outcome enumerations,
the terminal-state and move value types, and the line-scanning helpers used
for win detection and position evaluation.

Boards are numpy arrays indexed ``grid[row, column]`` where row 0 is the
bottom row; discs stack upwards.
"""

from enum import Enum, auto
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of discs in a row to win

Cell = Tuple[int, int]  # (column, row)


class Team(Enum):
    """Enumeration representing the two teams and the empty cell state."""
    EMPTY = 0
    A = 1    # Moves first
    B = 2

    def other(self) -> 'Team':
        """Get the opposing team."""
        if self == Team.A:
            return Team.B
        elif self == Team.B:
            return Team.A
        return Team.EMPTY

    def __str__(self):
        if self == Team.EMPTY:
            return " "
        elif self == Team.A:
            return "X"
        else:
            return "O"


class Outcome(Enum):
    """Enumeration representing the kind of terminal state."""
    ONGOING = auto()
    WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the outcome ends the game."""
        return self != Outcome.ONGOING


class TerminalState(NamedTuple):
    """Result of a terminal check: ongoing, a win for one team, or a draw."""
    outcome: Outcome
    winner: Optional[Team] = None
    line: Tuple[Cell, ...] = ()

    @classmethod
    def ongoing(cls) -> 'TerminalState':
        return cls(Outcome.ONGOING)

    @classmethod
    def draw(cls) -> 'TerminalState':
        return cls(Outcome.DRAW)

    @classmethod
    def win(cls, team: Team, line: List[Cell]) -> 'TerminalState':
        return cls(Outcome.WIN, team, tuple(line))

    def is_game_over(self) -> bool:
        return self.outcome.is_game_over()

    def __str__(self):
        if self.outcome == Outcome.WIN:
            return f"Win({self.winner.name})"
        return self.outcome.name.capitalize()


class Move(NamedTuple):
    """An applied move: the column played and the row the disc landed on."""
    column: int
    row: int


class Direction(Enum):
    """Enumeration representing the four line directions."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Direction vectors (d_row, d_col) for each direction, row 0 at the bottom
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (1, 1),
    Direction.DIAGONAL_DOWN: (-1, 1),
}


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Board height
        cols: Board width

    Returns:
        True if position is on the board, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def winning_line_at(grid: np.ndarray, row: int, col: int,
                    connect: int = CONNECT_N) -> List[Cell]:
    """
    Find a winning run passing through the given cell.

    Only the four lines through (row, col) are scanned, so the cost does not
    depend on the board size.

    Args:
        grid: The game board
        row: Row index of the disc just placed
        col: Column index of the disc just placed
        connect: Run length needed to win

    Returns:
        The (column, row) cells of the run ordered from its lower-left end,
        or an empty list if there is no run of ``connect`` or more
    """
    value = grid[row, col]
    if value == Team.EMPTY.value:
        return []

    rows, cols = grid.shape
    for d_row, d_col in DIRECTION_VECTORS.values():
        # Walk backwards to the start of the run, then collect forwards
        r, c = row, col
        while is_valid_position(r - d_row, c - d_col, rows, cols) and \
                grid[r - d_row, c - d_col] == value:
            r -= d_row
            c -= d_col

        line = []
        while is_valid_position(r, c, rows, cols) and grid[r, c] == value:
            line.append((c, r))
            r += d_row
            c += d_col

        if len(line) >= connect:
            return sorted(line)

    return []


def iter_windows(rows: int = ROWS, cols: int = COLS,
                 length: int = CONNECT_N) -> Iterator[List[Cell]]:
    """
    Yield every line segment of ``length`` consecutive cells on the board.

    Args:
        rows: Board height
        cols: Board width
        length: Segment length

    Yields:
        Lists of (column, row) cells, one per window
    """
    for row in range(rows):
        for col in range(cols):
            for d_row, d_col in DIRECTION_VECTORS.values():
                end_row = row + (length - 1) * d_row
                end_col = col + (length - 1) * d_col
                if not is_valid_position(end_row, end_col, rows, cols):
                    continue
                yield [(col + i * d_col, row + i * d_row) for i in range(length)]


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art, top row first.

    Args:
        grid: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]

    for row in range(rows - 1, -1, -1):
        cells = [str(Team(int(grid[row, col]))) for col in range(cols)]
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
