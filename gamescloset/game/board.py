"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, which owns the grid, applies drops and
detects terminal states, and BoardSnapshot, the immutable view of a board that
is handed to evaluation code.
"""

from typing import List, Optional, Set, Tuple, Union

import numpy as np

from gamescloset.debug import debug
from gamescloset.exceptions import ColumnFull, ColumnOutOfRange
from gamescloset.utils import (ROWS, COLS, CONNECT_N, Team, Move, TerminalState,
                               winning_line_at, render_board_ascii)


class _BoardView:
    """Read-only queries shared by Board and BoardSnapshot."""

    width: int
    height: int
    connect: int
    grid: np.ndarray
    current_team: Team

    def _heights(self):
        raise NotImplementedError

    def _moves(self):
        raise NotImplementedError

    @property
    def moves(self) -> Tuple[Move, ...]:
        """Moves made so far, oldest first."""
        return tuple(self._moves())

    @property
    def last_move(self) -> Optional[Move]:
        moves = self._moves()
        return moves[-1] if moves else None

    def fill_level(self, column: int) -> int:
        """Number of discs in the given column."""
        return self._heights()[column]

    def cell(self, column: int, row: int) -> Team:
        """Team occupying the cell, or Team.EMPTY."""
        return Team(int(self.grid[row, column]))

    def legal_columns(self) -> Set[int]:
        """
        Get the columns that can still take a disc.

        Returns:
            Set of column indices whose fill level is below the board height
        """
        heights = self._heights()
        return {col for col in range(self.width) if heights[col] < self.height}

    def is_full(self) -> bool:
        return all(h >= self.height for h in self._heights())

    def check_terminal(self, last_move: Optional[Union[Move, Tuple[int, int]]] = None) -> TerminalState:
        """
        Classify the position after a drop.

        Only the four lines through the last placed cell are inspected, since
        no other line can have become a win on that move. A win is reported
        before a draw, so a board filled by a winning disc is a win.

        Args:
            last_move: (column, row) of the disc just placed; defaults to the
                most recent move on this board

        Returns:
            TerminalState describing a win, a draw, or an ongoing game

        Raises:
            ColumnOutOfRange: if ``last_move`` names a column off the board
            ValueError: if ``last_move`` names a row off the board
        """
        if last_move is None:
            last_move = self.last_move

        if last_move is not None:
            column, row = last_move
            if not (0 <= column < self.width):
                raise ColumnOutOfRange(column, self.width)
            if not (0 <= row < self.height):
                raise ValueError(f"row {row} is outside 0..{self.height - 1}")
            line = winning_line_at(self.grid, row, column, self.connect)
            if line:
                return TerminalState.win(self.cell(column, row), line)

        if not self.legal_columns():
            return TerminalState.draw()

        return TerminalState.ongoing()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board, top row first
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()


class BoardSnapshot(_BoardView):
    """
    Immutable copy of a board's state.

    The grid is a read-only numpy array; fill levels and moves are tuples.
    Snapshots compare equal when their grids and team to move match.
    """

    def __init__(self, grid: np.ndarray, heights: Tuple[int, ...], moves: Tuple[Move, ...],
                 current_team: Team, connect: int = CONNECT_N):
        grid = grid.copy()
        grid.setflags(write=False)
        self.grid = grid
        self.height, self.width = grid.shape
        self.connect = connect
        self.current_team = current_team
        self.__heights = tuple(heights)
        self.__moves = tuple(moves)

    def _heights(self):
        return self.__heights

    def _moves(self):
        return self.__moves

    def __setattr__(self, name, value):
        if hasattr(self, "_BoardSnapshot__moves"):
            raise AttributeError("BoardSnapshot is immutable")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if not isinstance(other, BoardSnapshot):
            return NotImplemented
        return (self.current_team == other.current_team
                and np.array_equal(self.grid, other.grid))

    def __hash__(self):
        return hash((self.grid.shape, self.grid.tobytes(), self.current_team))

    def __repr__(self):
        return f"BoardSnapshot({self.width}x{self.height}, moves={len(self.moves)}, to_move={self.current_team.name})"


class Board(_BoardView):
    """
    Represents a Connect Four game board.

    ``drop`` is the only way a game changes the board: it places the disc of
    the team to move at the lowest free row of a column and hands the turn to
    the other team. Win and draw detection is left to ``check_terminal`` so
    the owner decides what to do with the result.
    """

    def __init__(self, width: int = COLS, height: int = ROWS, connect: int = CONNECT_N):
        """
        Initialize an empty board.

        Args:
            width: Number of columns
            height: Number of rows
            connect: Run length needed to win
        """
        if width < 1 or height < 1:
            raise ValueError(f"board must be at least 1x1, got {width}x{height}")
        debug.debug(f"Initializing new {width}x{height} Board", "board")
        self.width = width
        self.height = height
        self.connect = connect
        self.reset()

    def reset(self):
        """Reset the board to an empty state with Team.A to move."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((self.height, self.width), dtype=int)
        self._fill: List[int] = [0] * self.width
        self._history: List[Move] = []
        self.current_team = Team.A

    def _heights(self):
        return self._fill

    def _moves(self):
        return self._history

    @classmethod
    def from_snapshot(cls, snapshot: BoardSnapshot) -> 'Board':
        """
        Create a mutable board holding the same position as a snapshot.

        Args:
            snapshot: The position to copy

        Returns:
            A new Board independent of the snapshot
        """
        board = cls(snapshot.width, snapshot.height, snapshot.connect)
        board.grid = np.array(snapshot.grid, dtype=int)
        board._fill = [snapshot.fill_level(col) for col in range(snapshot.width)]
        board._history = list(snapshot.moves)
        board.current_team = snapshot.current_team
        return board

    def snapshot(self) -> BoardSnapshot:
        """Take an immutable copy of the current state."""
        debug.trace("Creating board snapshot", "board")
        return BoardSnapshot(self.grid, tuple(self._fill), tuple(self._history),
                             self.current_team, self.connect)

    def drop(self, column: int) -> int:
        """
        Drop the current team's disc into a column.

        Args:
            column: The column to play (0-indexed)

        Returns:
            The row the disc landed on (0 is the bottom row)

        Raises:
            ColumnOutOfRange: if the column is not on the board
            ColumnFull: if the column already holds ``height`` discs
        """
        if not (0 <= column < self.width):
            debug.debug(f"Rejected drop: column {column} out of bounds", "board")
            raise ColumnOutOfRange(column, self.width)

        row = self._fill[column]
        if row >= self.height:
            debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFull(column)

        debug.trace(f"Placing {self.current_team.name} at ({column}, {row})", "board")
        self.grid[row, column] = self.current_team.value
        self._fill[column] = row + 1
        self._history.append(Move(column, row))
        self.current_team = self.current_team.other()
        return row
