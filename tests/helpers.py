"""Shared board builders for the test suite."""

from typing import Iterable, List

import numpy as np

from gamescloset.game.board import Board, BoardSnapshot
from gamescloset.utils import Team

# Alternating A/B drops that fill a 7x6 board without any four-in-a-row.
# Final grid, bottom row first:
#   A A B B A A B
#   B B A A B B A   (and so on, flipping every row)
DRAW_SEQUENCE = ([0] + [2] * 6 + [0] * 5
                 + [1] + [3] * 6 + [1] * 5
                 + [4] + [6] * 6 + [4] * 5
                 + [5] * 6)

HORIZONTAL_WIN = [0, 0, 1, 1, 2, 2, 3]
VERTICAL_WIN = [0, 1, 0, 1, 0, 1, 0]
DIAGONAL_UP_WIN = [0, 1, 1, 2, 2, 3, 2, 3, 3, 5, 3]
DIAGONAL_DOWN_WIN = [3, 2, 2, 1, 1, 0, 1, 0, 0, 6, 0]

_CELLS = {'.': Team.EMPTY, 'A': Team.A, 'B': Team.B}


def play(columns: Iterable[int], board: Board = None) -> Board:
    """Drop discs into the given columns, alternating teams from Team.A."""
    board = board or Board()
    for column in columns:
        board.drop(column)
    return board


def make_board(rows: List[str]) -> Board:
    """
    Build a board from text rows, bottom row first.

    Each row is a string of 'A', 'B' and '.' characters. The team to move is
    Team.A when both teams have the same number of discs.
    """
    height = len(rows)
    width = len(rows[0])
    grid = np.zeros((height, width), dtype=int)
    for r, text in enumerate(rows):
        for c, char in enumerate(text):
            grid[r, c] = _CELLS[char].value

    heights = tuple(int(np.count_nonzero(grid[:, c])) for c in range(width))
    count_a = int(np.count_nonzero(grid == Team.A.value))
    count_b = int(np.count_nonzero(grid == Team.B.value))
    to_move = Team.A if count_a == count_b else Team.B
    return Board.from_snapshot(BoardSnapshot(grid, heights, (), to_move))


class ScriptedAI:
    """Stand-in opponent: plays the lowest legal column not in ``avoid``."""

    def __init__(self, avoid=()):
        self.avoid = set(avoid)
        self.calls = 0

    def choose_move(self, snapshot, team):
        self.calls += 1
        return min(snapshot.legal_columns() - self.avoid)
