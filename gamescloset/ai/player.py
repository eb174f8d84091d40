"""
player.py - Heuristic AI player for Connect Four

The AIPlayer tries every legal column on a private copy of the position,
asks the Evaluator how likely its team is to win afterwards, and plays the
column with the highest probability. Ties go to the lowest column index, so
the same position always produces the same move.
"""

from typing import List, Optional, Tuple

from gamescloset.ai.evaluator import Evaluator
from gamescloset.debug import debug
from gamescloset.exceptions import NoLegalMove
from gamescloset.game.board import Board, BoardSnapshot
from gamescloset.utils import Team


class AIPlayer:
    """
    A one-ply Connect Four player driven by the heuristic Evaluator.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None):
        """
        Initialize the AI player.

        Args:
            evaluator: Position evaluator to use (default weights if omitted)
        """
        self.evaluator = evaluator or Evaluator()
        self.positions_evaluated = 0  # For performance tracking

    def rank_moves(self, snapshot: BoardSnapshot, team: Team) -> List[Tuple[int, float]]:
        """
        Evaluate every legal column for ``team``.

        Args:
            snapshot: The current position
            team: The team about to move

        Returns:
            (column, win probability) pairs in ascending column order
        """
        ranked = []
        for column in sorted(snapshot.legal_columns()):
            trial = Board.from_snapshot(snapshot)
            trial.current_team = team
            trial.drop(column)
            probability = self.evaluator.evaluate(trial.snapshot(), team)
            self.positions_evaluated += 1
            ranked.append((column, probability))
        return ranked

    def choose_move(self, snapshot: BoardSnapshot, team: Team) -> int:
        """
        Pick the column that maximizes ``team``'s estimated win probability.

        Args:
            snapshot: The current position; it is never modified
            team: The team about to move

        Returns:
            The chosen column index

        Raises:
            NoLegalMove: if every column is full
        """
        with debug.timed("choose_move", "ai"):
            ranked = self.rank_moves(snapshot, team)
        if not ranked:
            debug.error("AI asked to move on a full board", "ai")
            raise NoLegalMove("no legal column left on the board")

        best_column, best_probability = ranked[0]
        for column, probability in ranked[1:]:
            # Strictly greater keeps the lowest column on ties
            if probability > best_probability:
                best_column, best_probability = column, probability

        debug.debug(
            f"{team.name} candidates: "
            + ", ".join(f"{c}={p:.3f}" for c, p in ranked)
            + f" -> column {best_column}", "ai")
        return best_column
