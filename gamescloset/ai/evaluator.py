"""
evaluator.py - Heuristic win-probability evaluation for Connect Four positions

The evaluator turns a board snapshot into the estimated probability that a
given team wins from it. The heuristic is:

1. Every line of four cells (horizontal, vertical, both diagonals) that holds
   discs of only one team counts for that team: a 2-in-a-row scores
   ``two_weight`` and a 3-in-a-row ``three_weight``.
2. Discs in central columns earn a small bonus, since more lines pass
   through them.
3. The totals are combined into one signed score from Team.A's side and
   squashed through a logistic curve.

Team.B's probability is always ``1 - p(Team.A)``. Draws count as half a win
for both sides.
"""

import math
from functools import lru_cache
from typing import NamedTuple, Tuple

import numpy as np

from gamescloset.debug import debug
from gamescloset.game.board import BoardSnapshot
from gamescloset.utils import Team, iter_windows

NEUTRAL = 0.5


class EvaluatorWeights(NamedTuple):
    """Tunable constants of the heuristic."""
    two_weight: float = 1.0
    three_weight: float = 4.0
    center_weight: float = 0.5
    scale: float = 8.0  # score that moves the probability from 0.5 to ~0.73

    def validate(self) -> 'EvaluatorWeights':
        if not (self.three_weight > self.two_weight >= 0):
            raise ValueError("weights must satisfy three_weight > two_weight >= 0")
        if self.center_weight < 0:
            raise ValueError("center_weight must be non-negative")
        if self.scale <= 0:
            raise ValueError("scale must be positive")
        return self


@lru_cache(maxsize=None)
def _window_index(width: int, height: int, connect: int) -> Tuple[np.ndarray, np.ndarray]:
    """Row and column index arrays of shape (n_windows, connect)."""
    windows = list(iter_windows(height, width, connect))
    if not windows:
        empty = np.zeros((0, connect), dtype=int)
        return empty, empty
    cells = np.array(windows, dtype=int)
    return cells[:, :, 1], cells[:, :, 0]


@lru_cache(maxsize=None)
def _center_bonus(width: int) -> np.ndarray:
    center = width // 2
    return np.array([max(center - abs(col - center), 0) for col in range(width)], dtype=float)


class Evaluator:
    """
    Pure scoring function mapping (snapshot, team) to a win probability.

    The evaluator keeps no per-position state; the same snapshot always gets
    the same value.
    """

    def __init__(self, weights: EvaluatorWeights = EvaluatorWeights()):
        self.weights = weights.validate()

    def evaluate(self, snapshot: BoardSnapshot, team: Team) -> float:
        """
        Estimate the probability that ``team`` wins from this position.

        Args:
            snapshot: The position to score
            team: Team.A or Team.B

        Returns:
            A probability in [0.0, 1.0]; evaluating the other team on the
            same snapshot gives exactly one minus this value
        """
        if not isinstance(snapshot, BoardSnapshot):
            raise TypeError(f"evaluate() needs a BoardSnapshot, got {type(snapshot).__name__}")
        if team not in (Team.A, Team.B):
            raise ValueError(f"cannot evaluate for {team}")

        p_a = self._probability_for_a(snapshot)
        p = p_a if team == Team.A else 1.0 - p_a
        debug.trace(f"evaluate({team.name}) = {p:.4f}", "evaluator")
        return p

    def score(self, snapshot: BoardSnapshot) -> float:
        """
        Signed heuristic score from Team.A's point of view.

        Positive values favour Team.A, negative values Team.B, and an empty
        board scores 0.
        """
        return self._signed_score(snapshot, *self._window_counts(snapshot))

    def _signed_score(self, snapshot: BoardSnapshot, counts_a: np.ndarray,
                      counts_b: np.ndarray, connect: int) -> float:
        w = self.weights

        clean_a = counts_b == 0
        clean_b = counts_a == 0
        score = (w.two_weight * np.count_nonzero(clean_a & (counts_a == connect - 2))
                 + w.three_weight * np.count_nonzero(clean_a & (counts_a == connect - 1))
                 - w.two_weight * np.count_nonzero(clean_b & (counts_b == connect - 2))
                 - w.three_weight * np.count_nonzero(clean_b & (counts_b == connect - 1)))

        bonus = _center_bonus(snapshot.width)
        grid = snapshot.grid
        score += w.center_weight * float(((grid == Team.A.value) * bonus).sum()
                                         - ((grid == Team.B.value) * bonus).sum())
        return float(score)

    def _window_counts(self, snapshot: BoardSnapshot):
        rows, cols = _window_index(snapshot.width, snapshot.height, snapshot.connect)
        cells = snapshot.grid[rows, cols]
        counts_a = (cells == Team.A.value).sum(axis=1)
        counts_b = (cells == Team.B.value).sum(axis=1)
        return counts_a, counts_b, snapshot.connect

    def _probability_for_a(self, snapshot: BoardSnapshot) -> float:
        counts_a, counts_b, connect = self._window_counts(snapshot)

        if np.any(counts_a == connect):
            return 1.0
        if np.any(counts_b == connect):
            return 0.0
        if snapshot.is_full():
            return NEUTRAL

        score = self._signed_score(snapshot, counts_a, counts_b, connect)
        # Same curve as 1 / (1 + exp(-score / scale)) without overflowing on long boards
        return 0.5 * (1.0 + math.tanh(score / (2.0 * self.weights.scale)))
