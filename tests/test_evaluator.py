"""Tests for the heuristic Evaluator."""

import random

import numpy as np
import pytest

from gamescloset.ai.evaluator import Evaluator, EvaluatorWeights
from gamescloset.game.board import Board
from gamescloset.utils import Team
from tests.helpers import DRAW_SEQUENCE, VERTICAL_WIN, make_board, play


@pytest.fixture
def evaluator():
    return Evaluator()


def random_positions(seed, games=20):
    """Yield snapshots from random games, including terminal ones."""
    rng = random.Random(seed)
    for _ in range(games):
        board = Board()
        yield board.snapshot()
        while True:
            column = rng.choice(sorted(board.legal_columns()))
            board.drop(column)
            yield board.snapshot()
            if board.check_terminal().is_game_over():
                break


def test_empty_board_is_neutral(evaluator):
    snapshot = Board().snapshot()
    assert evaluator.evaluate(snapshot, Team.A) == 0.5
    assert evaluator.evaluate(snapshot, Team.B) == 0.5
    assert evaluator.score(snapshot) == 0.0


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_complement_law(evaluator, seed):
    """p(A) + p(B) == 1 for every position reached in play."""
    for snapshot in random_positions(seed):
        p_a = evaluator.evaluate(snapshot, Team.A)
        p_b = evaluator.evaluate(snapshot, Team.B)
        assert 0.0 <= p_a <= 1.0
        assert p_a + p_b == pytest.approx(1.0)
        assert p_b == 1.0 - p_a


def test_complement_law_with_custom_weights():
    evaluator = Evaluator(EvaluatorWeights(two_weight=2.0, three_weight=10.0,
                                           center_weight=0.0, scale=3.0))
    for snapshot in random_positions(7, games=5):
        assert evaluator.evaluate(snapshot, Team.A) + \
            evaluator.evaluate(snapshot, Team.B) == pytest.approx(1.0)


def test_win_is_certain(evaluator):
    snapshot = play(VERTICAL_WIN).snapshot()
    assert evaluator.evaluate(snapshot, Team.A) == 1.0
    assert evaluator.evaluate(snapshot, Team.B) == 0.0


def test_draw_is_half(evaluator):
    snapshot = play(DRAW_SEQUENCE).snapshot()
    assert evaluator.evaluate(snapshot, Team.A) == 0.5
    assert evaluator.evaluate(snapshot, Team.B) == 0.5


def test_three_outweighs_two(evaluator):
    """Closer-to-complete lines raise the estimate for their owner."""
    two = play([0, 6, 1, 6]).snapshot()
    three = play([0, 6, 1, 6, 2, 5]).snapshot()

    assert evaluator.evaluate(two, Team.A) > 0.5
    assert evaluator.score(three) > evaluator.score(two)
    assert evaluator.evaluate(three, Team.B) < 0.5


def test_centre_disc_preferred(evaluator):
    centre = play([3]).snapshot()
    edge = play([0]).snapshot()
    assert evaluator.evaluate(centre, Team.A) > evaluator.evaluate(edge, Team.A)
    assert evaluator.evaluate(edge, Team.A) == 0.5


@pytest.mark.parametrize("owner", ["A", "B"])
def test_lopsided_wide_board_stays_a_probability(evaluator, owner):
    """A score far past the range of exp() still maps into [0, 1]."""
    row = (owner * 3 + ".") * 250
    snapshot = make_board([row, row]).snapshot()
    assert abs(evaluator.score(snapshot)) / evaluator.weights.scale > 710

    p_a = evaluator.evaluate(snapshot, Team.A)
    p_b = evaluator.evaluate(snapshot, Team.B)

    assert 0.0 <= p_a <= 1.0
    assert 0.0 <= p_b <= 1.0
    assert p_a + p_b == 1.0
    assert (p_a > p_b) == (owner == "A")


def test_evaluate_does_not_touch_snapshot(evaluator):
    snapshot = play([3, 3, 4]).snapshot()
    grid_before = np.array(snapshot.grid)

    evaluator.evaluate(snapshot, Team.A)
    evaluator.evaluate(snapshot, Team.B)

    assert np.array_equal(snapshot.grid, grid_before)


def test_evaluate_rejects_live_board(evaluator):
    with pytest.raises(TypeError):
        evaluator.evaluate(Board(), Team.A)


def test_evaluate_rejects_empty_team(evaluator):
    with pytest.raises(ValueError):
        evaluator.evaluate(Board().snapshot(), Team.EMPTY)


@pytest.mark.parametrize("weights", [
    EvaluatorWeights(two_weight=4.0, three_weight=4.0),
    EvaluatorWeights(two_weight=-1.0),
    EvaluatorWeights(center_weight=-0.5),
    EvaluatorWeights(scale=0.0),
])
def test_invalid_weights(weights):
    with pytest.raises(ValueError):
        Evaluator(weights)
