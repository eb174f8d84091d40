"""Tests for AIPlayer move selection."""

import logging

import pytest

from gamescloset.ai.evaluator import Evaluator, EvaluatorWeights
from gamescloset.ai.player import AIPlayer
from gamescloset.debug import debug, DebugLevel
from gamescloset.exceptions import NoLegalMove
from gamescloset.game.board import Board
from gamescloset.utils import Team
from tests.helpers import DRAW_SEQUENCE, play


def test_opening_move_prefers_centre():
    player = AIPlayer()
    assert player.choose_move(Board().snapshot(), Team.A) == 3


def test_ties_go_to_lowest_column():
    """With no centre bonus every opening scores 0.5, so column 0 wins the tie."""
    player = AIPlayer(Evaluator(EvaluatorWeights(center_weight=0.0)))
    snapshot = Board().snapshot()

    ranked = player.rank_moves(snapshot, Team.A)
    assert [p for _, p in ranked] == [0.5] * 7
    assert player.choose_move(snapshot, Team.A) == 0


def test_choose_move_is_deterministic():
    player = AIPlayer()
    snapshot = play([3, 2, 3, 4, 1]).snapshot()

    first = player.choose_move(snapshot, Team.B)
    for _ in range(5):
        assert player.choose_move(snapshot, Team.B) == first
    assert AIPlayer().choose_move(snapshot, Team.B) == first


def test_choose_move_leaves_snapshot_alone():
    board = play([3, 3, 4])
    snapshot = board.snapshot()

    AIPlayer().choose_move(snapshot, Team.B)

    assert board.snapshot() == snapshot
    assert snapshot.moves == board.moves
    assert snapshot.current_team == Team.B


def test_blocks_open_vertical_three():
    snapshot = play([3, 0, 3, 0, 3]).snapshot()
    assert AIPlayer().choose_move(snapshot, Team.B) == 3


def test_takes_immediate_win_over_block():
    """B can complete column 0; that beats blocking A's row."""
    snapshot = play([6, 0, 6, 0, 5, 0, 4]).snapshot()
    assert AIPlayer().choose_move(snapshot, Team.B) == 0


def test_rank_moves_covers_legal_columns_only():
    board = play([2] * 6)
    ranked = AIPlayer().rank_moves(board.snapshot(), Team.A)
    assert [column for column, _ in ranked] == [0, 1, 3, 4, 5, 6]
    assert all(0.0 <= p <= 1.0 for _, p in ranked)


def test_full_board_raises_no_legal_move():
    snapshot = play(DRAW_SEQUENCE).snapshot()
    with pytest.raises(NoLegalMove):
        AIPlayer().choose_move(snapshot, Team.A)


def test_positions_evaluated_counter():
    player = AIPlayer()
    player.choose_move(Board().snapshot(), Team.A)
    assert player.positions_evaluated == 7


def test_choose_move_is_timed(caplog):
    previous = debug.level
    try:
        debug.configure(level=DebugLevel.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="gamescloset"):
            AIPlayer().choose_move(Board().snapshot(), Team.A)
    finally:
        debug.configure(level=previous)

    assert "[ai] Performance [choose_move]" in caplog.text
