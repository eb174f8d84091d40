import pytest

from gamescloset.game.board import Board
from tests.helpers import ScriptedAI


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def scripted_ai():
    """Opponent that never plays column 3."""
    return ScriptedAI(avoid={3})
