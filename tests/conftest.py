"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.koth.game import GameSession, MoveResult
from src.koth.moves import Move
from src.koth.state import BoardState


@pytest.fixture
def starting_state() -> BoardState:
    return BoardState.starting_position()


@pytest.fixture
def new_session() -> GameSession:
    return GameSession.new()


@pytest.fixture
def play_moves() -> Callable[[GameSession, list[str]], GameSession]:
    """Call the inner function with a session and a list of UCI moves. Every one of them must be accepted."""

    def _play(session: GameSession, moves_uci: list[str]) -> GameSession:
        for uci in moves_uci:
            move = Move.from_uci(uci)
            result = session.try_move(move.from_square, move.to_square)
            assert result == MoveResult.APPLIED, f"move {uci} was rejected"
        return session

    return _play
