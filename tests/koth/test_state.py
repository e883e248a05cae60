"""Unit tests for /src/koth/state.py"""

from src.koth.castling import ALL_CASTLING, CastlingDirection
from src.koth.pieces import Color
from src.koth.square import Square
from src.koth.state import BoardState


def test_starting_position(starting_state: BoardState) -> None:
    assert starting_state.side_to_move == Color.WHITE
    assert starting_state.king_position(Color.WHITE) == Square.from_algebraic("e1")
    assert starting_state.king_position(Color.BLACK) == Square.from_algebraic("e8")
    assert starting_state.castling_rights == ALL_CASTLING
    assert starting_state.en_passant_mask(Color.WHITE) == 0
    assert starting_state.en_passant_mask(Color.BLACK) == 0
    assert not starting_state.is_checked(Color.WHITE)
    assert not starting_state.is_checked(Color.BLACK)
    assert starting_state.checks_received(Color.WHITE) == 0
    assert starting_state.checks_received(Color.BLACK) == 0
    assert not starting_state.white_won and not starting_state.black_won


def test_clone_is_independent(starting_state: BoardState) -> None:
    """Changes to a clone never leak into the state it was cloned from (board included)"""
    clone = starting_state.clone()
    assert clone == starting_state

    clone.board.move_piece(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    clone.set_king_position(Color.WHITE, Square.from_algebraic("e2"))
    clone.mark_en_passant(Color.WHITE, 4)
    clone.revoke_castling_rights(CastlingDirection.WHITE_KING_SIDE)
    clone.black_checks_received = 2

    assert starting_state == BoardState.starting_position()
    assert clone != starting_state


def test_en_passant_masks(starting_state: BoardState) -> None:
    starting_state.mark_en_passant(Color.BLACK, 3)
    assert starting_state.en_passant_mask(Color.BLACK) == 1 << 3
    assert starting_state.en_passant_mask(Color.WHITE) == 0

    starting_state.clear_en_passant()
    assert starting_state.en_passant_mask(Color.BLACK) == 0


def test_revoking_castling_rights(starting_state: BoardState) -> None:
    starting_state.revoke_castling_rights(CastlingDirection.BLACK_QUEEN_SIDE)
    assert CastlingDirection.BLACK_QUEEN_SIDE not in starting_state.castling_rights
    assert CastlingDirection.BLACK_KING_SIDE in starting_state.castling_rights

    # revoking twice changes nothing
    starting_state.revoke_castling_rights(CastlingDirection.BLACK_QUEEN_SIDE)
    assert starting_state.castling_rights == (
        ALL_CASTLING & ~CastlingDirection.BLACK_QUEEN_SIDE
    )
