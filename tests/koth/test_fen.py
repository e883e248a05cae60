"""Unit tests for /src/koth/fen.py"""

import pytest

from src.core.exceptions import InvalidFENError
from src.koth.castling import ALL_CASTLING, NO_CASTLING, CastlingDirection
from src.koth.fen import (
    STARTING_FEN,
    is_valid_castling_rights,
    is_valid_en_passant,
    is_valid_position,
    parse_fen,
    split_fen,
    to_fen,
)
from src.koth.pieces import Color
from src.koth.square import Square
from src.koth.state import BoardState


# --- VALIDATORS ---
@pytest.mark.parametrize(
    "position, expected",
    [
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", True),
        ("8/8/8/8/8/8/8/8", True),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP", False),  # 7 ranks
        ("rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR", False),  # 9 files
        ("rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", False),  # 7 files
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX", False),  # unknown piece
    ],
)
def test_is_valid_position(position: str, expected: bool) -> None:
    assert is_valid_position(position) is expected


@pytest.mark.parametrize(
    "castling, expected",
    [("KQkq", True), ("-", True), ("Kk", True), ("qK", False), ("KK", False), ("", False), ("X", False)],
)
def test_is_valid_castling_rights(castling: str, expected: bool) -> None:
    assert is_valid_castling_rights(castling) is expected


@pytest.mark.parametrize(
    "en_passant, expected",
    [("-", True), ("e3", True), ("d6", True), ("e4", False), ("z3", False)],
)
def test_is_valid_en_passant(en_passant: str, expected: bool) -> None:
    assert is_valid_en_passant(en_passant) is expected


@pytest.mark.parametrize(
    "fen, counters, checks",
    [
        ("8/8/8/8/8/8/8/8 w - -", [], "+0+0"),
        ("8/8/8/8/8/8/8/8 w - - 0 1", ["0", "1"], "+0+0"),
        ("8/8/8/8/8/8/8/8 w - - +1+2", [], "+1+2"),
        ("8/8/8/8/8/8/8/8 w - - 12 40 +1+2", ["12", "40"], "+1+2"),
    ],
)
def test_split_fen(fen: str, counters: list[str], checks: str) -> None:
    fields, move_counters, check_counters = split_fen(fen)
    assert len(fields) == 4
    assert move_counters == counters
    assert check_counters == checks


# --- PARSING ---
def test_parse_starting_fen() -> None:
    assert parse_fen(STARTING_FEN) == BoardState.starting_position()


def test_parse_standard_fen() -> None:
    """Move clocks are accepted and dropped, missing check counters mean +0+0"""
    state = parse_fen("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert state == BoardState.starting_position()


def test_parse_check_counters() -> None:
    """The first number counts the checks delivered by white, i.e. received by black"""
    state = parse_fen("4k3/8/8/8/8/8/8/4K3 b - - 10 20 +2+1")
    assert state.black_checks_received == 2
    assert state.white_checks_received == 1
    assert state.side_to_move == Color.BLACK
    assert state.castling_rights == NO_CASTLING


def test_parse_derives_king_squares_and_flags() -> None:
    state = parse_fen("4k3/8/8/8/8/8/4r3/K7 w - - +0+1")
    assert state.white_king_pos == Square.from_algebraic("a1")
    assert state.black_king_pos == Square.from_algebraic("e8")
    assert not state.white_check

    state = parse_fen("4k3/8/8/8/8/8/r7/K7 w - - +0+1")
    assert state.white_check
    assert not state.black_check


def test_parse_en_passant() -> None:
    state = parse_fen("rnbqkbnr/pppp1ppp/8/8/3Pp3/8/PPP1PPPP/RNBQKBNR b KQkq d3 +0+0")
    assert state.en_passant_mask(Color.WHITE) == 1 << 3
    assert state.en_passant_mask(Color.BLACK) == 0

    state = parse_fen("rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 +0+0")
    assert state.en_passant_mask(Color.BLACK) == 1 << 3


def test_parse_partial_castling_rights() -> None:
    state = parse_fen("r3k3/8/8/8/8/8/8/4K2R w Kq - +0+0")
    assert state.castling_rights == (
        CastlingDirection.WHITE_KING_SIDE | CastlingDirection.BLACK_QUEEN_SIDE
    )


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - +0+0",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkqX - +0+0",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e5 +0+0",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 +0+0",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - a b",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - +0",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - +a+b",
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 +0+0 extra",
    ],
)
def test_invalid_syntax(invalid_fen: str) -> None:
    with pytest.raises(InvalidFENError):
        parse_fen(invalid_fen)


@pytest.mark.parametrize(
    "impossible_fen",
    [
        # no white king
        "4k3/8/8/8/8/8/8/8 w - - +0+0",
        # two black kings
        "4k2k/8/8/8/8/8/8/4K3 w - - +0+0",
        # castling right without the rook
        "4k3/8/8/8/8/8/8/4K3 w K - +0+0",
        # castling right with the king away from home
        "4k3/8/8/8/8/8/8/3K3R w K - +0+0",
        # en passant square while the same side is to move
        "rnbqkbnr/pppp1ppp/8/8/3Pp3/8/PPP1PPPP/RNBQKBNR w KQkq d3 +0+0",
        # en passant square without the pawn that just moved
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR b KQkq e3 +0+0",
        # black is in check, but white is to move
        "4k3/8/8/8/8/8/8/4RK2 w - - +0+0",
    ],
)
def test_impossible_positions(impossible_fen: str) -> None:
    with pytest.raises(InvalidFENError):
        parse_fen(impossible_fen)


# --- WRITING ---
def test_starting_position_to_fen() -> None:
    assert to_fen(BoardState.starting_position()) == STARTING_FEN


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_FEN,
        "rnbqkbnr/pppp1ppp/8/8/3Pp3/8/PPP1PPPP/RNBQKBNR b KQkq d3 +0+0",
        "rnbqkbnr/ppp1pppp/8/3pP3/8/8/PPPP1PPP/RNBQKBNR w KQkq d6 +1+2",
        "r3k3/8/8/8/8/8/8/4K2R w Kq - +0+0",
        "4k3/8/8/8/8/8/r7/K7 w - - +0+1",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert to_fen(parse_fen(fen)) == fen


def test_to_fen_after_moves() -> None:
    state = BoardState.starting_position()
    state.board.move_piece(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    state.mark_en_passant(Color.WHITE, 4)
    state.side_to_move = Color.BLACK
    state.castling_rights = ALL_CASTLING & ~CastlingDirection.WHITE_QUEEN_SIDE
    state.black_checks_received = 1
    assert to_fen(state) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b Kkq e3 +1+0"
