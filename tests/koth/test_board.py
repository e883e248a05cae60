"""Unit tests for /src/koth/board.py"""

import pytest

from src.koth.board import STARTING_PLACEMENT, Board
from src.koth.pieces import EMPTY, Color, Piece, PieceType
from src.koth.square import Square

EMPTY_PLACEMENT = "/".join(["8"] * 8)


@pytest.mark.parametrize(
    "placement",
    [
        STARTING_PLACEMENT,
        EMPTY_PLACEMENT,
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
        "4k3/8/8/3K4/8/8/8/8",
    ],
)
def test_placement_roundtrip(placement: str) -> None:
    assert Board.from_fen(placement).to_fen() == placement


def test_starting_placement_layout() -> None:
    board = Board.from_fen(STARTING_PLACEMENT)
    assert board.piece(Square.from_algebraic("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square.from_algebraic("d8")) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.rows[1] == [Piece(PieceType.PAWN, Color.BLACK)] * 8
    assert board.rows[6] == [Piece(PieceType.PAWN, Color.WHITE)] * 8
    assert all(board.is_empty(Square(file, 4)) for file in range(8))


def test_empty_board() -> None:
    board = Board.empty()
    assert all(piece == EMPTY for _, piece in board.squares())
    assert len(board.squares()) == 64


def test_place_and_remove_piece() -> None:
    board = Board.empty()
    d4 = Square.from_algebraic("d4")
    knight = Piece.from_fen("N")
    board.place_piece(knight, d4)
    assert board.piece(d4) == knight
    assert board.to_fen() == "8/8/8/8/3N4/8/8/8"

    board.remove_piece(d4)
    assert board.is_empty(d4)


def test_move_piece_overwrites_target() -> None:
    board = Board.from_fen("8/8/8/3p4/4P3/8/8/8")
    e4 = Square.from_algebraic("e4")
    d5 = Square.from_algebraic("d5")
    board.move_piece(e4, d5)
    assert board.is_empty(e4)
    assert board.piece(d5) == Piece.from_fen("P")


def test_locate_pieces() -> None:
    board = Board.from_fen(STARTING_PLACEMENT)
    assert board.locate_piece(Piece.from_fen("k")) == [Square.from_algebraic("e8")]
    assert len(board.locate_piece(Piece.from_fen("P"))) == 8
    assert len(board.locate_color(Color.WHITE)) == 16
    assert len(board.locate_color(Color.BLACK)) == 16


def test_copy_is_independent() -> None:
    board = Board.from_fen(STARTING_PLACEMENT)
    copied = board.copy()
    copied.move_piece(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    assert board.to_fen() == STARTING_PLACEMENT
    assert copied.to_fen() != STARTING_PLACEMENT


def test_display() -> None:
    """One line per rank, the 8th rank on top, dots for empty squares"""
    lines = str(Board.from_fen(STARTING_PLACEMENT)).splitlines()
    assert lines[0] == "r n b q k b n r"
    assert lines[3] == ". . . . . . . ."
    assert lines[7] == "R N B Q K B N R"
