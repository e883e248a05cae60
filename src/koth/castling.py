"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Flag, auto
from typing import Self

from src.koth.pieces import Color
from src.koth.square import Square


class CastlingDirection(Flag):
    """
    The four castling directions.

    As a Flag, a combination of members doubles as the 4-bit castling rights mask of a position.
    Rights only ever get removed from that mask.
    """

    WHITE_KING_SIDE = auto()
    WHITE_QUEEN_SIDE = auto()
    BLACK_KING_SIDE = auto()
    BLACK_QUEEN_SIDE = auto()


NO_CASTLING = CastlingDirection(0)
ALL_CASTLING = (
    CastlingDirection.WHITE_KING_SIDE
    | CastlingDirection.WHITE_QUEEN_SIDE
    | CastlingDirection.BLACK_KING_SIDE
    | CastlingDirection.BLACK_QUEEN_SIDE
)

# Encodings in FEN string, in the order they are written
CASTLING_TO_FEN: dict[CastlingDirection, str] = {
    CastlingDirection.WHITE_KING_SIDE: "K",
    CastlingDirection.WHITE_QUEEN_SIDE: "Q",
    CastlingDirection.BLACK_KING_SIDE: "k",
    CastlingDirection.BLACK_QUEEN_SIDE: "q",
}

COLOR_CASTLING: dict[Color, CastlingDirection] = {
    Color.WHITE: CastlingDirection.WHITE_KING_SIDE
    | CastlingDirection.WHITE_QUEEN_SIDE,
    Color.BLACK: CastlingDirection.BLACK_KING_SIDE
    | CastlingDirection.BLACK_QUEEN_SIDE,
}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.

    * `between`: squares that must be empty (everything in between king and rook)
    * `king_path`: squares the king steps through, destination included. None of them may be attacked.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    between: tuple[Square, ...]
    king_path: tuple[Square, ...]

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        between = squares_between_on_rank(king_from, rook_from)
        king_path = squares_between_on_rank(king_from, king_to) + (king_to,)
        return cls(king_from, king_to, rook_from, rook_to, between, king_path)


def squares_between_on_rank(from_square: Square, to_square: Square) -> tuple[Square, ...]:
    """Squares strictly in between two squares of the same rank, walking from `from_square` towards `to_square`"""
    if from_square.rank != to_square.rank:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )
    step = 1 if to_square.file > from_square.file else -1
    return tuple(
        Square(file, from_square.rank)
        for file in range(from_square.file + step, to_square.file, step)
    )


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def castling_directions(color: Color) -> list[CastlingDirection]:
    """The two castling directions (king side first) belonging to a color"""
    return [
        direction for direction in CASTLING_RULES if direction in COLOR_CASTLING[color]
    ]


def castling_from_fen(castle_fen: str) -> CastlingDirection:
    """parse the part of the FEN string that encodes castling rights"""
    rights = NO_CASTLING
    for direction, char in CASTLING_TO_FEN.items():
        if char in castle_fen:
            rights |= direction
    return rights


def castling_to_fen(castling_rights: CastlingDirection) -> str:
    """create the part of the FEN string that encodes castling rights"""
    castling_chars = "".join(
        char for direction, char in CASTLING_TO_FEN.items() if direction in castling_rights
    )
    return castling_chars or "-"
