"""Piece codes: the species and color of whatever stands on a square (EMPTY included)"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()


PLAYER_COLORS: tuple[Color, Color] = (Color.WHITE, Color.BLACK)


def opponent_of(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    """A piece code: species + color. Immutable, so the same value can sit in many board copies at once."""

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, symbol: str) -> Self:
        """FEN letter: upper case for white, lower case for black"""
        return cls(
            FEN_TO_PIECE[symbol.lower()],
            Color.WHITE if symbol.isupper() else Color.BLACK,
        )

    def to_fen(self) -> str:
        symbol = PIECE_TO_FEN[self.type]
        return symbol.upper() if self.color == Color.WHITE else symbol

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    def is_opponent_of(self, color: Color) -> bool:
        """An empty square belongs to nobody, so it is never an opponent"""
        return not self.is_empty and self.color != color


EMPTY = Piece(PieceType.EMPTY, Color.NONE)
