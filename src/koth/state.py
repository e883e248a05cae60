"""
Representation of a single position: every fact the rules need to continue the game from here.
"""

from dataclasses import dataclass, replace
from typing import Self

from src.koth.board import STARTING_PLACEMENT, Board
from src.koth.castling import ALL_CASTLING, CastlingDirection
from src.koth.pieces import Color
from src.koth.square import Square


@dataclass
class BoardState:
    """
    Snapshot of one position.
    ----

    * The king squares are tracked explicitly and updated on every king move (never found by scanning the board).
    * En passant masks: bit `f` set means a pawn of that color just advanced two squares on file `f`.
      Both masks only describe the immediately preceding move.
    * Check flags say whether that color's king is attacked right now,
      the counters say how often that color has been put in check during the game (they never decrease).
    * The won flags are set by the session once a terminal position is reached.

    Legality checks simulate moves on a `clone()`, which must never be written back into the live state.
    """

    board: Board
    side_to_move: Color
    white_king_pos: Square
    black_king_pos: Square
    castling_rights: CastlingDirection = ALL_CASTLING
    en_passant_white: int = 0
    en_passant_black: int = 0
    white_check: bool = False
    black_check: bool = False
    white_checks_received: int = 0
    black_checks_received: int = 0
    white_won: bool = False
    black_won: bool = False

    @classmethod
    def starting_position(cls) -> Self:
        """White to move, all castling rights, no checks and no en passant"""
        return cls(
            board=Board.from_fen(STARTING_PLACEMENT),
            side_to_move=Color.WHITE,
            white_king_pos=Square.from_algebraic("e1"),
            black_king_pos=Square.from_algebraic("e8"),
        )

    def clone(self) -> Self:
        return replace(self, board=self.board.copy())

    def king_position(self, color: Color) -> Square:
        return self.white_king_pos if color == Color.WHITE else self.black_king_pos

    def set_king_position(self, color: Color, square: Square) -> None:
        if color == Color.WHITE:
            self.white_king_pos = square
        else:
            self.black_king_pos = square

    def is_checked(self, color: Color) -> bool:
        return self.white_check if color == Color.WHITE else self.black_check

    def checks_received(self, color: Color) -> int:
        return (
            self.white_checks_received
            if color == Color.WHITE
            else self.black_checks_received
        )

    def en_passant_mask(self, color: Color) -> int:
        return self.en_passant_white if color == Color.WHITE else self.en_passant_black

    def mark_en_passant(self, color: Color, file: int) -> None:
        if color == Color.WHITE:
            self.en_passant_white |= 1 << file
        else:
            self.en_passant_black |= 1 << file

    def clear_en_passant(self) -> None:
        self.en_passant_white = 0
        self.en_passant_black = 0

    def revoke_castling_rights(self, directions: CastlingDirection) -> None:
        self.castling_rights &= ~directions
