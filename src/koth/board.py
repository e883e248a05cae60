"""The Game board: an 8x8 grid of piece codes (the piece placement part of a position)"""

from dataclasses import dataclass
from typing import Self

from src.koth.pieces import EMPTY, Color, Piece
from src.koth.square import BOARD_DIMENSIONS, Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass
class Board:
    """Row-major grid, indexed as `rows[rank][file]`. Rank 0 is black's back rank."""

    rows: list[list[Piece]]

    @classmethod
    def empty(cls) -> Self:
        num_files, num_ranks = BOARD_DIMENSIONS
        return cls([[EMPTY] * num_files for _ in range(num_ranks)])

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, written from the a-file to the h-file
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        FEN lists the 8th rank first, which is exactly the top row (rank 0) of the grid.
        """
        board = cls.empty()
        for rank, fen_one_rank in enumerate(fen_str.split("/")):
            file = 0
            for character in fen_one_rank:
                if character.isalpha():
                    board.rows[rank][file] = Piece.from_fen(character)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in self.rows)

    @staticmethod
    def _rank_to_fen(row: list[Piece]) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece.is_empty:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def __str__(self) -> str:
        """Human readable grid, one rank per line (8th rank on top), '.' for an empty square"""
        return "\n".join(
            " ".join("." if piece.is_empty else piece.to_fen() for piece in row)
            for row in self.rows
        )

    def copy(self) -> Self:
        """Rows are copied, pieces are immutable values and can be shared"""
        return type(self)([row.copy() for row in self.rows])

    def piece(self, square: Square) -> Piece:
        return self.rows[square.rank][square.file]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square).is_empty

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.rows[square.rank][square.file] = piece

    def remove_piece(self, square: Square) -> None:
        self.rows[square.rank][square.file] = EMPTY

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Plain relocation: whatever stood on the target square is overwritten"""
        self.place_piece(self.piece(from_square), to_square)
        self.remove_piece(from_square)

    def locate_piece(self, piece: Piece) -> list[Square]:
        return [square for square, found in self.squares() if found == piece]

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.squares() if piece.color == color]

    def squares(self) -> list[tuple[Square, Piece]]:
        """Every square of the board with the piece standing on it, 8th rank first"""
        return [
            (Square(file, rank), piece)
            for rank, row in enumerate(self.rows)
            for file, piece in enumerate(row)
        ]
