"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates are zero-based and follow the layout of the board grid:
* file 0..7 is the a-file .. h-file
* rank 0 is the top row of the grid (black's back rank, the 8th rank), rank 7 is white's back rank (the 1st rank)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidSquareError

BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' is the top left corner of the grid (0, 0), 'h1' the bottom right one (7, 7)"""
        if not is_valid_algebraic(sq):
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square on the board.")
        file = ord(sq[0]) - ord("a")
        rank = BOARD_DIMENSIONS[1] - int(sq[1])
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{BOARD_DIMENSIONS[1] - self.rank}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        """The square reached by stepping df files and dr ranks (may lie off the board)"""
        return Square(self.file + df, self.rank + dr)


def is_valid_algebraic(sq: str) -> bool:
    """A letter for the file followed by a single digit for the rank"""
    if len(sq) != 2:
        return False
    file_char, rank_char = sq[0], sq[1]
    if file_char not in ascii_lowercase[: BOARD_DIMENSIONS[0]]:
        return False
    return rank_char.isdigit() and 1 <= int(rank_char) <= BOARD_DIMENSIONS[1]


# King of the Hill: a king standing on any of these wins the game
HILL_SQUARES: frozenset[Square] = frozenset(
    Square.from_algebraic(name) for name in ("d4", "e4", "d5", "e5")
)
