"""Unit tests for /src/koth/square.py"""

from string import ascii_lowercase

import pytest

from src.core.exceptions import InvalidSquareError
from src.koth.square import BOARD_DIMENSIONS, HILL_SQUARES, Square


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{8 - rank}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """'a8' is the top left corner of the grid (0, 0), 'h1' is the bottom right corner (7, 7)"""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{8 - rank}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    square = Square(file, rank)
    assert square.to_algebraic() == notation


def test_back_ranks() -> None:
    """Rank 0 is black's back rank, rank 7 is white's"""
    assert Square.from_algebraic("e8") == Square(4, 0)
    assert Square.from_algebraic("e1") == Square(4, 7)


@pytest.mark.parametrize("invalid", ["", "e", "i1", "a0", "a9", "e44", "E4", "44"])
def test_invalid_algebraic_notation(invalid: str) -> None:
    with pytest.raises(InvalidSquareError):
        Square.from_algebraic(invalid)


def test_square_within_bounds() -> None:
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            assert Square(file, rank).is_within_bounds()


def test_square_out_of_bounds() -> None:
    assert not Square(BOARD_DIMENSIONS[0], BOARD_DIMENSIONS[1]).is_within_bounds()
    assert not Square(-1, 0).is_within_bounds()
    assert not Square(0, -1).is_within_bounds()


def test_offset() -> None:
    assert Square.from_algebraic("e2").offset(0, -2) == Square.from_algebraic("e4")
    assert not Square.from_algebraic("h1").offset(1, 0).is_within_bounds()


def test_hill_squares_are_the_center() -> None:
    assert {square.to_algebraic() for square in HILL_SQUARES} == {"d4", "e4", "d5", "e5"}
