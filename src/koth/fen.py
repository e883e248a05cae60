"""
Reading and writing positions as FEN strings, extended with the Three-Check counters.

<board position string> <active color> <castling rights> <en passant square> [<half moves> <full moves>] [+W+B]

* The first four fields are the ones of standard FEN.
* The move clocks are accepted (so a standard FEN can be pasted in), but this variant has no draw rules, so they are not kept.
* `+W+B` counts the checks delivered so far by White and by Black. Left out, it means `+0+0`.

ex) The starting position as written by `to_fen()`:
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - +0+0
"""

import re

from src.core.exceptions import InvalidFENError
from src.koth.board import Board
from src.koth.castling import (
    CASTLING_RULES,
    castling_from_fen,
    castling_to_fen,
)
from src.koth.pieces import FEN_TO_PIECE, Color, Piece, PieceType, opponent_of
from src.koth.rules import is_in_check
from src.koth.square import BOARD_DIMENSIONS, Square, is_valid_algebraic
from src.koth.state import BoardState

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - +0+0"
CASTLING_CHARS = "KQkq"
CHECKS_PATTERN = re.compile(r"^\+(\d+)\+(\d+)$")

# en passant target square rank (as written in FEN) -> color of the pawn that just moved, and the color to move next
EN_PASSANT_TARGET_RANKS: dict[str, tuple[Color, Color]] = {
    "3": (Color.WHITE, Color.BLACK),
    "6": (Color.BLACK, Color.WHITE),
}


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """Either '-' or a selection of KQkq, written in that order"""
    if castling == "-":
        return True
    in_order = "".join(char for char in CASTLING_CHARS if char in castling)
    return bool(castling) and castling == in_order


def is_valid_en_passant(en_passant: str) -> bool:
    return en_passant == "-" or (
        is_valid_algebraic(en_passant) and en_passant[1] in EN_PASSANT_TARGET_RANKS
    )


def is_valid_move_counter(counter: str) -> bool:
    return counter.isdigit()


def split_fen(fen: str) -> tuple[list[str], list[str], str]:
    """Separate the four mandatory fields, the (optional) move clocks and the (optional) check counters"""
    parts = fen.split()
    if not 4 <= len(parts) <= 7:
        raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")

    fields, rest = parts[:4], parts[4:]
    checks = "+0+0"
    if rest and rest[-1].startswith("+"):
        checks = rest.pop()
    if len(rest) not in (0, 2) or not all(is_valid_move_counter(c) for c in rest):
        raise InvalidFENError(f"Invalid move counters in FEN: {fen}")
    return fields, rest, checks


def parse_fen(fen: str) -> BoardState:
    """
    Parse the FEN into a BoardState
    ----

    Besides the syntax, the position itself must make sense for the rules to work on it:
    * exactly one king of each color
    * castling rights only where king and rook still stand on their home squares
    * an en passant square right behind a pawn of the color that just moved
    * the side that just moved is not in check

    The check flags are derived from the position.
    """
    (position, active_color, castling_str, en_passant_algebraic), _, checks = split_fen(fen)

    if not is_valid_position(position):
        raise InvalidFENError(f"Invalid board position in FEN: {fen}")
    if not is_valid_color_code(active_color):
        raise InvalidFENError(f"Invalid active color in FEN: {fen}")
    if not is_valid_castling_rights(castling_str):
        raise InvalidFENError(f"Invalid castling rights in FEN: {fen}")
    if not is_valid_en_passant(en_passant_algebraic):
        raise InvalidFENError(f"Invalid en passant square in FEN: {fen}")
    checks_match = CHECKS_PATTERN.match(checks)
    if checks_match is None:
        raise InvalidFENError(f"Invalid check counters in FEN: {fen}")

    board = Board.from_fen(position)
    white_king_pos = _locate_single_king(board, Color.WHITE, fen)
    black_king_pos = _locate_single_king(board, Color.BLACK, fen)

    state = BoardState(
        board=board,
        side_to_move=Color.WHITE if active_color == "w" else Color.BLACK,
        white_king_pos=white_king_pos,
        black_king_pos=black_king_pos,
        castling_rights=castling_from_fen(castling_str),
        # checks delivered BY white are checks received by black, and vice versa
        black_checks_received=int(checks_match.group(1)),
        white_checks_received=int(checks_match.group(2)),
    )
    _check_castling_rights(state, fen)
    _set_en_passant(state, en_passant_algebraic, fen)

    state.white_check = is_in_check(Color.WHITE, state)
    state.black_check = is_in_check(Color.BLACK, state)
    if state.is_checked(opponent_of(state.side_to_move)):
        raise InvalidFENError(f"The side that just moved cannot be in check: {fen}")
    return state


def to_fen(state: BoardState) -> str:
    """reverse operation: write a FEN (without move clocks, with check counters) from the given state"""
    active_color = "w" if state.side_to_move == Color.WHITE else "b"
    castling_str = castling_to_fen(state.castling_rights)
    en_passant_algebraic = _en_passant_to_fen(state)
    checks = f"+{state.black_checks_received}+{state.white_checks_received}"
    return f"{state.board.to_fen()} {active_color} {castling_str} {en_passant_algebraic} {checks}"


def _locate_single_king(board: Board, color: Color, fen: str) -> Square:
    kings = board.locate_piece(Piece(PieceType.KING, color))
    if len(kings) != 1:
        raise InvalidFENError(
            f"Expected exactly one {color.name.lower()} king, found {len(kings)}: {fen}"
        )
    return kings[0]


def _check_castling_rights(state: BoardState, fen: str) -> None:
    """A castling right without the king and rook on their home squares describes an impossible position"""
    for direction, squares in CASTLING_RULES.items():
        if direction not in state.castling_rights:
            continue
        color = Color.WHITE if squares.king_from.rank == 7 else Color.BLACK
        king = state.board.piece(squares.king_from)
        rook = state.board.piece(squares.rook_from)
        if king != Piece(PieceType.KING, color) or rook != Piece(PieceType.ROOK, color):
            raise InvalidFENError(
                f"Castling right {direction.name} without king and rook on their home squares: {fen}"
            )


def _set_en_passant(state: BoardState, en_passant_algebraic: str, fen: str) -> None:
    """Translate the FEN target square into the en passant mask of the color that just moved its pawn"""
    if en_passant_algebraic == "-":
        return

    pawn_color, color_to_move = EN_PASSANT_TARGET_RANKS[en_passant_algebraic[1]]
    target = Square.from_algebraic(en_passant_algebraic)
    # the pawn passed the target square, so it stands one step further in its own direction
    step = -1 if pawn_color == Color.WHITE else 1
    pawn_square = target.offset(0, step)
    if (
        state.side_to_move != color_to_move
        or state.board.piece(pawn_square) != Piece(PieceType.PAWN, pawn_color)
        or not state.board.is_empty(target)
    ):
        raise InvalidFENError(f"En passant square does not match the position: {fen}")
    state.mark_en_passant(pawn_color, target.file)


def _en_passant_to_fen(state: BoardState) -> str:
    for color, target_rank in ((Color.WHITE, 5), (Color.BLACK, 2)):
        mask = state.en_passant_mask(color)
        if mask:
            return Square(mask.bit_length() - 1, target_rank).to_algebraic()
    return "-"
