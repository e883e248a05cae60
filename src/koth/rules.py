"""
The rules of King of the Hill + Three-Check chess.

Stateless functions operating on a BoardState:
* pseudo-legal move generation (movement rules per piece + castling)
* legality filtering: a move may not leave your own king in check
* applying a move, including the side effects of castling, en passant and lost castling rights
* check detection
* detecting the end of the game: checkmate, a king on the hill, or three checks received

Legality is decided by simulation only. Every candidate move is played on a clone of the state,
and the clone is thrown away as soon as its check flag has been read. There is no separate pin detection.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from src.core.exceptions import IllegalMoveError
from src.koth.castling import CASTLING_RULES, COLOR_CASTLING, castling_directions
from src.koth.moves import (
    MOVEMENT_RULES,
    PAWN_START_RANK,
    is_square_attacked,
)
from src.koth.pieces import PLAYER_COLORS, Color, Piece, PieceType, opponent_of
from src.koth.square import HILL_SQUARES, Square
from src.koth.state import BoardState

CHECKS_TO_WIN = 3


class TerminalReason(Enum):
    CHECKMATE = auto()
    KING_OF_THE_HILL = auto()
    THREE_CHECK = auto()


@dataclass(frozen=True)
class Outcome:
    winner: Color
    reason: TerminalReason


# --- MOVE GENERATION ---
def pseudo_legal_moves(piece: Piece, origin: Square, state: BoardState) -> list[Square]:
    """
    Destinations following the movement pattern of the piece and the basic occupancy rules.
    Kings also get their castling destinations.

    NOTE: Does not check whether the move leaves the mover's own king in check. See `legal_moves()`.
    """
    if piece.is_empty:
        return []
    destinations = MOVEMENT_RULES[piece.type](origin, state)
    if piece.type == PieceType.KING:
        destinations.extend(castling_destinations(piece.color, origin, state))
    return destinations


def legal_moves(piece: Piece, origin: Square, state: BoardState) -> list[Square]:
    """Pseudo-legal destinations that do not leave the mover's king in check (verified by playing them on a clone)"""
    return [
        destination
        for destination in pseudo_legal_moves(piece, origin, state)
        if not leaves_in_check(origin, destination, piece.color, state)
    ]


def leaves_in_check(
    origin: Square, destination: Square, color: Color, state: BoardState
) -> bool:
    """Simulate the move on a copy of the state and report whether `color` is in check afterwards"""
    simulated = state.clone()
    apply_move(origin, destination, simulated)
    return simulated.is_checked(color)


def castling_destinations(
    color: Color, origin: Square, state: BoardState
) -> list[Square]:
    """
    Castling destinations for the king of `color` standing on `origin`
    ---

    **you are allowed to castle if**

    * Castling rights in that direction are not yet revoked (and king and rook still stand on their home squares).
    * You are not currently in check (you cannot castle out of check).
    * All squares in between king and rook are empty.
    * None of the squares the king passes through, destination included, is under attack.
      Checked by moving the king to each of those squares on a copy of the state.
    """
    if state.is_checked(color):
        return []

    board = state.board
    own_rook = Piece(PieceType.ROOK, color)
    destinations: list[Square] = []
    for direction in castling_directions(color):
        if direction not in state.castling_rights:
            continue

        squares = CASTLING_RULES[direction]
        if origin != squares.king_from or board.piece(squares.rook_from) != own_rook:
            continue

        if any(not board.is_empty(square) for square in squares.between):
            continue

        if any(
            leaves_in_check(origin, square, color, state)
            for square in squares.king_path
        ):
            continue

        destinations.append(squares.king_to)
    return destinations


# --- APPLYING MOVES ---
def apply_move(origin: Square, destination: Square, state: BoardState) -> None:
    """
    Play a move on the given state (mutates it in place)
    ----

    1. Clear both en passant masks
    2. Side effects depending on the moving piece:
        * King: update the king square, revoke both castling rights of that color, move the rook along when castling
        * Pawn: a double step marks the file for en passant, a diagonal step onto an empty square takes en passant
        * Rook: leaving its home corner revokes the castling right of that side
    3. Move the piece
    4. Recompute both check flags (black first, then white)
    5. Count a check against every color whose check flag just turned on

    NOTE: The pair must come from `legal_moves()` for this exact state. Only an empty origin square gets rejected here,
    anything else breaks the invariants of the state silently. `game.try_move()` is the validating entry point.

    The side to move is NOT switched here: simulations need to play moves for a color without handing over the turn.
    """
    board = state.board
    piece = board.piece(origin)
    if piece.is_empty:
        raise IllegalMoveError(
            f"No piece on {origin.to_algebraic()} to move to {destination.to_algebraic()}"
        )

    state.clear_en_passant()

    if piece.type == PieceType.KING:
        _move_king_side_effects(piece.color, origin, destination, state)
    elif piece.type == PieceType.PAWN:
        _move_pawn_side_effects(piece.color, origin, destination, state)
    elif piece.type == PieceType.ROOK:
        _revoke_rook_castling_right(origin, state)

    # a rook captured on its home corner takes the castling right with it
    _revoke_rook_castling_right(destination, state)

    board.move_piece(origin, destination)
    refresh_check_flags(state)


def _move_king_side_effects(
    color: Color, origin: Square, destination: Square, state: BoardState
) -> None:
    state.set_king_position(color, destination)
    state.revoke_castling_rights(COLOR_CASTLING[color])

    for direction in castling_directions(color):
        squares = CASTLING_RULES[direction]
        if origin == squares.king_from and destination == squares.king_to:
            state.board.move_piece(squares.rook_from, squares.rook_to)
            break


def _move_pawn_side_effects(
    color: Color, origin: Square, destination: Square, state: BoardState
) -> None:
    board = state.board
    is_double_step = (
        origin.rank == PAWN_START_RANK[color]
        and abs(destination.rank - origin.rank) == 2
    )
    if is_double_step:
        state.mark_en_passant(color, origin.file)
    elif origin.file != destination.file and board.is_empty(destination):
        # en passant: the pawn taken stands next to the origin, on the destination's file
        board.remove_piece(Square(destination.file, origin.rank))


def _revoke_rook_castling_right(corner: Square, state: BoardState) -> None:
    for direction, squares in CASTLING_RULES.items():
        if corner == squares.rook_from:
            state.revoke_castling_rights(direction)


def refresh_check_flags(state: BoardState) -> None:
    """Recompute both check flags and count every check that was just delivered"""
    was_black_checked = state.black_check
    was_white_checked = state.white_check
    state.black_check = is_in_check(Color.BLACK, state)
    state.white_check = is_in_check(Color.WHITE, state)

    if state.black_check and not was_black_checked:
        state.black_checks_received += 1
    if state.white_check and not was_white_checked:
        state.white_checks_received += 1


# --- CHECKS AND THE END OF THE GAME ---
def is_in_check(color: Color, state: BoardState) -> bool:
    """Is the king of `color` attacked by any of the opponent's pieces?"""
    return is_square_attacked(state.king_position(color), opponent_of(color), state)


def king_on_hill(state: BoardState) -> Optional[Color]:
    """The color whose king occupies one of the four center squares, if any"""
    for color in PLAYER_COLORS:
        if state.king_position(color) in HILL_SQUARES:
            return color
    return None


def three_check_winner(
    state: BoardState, checks_to_win: int = CHECKS_TO_WIN
) -> Optional[Color]:
    """The opponent of a color that has been put in check `checks_to_win` times wins"""
    for color in PLAYER_COLORS:
        if state.checks_received(color) >= checks_to_win:
            return opponent_of(color)
    return None


def has_check_escape(color: Color, state: BoardState) -> bool:
    """
    Exhaustive search: is there any move for `color` after which it is not in check?
    Stops at the first one found.
    """
    board = state.board
    for origin in board.locate_color(color):
        piece = board.piece(origin)
        for destination in pseudo_legal_moves(piece, origin, state):
            if not leaves_in_check(origin, destination, color, state):
                return True
    return False


def is_checkmate_or_terminal(
    color: Color, state: BoardState, checks_to_win: int = CHECKS_TO_WIN
) -> bool:
    """
    Has the game ended, with `color` to move?
    ----

    * Either king on the hill: the game is over, no matter whose king it is.
    * Either side received enough checks: the game is over.
    * Otherwise it is over when `color` has no move that leaves it out of check.

    NOTE: Without draw rules, a side to move that has no moves at all (stalemate) ends the game the same way.
    """
    if king_on_hill(state) is not None:
        return True
    if three_check_winner(state, checks_to_win) is not None:
        return True
    return not has_check_escape(color, state)


def terminal_outcome(
    state: BoardState, checks_to_win: int = CHECKS_TO_WIN
) -> Optional[Outcome]:
    """Who won and why, judged for the side to move. None while the game goes on."""
    hill_color = king_on_hill(state)
    if hill_color is not None:
        return Outcome(hill_color, TerminalReason.KING_OF_THE_HILL)

    winner = three_check_winner(state, checks_to_win)
    if winner is not None:
        return Outcome(winner, TerminalReason.THREE_CHECK)

    if is_checkmate_or_terminal(state.side_to_move, state, checks_to_win):
        return Outcome(opponent_of(state.side_to_move), TerminalReason.CHECKMATE)
    return None
