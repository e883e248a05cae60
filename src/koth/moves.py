"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the pseudo-legal destination squares for each piece type.

Castling destinations and the legality filter (a move must not leave your own king in check) need move simulation,
which is done in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Self

from src.koth.pieces import Color, PieceType, opponent_of
from src.koth.square import Square
from src.koth.state import BoardState

Vector = tuple[int, int]

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = DIAGONALS + STRAIGHTS

# White moves UP the board (towards rank 0 of the grid), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
# The rank a pawn must stand on to take en passant (the opponent's pawn just landed next to it)
EN_PASSANT_RANK: dict[Color, int] = {Color.WHITE: 3, Color.BLACK: 4}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves, <from square><to square>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e1g1": the king castles king side
        """
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:4]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, state: BoardState, directions: list[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board. An opponent's piece is included (it can be captured), your own piece is not.
    """
    board = state.board
    player_color = board.piece(square).color

    destinations: list[Square] = []
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if not piece_found.is_empty:
                if piece_found.is_opponent_of(player_color):
                    destinations.append(target_square)
                break
            destinations.append(target_square)
            target_square = target_square.offset(df, dr)
    return destinations


def single_step_move(
    square: Square, state: BoardState, deltas: list[Vector]
) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    board = state.board
    player_color = board.piece(square).color
    destinations: list[Square] = []
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue
        if board.piece(target_square).color != player_color:
            destinations.append(target_square)
    return destinations


def candidate_pawn_moves(square: Square, state: BoardState) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares ahead are empty
    - takes diagonally
    - takes en passant: when the opponent's pawn just advanced two squares and landed right next to it

    NOTE: Promotion is not part of the rules here. A pawn that reached the final rank simply has no moves left.
    """
    board = state.board
    color = board.piece(square).color
    direction = PAWN_DIRECTION[color]
    destinations: list[Square] = []

    one_ahead = square.offset(0, direction)
    if not one_ahead.is_within_bounds():
        return destinations

    if board.is_empty(one_ahead):
        destinations.append(one_ahead)
        two_ahead = one_ahead.offset(0, direction)
        if square.rank == PAWN_START_RANK[color] and board.is_empty(two_ahead):
            destinations.append(two_ahead)

    # en passant context: the mask of the OTHER color tells which of their pawns just moved two squares
    opponent_mask = state.en_passant_mask(opponent_of(color))
    for df in (1, -1):
        target_square = square.offset(df, direction)
        if not target_square.is_within_bounds():
            continue
        is_capture = board.piece(target_square).is_opponent_of(color)
        is_en_passant = square.rank == EN_PASSANT_RANK[color] and bool(
            opponent_mask & (1 << target_square.file)
        )
        if is_capture or is_en_passant:
            destinations.append(target_square)
    return destinations


def candidate_knight_moves(square: Square, state: BoardState) -> list[Square]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, state, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, state: BoardState) -> list[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, state, DIAGONALS)


def candidate_rook_moves(square: Square, state: BoardState) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, state, STRAIGHTS)


def candidate_queen_moves(square: Square, state: BoardState) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, state, STRAIGHTS + DIAGONALS)


def candidate_king_moves(square: Square, state: BoardState) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (added by the rules, as it needs to simulate the king's path).
    """
    return single_step_move(square, state, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, BoardState], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_types: tuple[PieceType, ...],
    state: BoardState,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color that
    is allowed to move along the given directions?"_

    Only the first piece found along each direction matters.
    """
    board = state.board
    for df, dr in directions:
        target_square = square.offset(df, dr)
        while target_square.is_within_bounds():
            piece_found = board.piece(target_square)
            if not piece_found.is_empty:
                if piece_found.color == by_color and piece_found.type in by_piece_types:
                    return True
                break
            target_square = target_square.offset(df, dr)
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    state: BoardState,
    deltas: list[Vector],
) -> bool:
    """Equivalent of `raycasting_attack()` for the pieces that only move a single step along a direction"""
    for df, dr in deltas:
        target_square = square.offset(df, dr)
        if not target_square.is_within_bounds():
            continue
        piece_found = state.board.piece(target_square)
        if piece_found.color == by_color and piece_found.type == by_piece_type:
            return True
    return False


def is_attacked_by_pawn(square: Square, by_color: Color, state: BoardState) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric. To check if a white pawn (that moves UP the board) could take on the square,
    look one rank DOWN the board. Hence the deltas are exactly opposite to the capture direction.
    """
    back = -PAWN_DIRECTION[by_color]
    return single_step_attack(
        square, by_color, PieceType.PAWN, state, [(1, back), (-1, back)]
    )


def is_attacked_by_knight(square: Square, by_color: Color, state: BoardState) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, state, KNIGHT_DELTAS)


def is_attacked_by_king(square: Square, by_color: Color, state: BoardState) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, state, KING_DELTAS)


def is_attacked_diagonally(square: Square, by_color: Color, state: BoardState) -> bool:
    """Bishops and queens share the diagonals"""
    return raycasting_attack(
        square, by_color, (PieceType.BISHOP, PieceType.QUEEN), state, DIAGONALS
    )


def is_attacked_straight(square: Square, by_color: Color, state: BoardState) -> bool:
    """Rooks and queens share the ranks and files"""
    return raycasting_attack(
        square, by_color, (PieceType.ROOK, PieceType.QUEEN), state, STRAIGHTS
    )


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, BoardState], bool]
ATTACK_RULES: list[IsAttackedFn] = [
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_diagonally,
    is_attacked_straight,
    is_attacked_by_king,
]


def is_square_attacked(square: Square, by_color: Color, state: BoardState) -> bool:
    """Could any piece of `by_color` capture on this square right now?"""
    return any(rule(square, by_color, state) for rule in ATTACK_RULES)

