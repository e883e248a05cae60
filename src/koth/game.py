"""
The entrypoint into the domain layer for the caller (service layer / UI event handler).

* Four plain functions working on a caller owned BoardState: `new_game`, `legal_moves`, `try_move`, `is_terminal`
* The GameSession, which owns the live state and runs the turn protocol:

    AWAITING_SELECTION --select own piece--> PIECE_SELECTED --confirm candidate--> AWAITING_SELECTION (or GAME_OVER)

  Selecting another own piece while one is selected switches the selection,
  selecting any other square that is not a candidate drops it. There is no undo.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.core.models import GameModel
from src.core.shared_types import Status
from src.koth import rules
from src.koth.fen import parse_fen, to_fen
from src.koth.moves import Move
from src.koth.pieces import Color, opponent_of
from src.koth.rules import CHECKS_TO_WIN, Outcome, TerminalReason
from src.koth.square import Square
from src.koth.state import BoardState

logger = logging.getLogger(__name__)


class MoveResult(Enum):
    APPLIED = auto()
    REJECTED = auto()


class TurnPhase(Enum):
    AWAITING_SELECTION = auto()
    PIECE_SELECTED = auto()
    GAME_OVER = auto()


REASON_TO_STATUS: dict[TerminalReason, Status] = {
    TerminalReason.CHECKMATE: Status.CHECKMATE,
    TerminalReason.KING_OF_THE_HILL: Status.KING_OF_THE_HILL,
    TerminalReason.THREE_CHECK: Status.THREE_CHECK,
}


# --- ENGINE API FOR A CALLER OWNED STATE ---
def new_game() -> BoardState:
    """Standard starting position: white to move, all castling rights, zero checks, no en passant"""
    return BoardState.starting_position()


def legal_moves(square: Square, state: BoardState) -> list[Square]:
    """Legal destinations of the piece on `square`. Empty for an empty square or a piece of the side not to move."""
    piece = state.board.piece(square)
    if piece.is_empty or piece.color != state.side_to_move:
        return []
    return rules.legal_moves(piece, square, state)


def try_move(
    origin: Square,
    destination: Square,
    state: BoardState,
    checks_to_win: int = CHECKS_TO_WIN,
) -> MoveResult:
    """
    Validate and play a move, then hand the turn to the opponent.
    A rejected move leaves the state untouched. After an applied move, ask `is_terminal()` whether the game is over.
    Once the game is decided (won flags set, or a terminal position), every move is rejected.
    """
    if state.white_won or state.black_won:
        return MoveResult.REJECTED
    if rules.terminal_outcome(state, checks_to_win) is not None:
        return MoveResult.REJECTED
    if destination not in legal_moves(origin, state):
        return MoveResult.REJECTED

    rules.apply_move(origin, destination, state)
    state.side_to_move = opponent_of(state.side_to_move)
    return MoveResult.APPLIED


def is_terminal(state: BoardState, checks_to_win: int = CHECKS_TO_WIN) -> Optional[Color]:
    """The winner, if the game is over"""
    outcome = rules.terminal_outcome(state, checks_to_win)
    return outcome.winner if outcome else None


# --- LIVE GAME CONTEXT ---
@dataclass
class GameSession:
    state: BoardState
    starting_fen: str
    checks_to_win: int = CHECKS_TO_WIN
    moves: list[Move] = field(default_factory=list)
    phase: TurnPhase = TurnPhase.AWAITING_SELECTION
    selected: Optional[Square] = None
    candidates: list[Square] = field(default_factory=list)
    outcome: Optional[Outcome] = None

    @classmethod
    def new(cls, checks_to_win: int = CHECKS_TO_WIN) -> Self:
        state = new_game()
        return cls(state=state, starting_fen=to_fen(state), checks_to_win=checks_to_win)

    @classmethod
    def from_fen(cls, fen: str, checks_to_win: int = CHECKS_TO_WIN) -> Self:
        """Start from an arbitrary position. It might already be decided."""
        state = parse_fen(fen)
        session = cls(state=state, starting_fen=to_fen(state), checks_to_win=checks_to_win)
        session._evaluate_outcome()
        return session

    @classmethod
    def from_model(cls, model: GameModel, checks_to_win: int = CHECKS_TO_WIN) -> Self:
        """Rebuild a session from the transport model (the current FEN carries everything the rules need)"""
        session = cls(
            state=parse_fen(model.current_fen),
            starting_fen=model.starting_fen,
            checks_to_win=checks_to_win,
            moves=[Move.from_uci(uci) for uci in model.moves_uci],
        )
        session._evaluate_outcome()
        return session

    def to_model(self) -> GameModel:
        return GameModel(
            current_fen=to_fen(self.state),
            starting_fen=self.starting_fen,
            moves_uci=[move.to_uci() for move in self.moves],
            status=self.status.value,
            winner=self.winner.name.lower() if self.winner else None,
        )

    @property
    def winner(self) -> Optional[Color]:
        return self.outcome.winner if self.outcome else None

    @property
    def status(self) -> Status:
        if self.outcome is None:
            return Status.IN_PROGRESS
        return REASON_TO_STATUS[self.outcome.reason]

    def legal_moves(self, square: Square) -> list[Square]:
        if self.phase == TurnPhase.GAME_OVER:
            return []
        return legal_moves(square, self.state)

    def select(self, square: Square) -> bool:
        """
        Select the piece on `square` and compute its candidate destinations.
        Returns False (and drops any previous selection) when the square does not hold a piece of the side to move.
        """
        if self.phase == TurnPhase.GAME_OVER:
            logger.debug("Selection of %s ignored: game is over", square.to_algebraic())
            return False

        piece = self.state.board.piece(square)
        if piece.is_empty or piece.color != self.state.side_to_move:
            logger.debug("Selection of %s rejected", square.to_algebraic())
            self._clear_selection()
            return False

        self.selected = square
        self.candidates = legal_moves(square, self.state)
        self.phase = TurnPhase.PIECE_SELECTED
        return True

    def confirm(self, square: Square) -> MoveResult:
        """Move the selected piece to `square`, which must be one of its candidates"""
        if self.phase != TurnPhase.PIECE_SELECTED or square not in self.candidates:
            logger.debug("Confirmation of %s rejected", square.to_algebraic())
            return MoveResult.REJECTED

        # for the type checker: a piece is always selected in this phase
        assert self.selected is not None
        return self.try_move(self.selected, square)

    def handle_square(self, square: Square) -> MoveResult:
        """
        Single entry point for a click on the board:
        * a candidate of the current selection gets played
        * otherwise the click (re)selects a piece, or drops the selection

        Only reports APPLIED when a move was actually played.
        """
        if self.phase == TurnPhase.PIECE_SELECTED and square in self.candidates:
            return self.confirm(square)
        self.select(square)
        return MoveResult.REJECTED

    def try_move(self, origin: Square, destination: Square) -> MoveResult:
        """Validate and apply the move on the live state, then check whether the side now to move has lost"""
        move = Move(origin, destination)
        if self.phase == TurnPhase.GAME_OVER:
            logger.debug("Move %s rejected: game is over", move.to_uci())
            return MoveResult.REJECTED

        mover = self.state.side_to_move
        result = try_move(origin, destination, self.state, self.checks_to_win)
        if result == MoveResult.REJECTED:
            logger.debug("Move %s rejected for %s", move.to_uci(), mover.name.lower())
            return result

        self.moves.append(move)
        logger.info("%s played %s", mover.name.lower(), move.to_uci())
        self._clear_selection()
        self._evaluate_outcome()
        return result

    # -- PRIVATE HELPERS ---
    def _clear_selection(self) -> None:
        self.selected = None
        self.candidates = []
        if self.phase != TurnPhase.GAME_OVER:
            self.phase = TurnPhase.AWAITING_SELECTION

    def _evaluate_outcome(self) -> None:
        """Judge the position for the side to move and record the result on the live state"""
        outcome = rules.terminal_outcome(self.state, self.checks_to_win)
        if outcome is None:
            return

        self.outcome = outcome
        self.state.white_won = outcome.winner == Color.WHITE
        self.state.black_won = outcome.winner == Color.BLACK
        self.selected = None
        self.candidates = []
        self.phase = TurnPhase.GAME_OVER
        logger.info(
            "Game over: %s wins by %s",
            outcome.winner.name.lower(),
            outcome.reason.name.lower(),
        )
