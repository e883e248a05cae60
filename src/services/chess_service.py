"""Orchestration of communication from the API models to the game rules and the repository (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
)
from src.core.config import Settings
from src.core.exceptions import GameStateError, IllegalMoveError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.repository import GameRepository
from src.koth.fen import to_fen
from src.koth.game import GameSession, MoveResult, TurnPhase
from src.koth.square import Square

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a King of the Hill + Three-Check game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or Settings.from_env()

    # -- API logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game from the standard starting position, or from the supplied FEN."""
        checks_to_win = self.settings.checks_to_win
        session = (
            GameSession.from_fen(request.starting_fen, checks_to_win)
            if request.starting_fen
            else GameSession.new(checks_to_win)
        )
        stored_game, game_id = self.repo.create_game(session.to_model())
        logger.info("Created game %s from %s", game_id, stored_game.starting_fen)
        return self._create_game_response(game_id, session)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by a frontend to check when it is the player's turn for instance.
        """
        session = self._load_session(request.game_id)
        return self._create_game_response(request.game_id, session)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal destinations of the piece on the requested square (empty when it is not that piece's turn)."""
        session = self._load_session(request.game_id)
        destinations = session.legal_moves(Square.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=[square.to_algebraic() for square in destinations],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        session = self._load_session(request.game_id)
        if session.phase == TurnPhase.GAME_OVER:
            raise GameStateError(f"Game is over. status: {session.status}")

        result = session.try_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if result == MoveResult.REJECTED:
            raise IllegalMoveError(
                f"Move not allowed: {request.from_square}{request.to_square}"
            )

        self.repo.update_game(request.game_id, session.to_model())
        if session.winner is not None:
            logger.info(
                "Game %s finished: %s (%s wins)",
                request.game_id,
                session.status,
                session.winner.name.lower(),
            )
        return self._create_game_response(request.game_id, session)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _create_game_response(
        self, game_id: UUID, session: GameSession
    ) -> GameResponse:
        state = session.state
        return GameResponse(
            game_id=game_id,
            fen_state=to_fen(state),
            starting_state=session.starting_fen,
            side_to_move=Color[state.side_to_move.name],
            checks_received={
                Color.WHITE.value: state.white_checks_received,
                Color.BLACK.value: state.black_checks_received,
            },
            status=session.status,
            winner=Color[session.winner.name] if session.winner else None,
            move_history=[move.to_uci() for move in session.moves],
        )

    def _load_session(self, game_id: UUID) -> GameSession:
        return GameSession.from_model(
            self._fetch_game(game_id), self.settings.checks_to_win
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
