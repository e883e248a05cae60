"""Protocol repository + the in-memory implementation used by the service (games only live as long as the process)"""

from typing import Protocol
from uuid import UUID, uuid4

from src.core.models import GameModel


class GameRepository(Protocol):
    """Storage of game records"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the record of an existing game."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...


class InMemoryGameRepository:
    """Game records kept in a dictionary, keyed by game ID."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def get_game(self, game_id: UUID) -> GameModel | None:
        return self._games.get(game_id)

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        self._games.clear()
