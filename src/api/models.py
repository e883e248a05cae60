"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status
from src.koth.square import is_valid_algebraic

PieceColor = str


def _validate_square_name(value: str) -> str:
    if not is_valid_algebraic(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        """Structural check only: 4 mandatory fields, optionally followed by the move clocks and/or the check counters"""
        if value is None:
            return value

        parts = value.strip().split()
        if not 4 <= len(parts) <= 7:
            raise InvalidRequestError(
                "FEN string must contain 4 to 7 space-separated parts."
            )
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    fen_state: str
    starting_state: str
    side_to_move: Color
    checks_received: dict[PieceColor, int]
    status: Status
    winner: Optional[Color]
    move_history: list[str]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    legal_moves: list[str]
