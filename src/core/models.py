"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/repository layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to each layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type alias to make GameModel easier to read
PieceColor = str


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, repository, and Game layers."""

    current_fen: str
    starting_fen: str
    moves_uci: list[str]
    status: str
    winner: Optional[PieceColor] = None
