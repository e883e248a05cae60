"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    KING_OF_THE_HILL = "king of the hill"
    THREE_CHECK = "three check"


# --- The domain layer has its own Color (including NONE for an empty square). This one is for the API boundary only.
class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
