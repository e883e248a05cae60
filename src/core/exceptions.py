"""Exceptions raised by the domain, service and API layers. All of them derive from GameError."""


class GameError(Exception):
    """Base class for anything that went wrong while playing a game"""


class GameStateError(GameError):
    """The game is not in a state that allows the requested action (ex. moving after the game ended)"""


class IllegalMoveError(GameError):
    """The requested move is not in the set of legal moves for the current position"""


class InvalidFENError(GameError):
    """A position string could not be interpreted"""


class InvalidSquareError(GameError):
    """A square name does not denote a square on the board"""


class InvalidRequestError(GameError):
    """Request data failed validation at the API boundary"""


class RepositoryError(GameError):
    """The requested record does not exist (or could not be stored)"""
