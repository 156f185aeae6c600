"""
Custom exceptions used across layers.

Everything derives from GameError, so a caller (or a test) that does not care about the specific failure can catch a single type.
"""


class GameError(Exception):
    """Top-level exception for anything the game core refuses to do."""


class InvalidConfigError(GameError):
    pass


class InvalidBoardError(GameError):
    pass


class GameStateError(GameError):
    """Raised when a stored session cannot be turned back into a consistent game."""


class MoveError(GameError):
    pass


class CellOccupiedError(MoveError):
    pass


class GameAlreadyDecidedError(MoveError):
    pass


class IndexOutOfRangeError(MoveError):
    pass


class InvalidRequestError(GameError):
    pass


class RepositoryError(GameError):
    pass
