"""
Engine errors.

Every error is raised before any state is touched, so a caller can catch it
and carry on with the same GameState.
"""


class GameError(ValueError):
    """Base class for all engine usage errors."""


# --- Construction ---

class InvalidDimensions(GameError):
    pass

class BoardTooSmall(InvalidDimensions):
    pass

class BoardTooLarge(InvalidDimensions):
    pass

class WinSequenceTooLong(InvalidDimensions):
    pass

class WinSequenceTooShort(InvalidDimensions):
    pass


# --- Moves ---

class IllegalMove(GameError):
    def __init__(self, column: int, message: str):
        super().__init__(message)
        self.column = column

class ColumnOutOfRange(IllegalMove):
    pass

class ColumnFull(IllegalMove):
    pass

class MoveAfterGameOver(IllegalMove):
    pass
