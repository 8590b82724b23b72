class GameError(Exception):
    pass


class LogicError(GameError):
    pass


class InvalidMoveError(GameError):
    pass


class OutOfRangeError(InvalidMoveError, IndexError):
    pass


class CellOccupiedError(InvalidMoveError):
    pass


class InvalidDifficultyError(GameError, ValueError):
    pass


class NoLegalMovesError(LogicError):
    pass


class InvariantViolationError(LogicError):
    pass
