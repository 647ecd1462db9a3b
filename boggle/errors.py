USAGE = "USAGE: boggle dictionary board"


class BoggleError(Exception):
    """Base class for errors surfaced to callers of the solver."""


class BoardSizeError(BoggleError, ValueError):
    """The board is smaller than 3 x 3 or its rows are not all the same length."""


class UsageError(BoggleError):
    def __init__(self, message: str = USAGE):
        super().__init__(message)
