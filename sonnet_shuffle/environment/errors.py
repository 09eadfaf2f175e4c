"""Exceptions raised by the puzzle core."""


class PuzzleError(Exception):
    """Base class for puzzle errors."""


class InvalidInput(PuzzleError, ValueError):
    """A canonical sequence or direct slot write is malformed."""


class Unavailable(PuzzleError, LookupError):
    """No sonnet yields enough non-empty lines to build a puzzle."""
