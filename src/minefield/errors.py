"""
Error taxonomy for board handling.

Parse errors stop a board from being built at all; configuration errors
are raised before any inference or encoding starts.
"""


class BoardError(ValueError):
    """Base class for malformed or inconsistent boards."""


class ParseError(BoardError):
    """Raised for invalid tokens, ragged rows or empty input."""


class ConfigurationError(BoardError):
    """Raised when a well-formed board cannot be queried.

    Covers a missing or duplicated probe and clue arithmetic that no
    assignment of mines can satisfy.
    """
