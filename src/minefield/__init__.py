"""
Minesweeper board module.

Provides the board model shared by the deduction engines: cell kinds,
the board grid with its adjacency, text parsing and the error taxonomy.
"""
from .cell import Cell, CellState, MAX_LABEL
from .board import Board, Position
from .errors import BoardError, ParseError, ConfigurationError

__all__ = [
    "Cell",
    "CellState",
    "MAX_LABEL",
    "Board",
    "Position",
    "BoardError",
    "ParseError",
    "ConfigurationError",
]
