"""
Cell module for Minesweeper boards.

Represents the state of a single board cell as read from a puzzle
description: covered, mine, safe, probe or a numbered clue.
"""
from dataclasses import dataclass
from enum import Enum, auto

from .errors import ParseError


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible states of a cell on a partially revealed board."""

    COVERED = auto()
    MINE = auto()
    SAFE = auto()
    PROBE = auto()
    NUMBER = auto()


MAX_LABEL = 8

# Observation codes for non-clue cells; clues use their label (0-8)
COVERED_CODE = -1
MINE_CODE = -2
SAFE_CODE = -3
PROBE_CODE = -4

_TOKENS = {
    "_": CellState.COVERED,
    "*": CellState.MINE,
    "s": CellState.SAFE,
    "?": CellState.PROBE,
}

_SYMBOLS = {state: token for token, state in _TOKENS.items()}

_CODES = {
    CellState.COVERED: COVERED_CODE,
    CellState.MINE: MINE_CODE,
    CellState.SAFE: SAFE_CODE,
    CellState.PROBE: PROBE_CODE,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single cell of a Minesweeper board.

    Attributes:
        state: Kind of cell.
        label: Count of mines among the 8 neighbours (NUMBER cells only).
    """

    state: CellState = CellState.COVERED
    label: int = 0

    def __post_init__(self) -> None:
        """Validate the label after initialization."""
        if self.state == CellState.NUMBER:
            if not 0 <= self.label <= MAX_LABEL:
                raise ParseError(f"Invalid number of mines: {self.label}")
        elif self.label != 0:
            raise ParseError(f"Only numbered cells carry a label, got {self.label}")

    @classmethod
    def from_token(cls, token: str) -> "Cell":
        """
        Build a cell from its board text token.

        Args:
            token: One of `_`, `*`, `s`, `?` or an integer 0-8.

        Returns:
            The matching cell.

        Raises:
            ParseError: If the token is not recognised.
        """
        if token in _TOKENS:
            return cls(_TOKENS[token])
        if not (token.isascii() and token.isdigit()):
            raise ParseError(f"Invalid square label: {token!r}")
        value = int(token)
        if value > MAX_LABEL:
            raise ParseError(f"Invalid number of mines: {token}")
        return cls(CellState.NUMBER, value)

    @classmethod
    def from_observation(cls, code: int) -> "Cell":
        """Build a cell from its integer observation code."""
        code = int(code)
        if code >= 0:
            return cls(CellState.NUMBER, code)
        for state, state_code in _CODES.items():
            if state_code == code:
                return cls(state)
        raise ParseError(f"Invalid observation code: {code}")

    def to_token(self) -> str:
        """Convert the cell back to its board text token."""
        if self.state == CellState.NUMBER:
            return str(self.label)
        return _SYMBOLS[self.state]

    def to_observation(self) -> int:
        """
        Convert cell to its observation code.

        Returns:
            -1: Covered cell
            -2: Mine
            -3: Known-safe cell
            -4: Probe
            0-8: Clue with its mine count
        """
        if self.state == CellState.NUMBER:
            return self.label
        return _CODES[self.state]

    @property
    def is_mine(self) -> bool:
        """Check if cell is a known mine."""
        return self.state == CellState.MINE

    @property
    def is_covered(self) -> bool:
        """Check if cell status is unknown (covered or probe)."""
        return self.state in (CellState.COVERED, CellState.PROBE)

    @property
    def is_probe(self) -> bool:
        """Check if cell is the probe."""
        return self.state == CellState.PROBE

    @property
    def is_number(self) -> bool:
        """Check if cell is a numbered clue."""
        return self.state == CellState.NUMBER
