"""
Board module for Minesweeper probe queries.

Implements an immutable, partially revealed board: text parsing and
rendering, 8-neighbour adjacency, and the static consistency checks
shared by every deduction engine.
"""
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Sequence, Set, Tuple

import numpy as np

from .cell import (
    COVERED_CODE,
    MINE_CODE,
    PROBE_CODE,
    Cell,
)
from .errors import ConfigurationError, ParseError

Position = Tuple[int, int]


# ============================================================================
# Board Class
# ============================================================================

@dataclass(frozen=True, eq=False)
class Board:
    """
    Partially revealed Minesweeper board.

    The grid is stored as a read-only int8 array of cell observation
    codes. Boards may be rectangular.
    """

    _grid: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        """Validate and freeze the grid after dataclass creation."""
        grid = np.array(self._grid, dtype=np.int8, copy=True)
        if grid.ndim != 2 or grid.size == 0:
            raise ParseError("Board must be a non-empty 2D grid")
        grid.setflags(write=False)
        object.__setattr__(self, "_grid", grid)

    # ========================================================================
    # Construction (Low-level)
    # ========================================================================

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]]) -> "Board":
        """
        Build a board from rows of text tokens.

        Args:
            rows: One sequence of tokens per board row.

        Returns:
            The parsed board.

        Raises:
            ParseError: On invalid tokens, ragged rows or empty input.
        """
        codes: List[List[int]] = []
        for row in rows:
            codes.append([Cell.from_token(token).to_observation() for token in row])

        if not codes or not codes[0]:
            raise ParseError("Empty board configuration")
        width = len(codes[0])
        for index, row_codes in enumerate(codes):
            if len(row_codes) != width:
                raise ParseError(
                    f"Row {index} has {len(row_codes)} cells, expected {width}"
                )
        return cls(np.array(codes, dtype=np.int8))

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Parse a board from its text form.

        Tokens are whitespace separated, one line per row. Blank lines
        are ignored.
        """
        lines = [line.split() for line in text.splitlines()]
        return cls.from_rows(tokens for tokens in lines if tokens)

    # ========================================================================
    # Dimensions and Cell Access
    # ========================================================================

    @property
    def height(self) -> int:
        """Number of rows."""
        return int(self._grid.shape[0])

    @property
    def width(self) -> int:
        """Number of columns."""
        return int(self._grid.shape[1])

    def get_cell(self, row: int, col: int) -> Cell:
        """Get the cell at a position."""
        return Cell.from_observation(self._grid[row, col])

    def is_mine(self, row: int, col: int) -> bool:
        """Check if a cell is a known mine."""
        return bool(self._grid[row, col] == MINE_CODE)

    def is_covered(self, row: int, col: int) -> bool:
        """Check if a cell is covered or is the probe."""
        return bool(self._grid[row, col] in (COVERED_CODE, PROBE_CODE))

    def label(self, row: int, col: int) -> int:
        """Get the mine count of a clue cell."""
        cell = self.get_cell(row, col)
        if not cell.is_number:
            raise ValueError(f"Cell ({row}, {col}) is not a clue")
        return cell.label

    def get_observation(self) -> np.ndarray:
        """Get a writable copy of the board's observation codes."""
        return self._grid.copy()

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def neighbours(self, row: int, col: int) -> Set[Position]:
        """
        Get the in-bounds 8-neighbours of a cell.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            Set of (row, col) tuples, never including the cell itself.
        """
        neighbours = set()
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbours.add((new_row, new_col))
        return neighbours

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    # ========================================================================
    # Enumeration
    # ========================================================================

    def positions(self) -> Iterator[Position]:
        """Iterate over all positions in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def clues(self) -> Iterator[Tuple[Position, int]]:
        """Iterate over (position, label) for every numbered cell."""
        for row, col in zip(*np.nonzero(self._grid >= 0)):
            yield (int(row), int(col)), int(self._grid[row, col])

    def covered_cells(self) -> List[Position]:
        """Get every covered or probe position."""
        return [pos for pos in self.positions() if self.is_covered(*pos)]

    @property
    def probe(self) -> Position:
        """
        Position of the single probe cell.

        Raises:
            ConfigurationError: If there is no probe or more than one.
        """
        rows, cols = np.nonzero(self._grid == PROBE_CODE)
        if len(rows) == 0:
            raise ConfigurationError("No probe provided")
        if len(rows) > 1:
            found = ", ".join(f"({r}, {c})" for r, c in zip(rows, cols))
            raise ConfigurationError(f"More than one probe provided: {found}")
        return int(rows[0]), int(cols[0])

    # ========================================================================
    # Consistency
    # ========================================================================

    def clue_neighbourhood(self, row: int, col: int) -> Tuple[int, List[Position]]:
        """
        Split a clue's neighbours into known mines and unknown cells.

        Returns:
            Tuple of (known mine count, sorted covered positions).
        """
        mines = 0
        covered = []
        for r, c in self.neighbours(row, col):
            if self.is_mine(r, c):
                mines += 1
            elif self.is_covered(r, c):
                covered.append((r, c))
        return mines, sorted(covered)

    def validate(self) -> None:
        """
        Check clue arithmetic against the revealed cells.

        For every clue with at least one covered neighbour, the number
        of mines still to place must lie between 0 and the number of
        covered neighbours.

        Raises:
            ConfigurationError: Naming the first inconsistent clue.
        """
        for (row, col), label in self.clues():
            mines, covered = self.clue_neighbourhood(row, col)
            if not covered:
                continue
            remaining = label - mines
            if remaining < 0 or remaining > len(covered):
                raise ConfigurationError(
                    f"Clue {label} at ({row}, {col}) needs {remaining} mines "
                    f"among {len(covered)} covered neighbours"
                )

    # ========================================================================
    # Conversion
    # ========================================================================

    def with_probe(self, row: int, col: int) -> "Board":
        """
        Get a copy of this board with the probe moved.

        The previous probe, if any, becomes a covered cell.

        Raises:
            ConfigurationError: If the target cell is not covered.
        """
        if not self._is_valid_position(row, col) or not self.is_covered(row, col):
            raise ConfigurationError(f"Cell ({row}, {col}) is not covered")
        grid = self.get_observation()
        grid[grid == PROBE_CODE] = COVERED_CODE
        grid[row, col] = PROBE_CODE
        return Board(grid)

    def render(self) -> str:
        """Render the board in its text form."""
        lines = []
        for row in range(self.height):
            tokens = [self.get_cell(row, col).to_token() for col in range(self.width)]
            lines.append(" ".join(tokens))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

