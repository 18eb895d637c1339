"""
CNF encoder for Minesweeper boards.

One boolean variable per cell, true meaning "is a mine". Each clue
becomes an exact-count constraint over its covered neighbours; partially
satisfied clues are encoded by forbidding every assignment of those
neighbours that has the wrong number of mines.
"""
import itertools
import logging
from typing import Iterable, List, Set, Tuple

from pysat.formula import CNF

from minefield import Board, ConfigurationError, Position

logger = logging.getLogger(__name__)

Clause = Tuple[int, ...]

# An 8-neighbourhood caps a clue at 2**8 forbidden assignments
MAX_NEIGHBOURS = 8


# ============================================================================
# Constraint Encoder
# ============================================================================

class ConstraintEncoder:
    """
    Translates clue constraints and the probe assumption into CNF.

    Variables are numbered row-major from 1, so a variable identifies
    the same cell across every formula built for boards of one shape.
    """

    def variable(self, board: Board, row: int, col: int) -> int:
        """Get the variable id of a cell."""
        return row * board.width + col + 1

    def position(self, board: Board, variable: int) -> Position:
        """Get the cell of a variable id."""
        return divmod(abs(variable) - 1, board.width)

    def clue_clauses(self, board: Board, row: int, col: int) -> List[Clause]:
        """
        Encode one clue.

        Args:
            board: Board holding the clue.
            row: Row of the clue.
            col: Column of the clue.

        Returns:
            Clauses forcing exactly the clue's remaining mine count
            among its covered neighbours.

        Raises:
            ConfigurationError: If the remaining count is out of range
                or the neighbourhood exceeds eight cells.
        """
        label = board.label(row, col)
        mines, covered = board.clue_neighbourhood(row, col)
        if not covered:
            return []
        if len(covered) > MAX_NEIGHBOURS:
            raise ConfigurationError(
                f"Clue at ({row}, {col}) has {len(covered)} covered neighbours"
            )

        remaining = label - mines
        if remaining < 0 or remaining > len(covered):
            raise ConfigurationError(
                f"Clue {label} at ({row}, {col}) needs {remaining} mines "
                f"among {len(covered)} covered neighbours"
            )

        variables = [self.variable(board, r, c) for r, c in covered]
        if remaining == 0:
            return [(-var,) for var in variables]
        if remaining == len(variables):
            return [(var,) for var in variables]
        return list(self._forbid_wrong_counts(variables, remaining))

    def _forbid_wrong_counts(
        self, variables: List[int], mines: int
    ) -> Iterable[Clause]:
        """Yield one clause per assignment whose mine count is not `mines`."""
        for assignment in itertools.product((False, True), repeat=len(variables)):
            if sum(assignment) == mines:
                continue
            # The clause is false exactly under this assignment
            yield tuple(
                -var if is_mine else var
                for var, is_mine in zip(variables, assignment)
            )

    def encode(self, board: Board, probe_is_mine: bool = False) -> CNF:
        """
        Build the full formula for a probe query.

        Args:
            board: Board with exactly one probe.
            probe_is_mine: Assumption placed on the probe variable.

        Returns:
            Deduplicated formula, shortest clauses first.

        Raises:
            ConfigurationError: On a missing probe or inconsistent clue.
        """
        probe = board.probe
        probe_var = self.variable(board, *probe)
        clauses: Set[Clause] = {(probe_var if probe_is_mine else -probe_var,)}

        for (row, col), _ in board.clues():
            clauses.update(self.clue_clauses(board, row, col))

        ordered = sorted(clauses, key=lambda clause: (len(clause), clause))
        formula = CNF(from_clauses=[list(clause) for clause in ordered])
        formula.nv = max(formula.nv, board.height * board.width)
        formula.comments = [
            f"c probe {probe} assumed {'mine' if probe_is_mine else 'safe'}"
        ]
        logger.debug(
            "Encoded %d clauses over %d variables", len(formula.clauses), formula.nv
        )
        return formula

    def to_dimacs(self, formula: CNF) -> str:
        """Render a formula in DIMACS format."""
        return formula.to_dimacs()
