"""
Propagation engine for Minesweeper probe queries.

Runs a monotone fixpoint over the clue constraints: a clue whose mine
count is already met marks its remaining covered neighbours safe, and a
clue that needs every remaining covered neighbour marks them all as
mines. Fast, but incomplete.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from minefield import Board, ConfigurationError, Position

from .base_solver import BaseSolver, ProbeResult
from .config import SolverConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Propagation Results
# ============================================================================

@dataclass(frozen=True)
class Inference:
    """
    A single committed deduction.

    Attributes:
        position: Cell that was inferred.
        is_safe: True if the cell is safe, False if it is a mine.
        clue: Position of the clue that forced it.
        label: Mine count of that clue.
        known_mines: Mines around the clue when the rule fired.
        covered: Uninferred covered neighbours of the clue at that time.
        round: Round in which the inference was committed (1-based).
    """

    position: Position
    is_safe: bool
    clue: Position
    label: int
    known_mines: int
    covered: int
    round: int


@dataclass
class PropagationResult:
    """Outcome of one propagation run."""

    inferred: Dict[Position, bool] = field(default_factory=dict)
    trace: List[Inference] = field(default_factory=list)
    rounds: int = 0

    def status(self, position: Position) -> ProbeResult:
        """Map a cell's inferred status to a verdict."""
        is_safe = self.inferred.get(position)
        if is_safe is None:
            return ProbeResult.UNKNOWN
        return ProbeResult.SAFE if is_safe else ProbeResult.UNSAFE

    @property
    def safe_cells(self) -> List[Position]:
        """Cells inferred safe, sorted."""
        return sorted(pos for pos, safe in self.inferred.items() if safe)

    @property
    def mine_cells(self) -> List[Position]:
        """Cells inferred to be mines, sorted."""
        return sorted(pos for pos, safe in self.inferred.items() if not safe)


# ============================================================================
# Propagation Solver
# ============================================================================

class PropagationSolver(BaseSolver):
    """
    Solver that applies the two single-clue rules until a fixpoint.

    Strategy:
        1. For every clue, count known mines (revealed or inferred) and
           the covered neighbours not yet inferred
        2. Count already met: all those covered cells are safe
        3. Count needs every covered cell: all of them are mines
        4. Commit the round's inferences together and repeat until a
           round adds nothing

    Inferred entries are never overwritten, so a run finishes within as
    many rounds as there are covered cells.
    """

    name = "propagation"

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        """
        Initialize the propagation solver.

        Args:
            config: Solver configuration (only max_rounds is used).
        """
        self.config = config or SolverConfig()

    def check(self, board: Board) -> ProbeResult:
        """Decide the probe using propagation alone."""
        probe = board.probe
        board.validate()
        result = self.propagate(board)
        verdict = result.status(probe)
        logger.debug(
            "Propagation decided probe %s as %s after %d rounds",
            probe, verdict, result.rounds,
        )
        return verdict

    def propagate(self, board: Board) -> PropagationResult:
        """
        Run the fixpoint on a board.

        The board needs no probe; each call returns a fresh result.

        Args:
            board: Board to propagate over.

        Returns:
            Inferred statuses, their justifications and the round count.

        Raises:
            ConfigurationError: If two clues force opposite statuses on
                the same cell, or a clue can no longer be met.
        """
        result = PropagationResult()
        # Clues without covered neighbours can neither infer nor be broken
        clues = [
            (position, label)
            for position, label in board.clues()
            if board.clue_neighbourhood(*position)[1]
        ]
        remaining = len(board.covered_cells())

        while remaining and not self._round_limit_reached(result.rounds):
            result.rounds += 1
            pending = self._run_round(board, clues, result)
            if not pending:
                break

            # Commit after the whole round so every clue saw the same state
            for inference in pending.values():
                result.inferred[inference.position] = inference.is_safe
                result.trace.append(inference)
            remaining -= len(pending)
            logger.debug(
                "Round %d inferred %d cells, %d covered left",
                result.rounds, len(pending), remaining,
            )

        # The last commit may break a clue that no later round revisits
        for (row, col), label in clues:
            mines, covered = self._clue_state(board, row, col, result.inferred)
            self._check_reachable(row, col, label, mines, covered)
        return result

    def _run_round(
        self,
        board: Board,
        clues: List[Tuple[Position, int]],
        result: PropagationResult,
    ) -> Dict[Position, Inference]:
        """Visit every clue once and collect new inferences."""
        pending: Dict[Position, Inference] = {}

        for (row, col), label in clues:
            mines, covered = self._clue_state(board, row, col, result.inferred)
            self._check_reachable(row, col, label, mines, covered)

            # Nothing left to decide around this clue
            if not covered:
                continue

            if label == mines:
                is_safe = True
            elif label == mines + len(covered):
                is_safe = False
            else:
                continue

            for position in covered:
                earlier = pending.get(position)
                if earlier is not None and earlier.is_safe != is_safe:
                    raise ConfigurationError(
                        f"Clues at {earlier.clue} and {(row, col)} disagree "
                        f"about cell {position}"
                    )
                if earlier is None:
                    pending[position] = Inference(
                        position=position,
                        is_safe=is_safe,
                        clue=(row, col),
                        label=label,
                        known_mines=mines,
                        covered=len(covered),
                        round=result.rounds,
                    )

        return pending

    def _clue_state(
        self,
        board: Board,
        row: int,
        col: int,
        inferred: Dict[Position, bool],
    ) -> Tuple[int, List[Position]]:
        """Count known mines and list uninferred covered neighbours."""
        mines = 0
        covered = []
        for r, c in board.neighbours(row, col):
            if board.is_mine(r, c):
                mines += 1
            elif board.is_covered(r, c):
                status = inferred.get((r, c))
                if status is None:
                    covered.append((r, c))
                elif not status:
                    mines += 1
        return mines, sorted(covered)

    def _check_reachable(
        self, row: int, col: int, label: int, mines: int, covered: List[Position]
    ) -> None:
        """Raise if a clue already has too many or too few possible mines."""
        if not mines <= label <= mines + len(covered):
            raise ConfigurationError(
                f"Clue {label} at {(row, col)} has {mines} mines and "
                f"{len(covered)} undecided neighbours"
            )

    def _round_limit_reached(self, rounds: int) -> bool:
        """Check the optional round cap."""
        limit = self.config.max_rounds
        if limit is not None and rounds >= limit:
            logger.warning("Propagation stopped at the %d round limit", limit)
            return True
        return False
