"""
SAT decision driver for Minesweeper probe queries.

Submits encoded boards to a PySAT solver and turns the satisfiable /
unsatisfiable answers for both probe assumptions into a verdict.
"""
import logging
from enum import Enum
from threading import Timer
from typing import Optional

from pysat.formula import CNF
from pysat.solvers import Solver, SolverNames

from minefield import Board, ConfigurationError

from .base_solver import BaseSolver, ProbeResult
from .config import SolverConfig
from .encoder import ConstraintEncoder

logger = logging.getLogger(__name__)


class OracleError(RuntimeError):
    """Raised when the SAT backend cannot answer a query."""


# ============================================================================
# Raw Oracle Outcome
# ============================================================================

class Decision(Enum):
    """Answer of the SAT oracle for one encoded assumption."""

    SATISFIABLE = "SAT"
    UNSATISFIABLE = "UNSAT"
    UNDETERMINED = "UNKNOWN"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# SAT Decision Driver
# ============================================================================

class SatDecisionDriver(BaseSolver):
    """
    Complete solver backed by a SAT oracle.

    A single query only says whether some valid completion of the board
    agrees with the assumption placed on the probe. The verdict comes
    from asking both assumptions:

        probe safe   probe mine   verdict
        ----------   ----------   -------
        SAT          SAT          unknown
        UNSAT        SAT          unsafe
        SAT          UNSAT        safe
        UNSAT        UNSAT        inconsistent board
    """

    name = "sat"

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        encoder: Optional[ConstraintEncoder] = None,
    ) -> None:
        """
        Initialize the driver.

        Args:
            config: Oracle settings (solver name and budgets).
            encoder: Encoder used to build formulas.
        """
        self.config = config or SolverConfig()
        self.encoder = encoder or ConstraintEncoder()

    def check(self, board: Board) -> ProbeResult:
        """Decide the probe by querying both assumptions."""
        probe = board.probe
        board.validate()
        logger.debug("Checking probe %s with %s", probe, self.config.sat_solver)

        probe_safe = self._decide_or_undetermined(board, probe_is_mine=False)
        probe_mine = self._decide_or_undetermined(board, probe_is_mine=True)

        if (
            probe_safe == Decision.UNSATISFIABLE
            and probe_mine == Decision.UNSATISFIABLE
        ):
            raise ConfigurationError("Board has no consistent mine placement")
        if probe_safe == Decision.UNSATISFIABLE:
            return ProbeResult.UNSAFE
        if probe_mine == Decision.UNSATISFIABLE:
            return ProbeResult.SAFE
        return ProbeResult.UNKNOWN

    def decide(self, board: Board, probe_is_mine: bool = False) -> Decision:
        """
        Ask whether any completion agrees with one probe assumption.

        Args:
            board: Board with exactly one probe.
            probe_is_mine: Assumption placed on the probe.

        Returns:
            The oracle's answer; UNDETERMINED if a budget ran out.

        Raises:
            ConfigurationError: On a missing probe or inconsistent clue.
            OracleError: If the solver backend fails.
        """
        formula = self.encoder.encode(board, probe_is_mine=probe_is_mine)
        decision = self.solve(formula)
        logger.debug(
            "Probe assumed %s: %s",
            "mine" if probe_is_mine else "safe", decision,
        )
        return decision

    def solve(self, formula: CNF) -> Decision:
        """
        Submit a formula to the SAT oracle.

        Raises:
            OracleError: If the solver cannot be created or interrupted.
        """
        self._check_solver_name()
        try:
            with Solver(name=self.config.sat_solver, bootstrap_with=formula.clauses) as solver:
                if not self.config.is_limited:
                    status = solver.solve()
                else:
                    status = self._solve_limited(solver)
        except NotImplementedError as exc:
            raise OracleError(
                f"SAT solver {self.config.sat_solver!r} failed: {exc}"
            ) from exc

        if status is None:
            return Decision.UNDETERMINED
        return Decision.SATISFIABLE if status else Decision.UNSATISFIABLE

    def _solve_limited(self, solver: Solver) -> Optional[bool]:
        """Run the solver under the configured time and conflict budgets."""
        if self.config.conflict_budget is not None:
            solver.conf_budget(self.config.conflict_budget)

        if self.config.time_limit is None:
            return solver.solve_limited()

        timer = Timer(self.config.time_limit, solver.interrupt)
        timer.start()
        try:
            return solver.solve_limited(expect_interrupt=True)
        finally:
            timer.cancel()
            solver.clear_interrupt()

    def _decide_or_undetermined(self, board: Board, probe_is_mine: bool) -> Decision:
        """Query one assumption, reporting oracle failures as undetermined."""
        try:
            return self.decide(board, probe_is_mine=probe_is_mine)
        except OracleError as exc:
            logger.warning("SAT oracle failed, probe left undetermined: %s", exc)
            return Decision.UNDETERMINED

    def _check_solver_name(self) -> None:
        """Ensure the configured solver is known to PySAT."""
        known = {
            alias
            for attr, aliases in vars(SolverNames).items()
            if not attr.startswith("_") and isinstance(aliases, tuple)
            for alias in aliases
        }
        if self.config.sat_solver not in known:
            raise OracleError(f"Unknown SAT solver {self.config.sat_solver!r}")
