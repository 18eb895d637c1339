"""
Hybrid solver combining constraint propagation with SAT decisions.

Uses the propagation fixpoint when it settles the probe and falls back
to the complete SAT check when the probe stays undetermined.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from minefield import Board

from .base_solver import BaseSolver, ProbeResult
from .config import SolverConfig
from .propagation import PropagationSolver
from .sat_driver import SatDecisionDriver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """Verdict together with the engine that produced it."""

    verdict: ProbeResult
    method: str


# ============================================================================
# Hybrid Solver
# ============================================================================

class HybridSolver(BaseSolver):
    """
    Two-tier probe solver.

    Strategy:
        1. Run propagation (fast path) unless disabled in the config
        2. If the probe is still unknown, ask the SAT driver with both
           probe assumptions
    """

    name = "hybrid"

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        """
        Initialize the hybrid solver.

        Args:
            config: Shared configuration for both engines.
        """
        self.config = config or SolverConfig()
        self.propagation = PropagationSolver(self.config)
        self.sat = SatDecisionDriver(self.config)

    def check(self, board: Board) -> ProbeResult:
        """Decide the probe with the cheapest engine that can."""
        return self.solve(board).verdict

    def solve(self, board: Board) -> SolveResult:
        """
        Decide the probe and report which engine settled it.

        Raises:
            ConfigurationError: If the board has no single probe or its
                clues are inconsistent.
        """
        probe = board.probe
        board.validate()

        if self.config.use_propagation:
            verdict = self.propagation.check(board)
            if verdict != ProbeResult.UNKNOWN:
                return SolveResult(verdict, self.propagation.name)
            logger.debug("Propagation left probe %s open, trying SAT", probe)

        return SolveResult(self.sat.check(board), self.sat.name)
