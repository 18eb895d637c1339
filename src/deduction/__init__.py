"""
Minesweeper probe deduction module.

Provides the engines that classify a probe cell:
- PropagationSolver: Monotone single-clue fixpoint (fast, incomplete)
- ConstraintEncoder: Clue constraints as CNF over one variable per cell
- SatDecisionDriver: Complete check through a PySAT oracle
- HybridSolver: Propagation first, SAT when the probe stays unknown
"""
from .base_solver import BaseSolver, ProbeResult
from .config import SolverConfig
from .propagation import Inference, PropagationResult, PropagationSolver
from .encoder import MAX_NEIGHBOURS, ConstraintEncoder
from .sat_driver import Decision, OracleError, SatDecisionDriver
from .hybrid_solver import HybridSolver, SolveResult

__all__ = [
    # Core classes
    "BaseSolver",
    "ProbeResult",
    "SolverConfig",
    # Propagation
    "Inference",
    "PropagationResult",
    "PropagationSolver",
    # SAT
    "MAX_NEIGHBOURS",
    "ConstraintEncoder",
    "Decision",
    "OracleError",
    "SatDecisionDriver",
    # Hybrid
    "HybridSolver",
    "SolveResult",
]
