"""
Solver configuration.
"""
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Solver Configuration
# ============================================================================

@dataclass
class SolverConfig:
    """
    Configuration for the deduction engines.

    Attributes:
        sat_solver: PySAT solver name used as the SAT oracle.
        time_limit: Seconds allowed per oracle call, or None for no limit.
        conflict_budget: Conflicts allowed per oracle call, or None.
        use_propagation: Try the propagation fast path before SAT.
        max_rounds: Optional cap on propagation rounds.
    """

    # SAT oracle settings
    sat_solver: str = "glucose3"
    time_limit: Optional[float] = None
    conflict_budget: Optional[int] = None

    # Propagation settings
    use_propagation: bool = True
    max_rounds: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not self.sat_solver:
            raise ValueError("SAT solver name cannot be empty")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("Time limit must be positive")
        if self.conflict_budget is not None and self.conflict_budget <= 0:
            raise ValueError("Conflict budget must be positive")
        if self.max_rounds is not None and self.max_rounds < 1:
            raise ValueError("Round limit must be at least 1")

    @property
    def is_limited(self) -> bool:
        """Check if oracle calls run under a time or conflict budget."""
        return self.time_limit is not None or self.conflict_budget is not None
