"""
Base solver interface for Minesweeper probe queries.

Defines the verdict type and the abstract interface that every
deduction engine implements.
"""
from abc import ABC, abstractmethod
from enum import Enum

from minefield import Board


# ============================================================================
# Verdict
# ============================================================================

class ProbeResult(Enum):
    """Status of the probe cell as derived from the clues."""

    SAFE = "safe"
    UNSAFE = "unsafe"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Base Solver Interface
# ============================================================================

class BaseSolver(ABC):
    """
    Abstract base class for probe solvers.

    All solvers must implement the check method to classify the probe
    of a board as safe, unsafe or unknown.
    """

    name = "base"

    @abstractmethod
    def check(self, board: Board) -> ProbeResult:
        """
        Decide the status of the board's probe cell.

        Args:
            board: Board with exactly one probe.

        Returns:
            Verdict for the probe.

        Raises:
            ConfigurationError: If the board has no single probe or its
                clues are inconsistent.
        """
        pass
