"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board


# ============================================================================
# Board Texts
# ============================================================================

# No clue touches the probe; the (0, 4) clue is fully revealed and wrong
UNKNOWN_TEXT = """
* 2 2 2 2 *
2 _ 2 * * 3
_ _ _ _ * 3
_ _ ? _ _ _
2 _ _ _ 4 2
* 3 3 _ _ _
"""

SAFE_TEXT = """
_ _ 2 _ 3 _
2 _ _ * * 3
1 1 2 4 _ 3
1 ? 3 4 _ 2
2 * * * _ 3
_ 3 3 3 * *
"""

UNSAFE_TEXT = """
_ _ 2 _ 3 _
2 _ _ * * 3
1 1 2 4 _ 3
1 _ 3 4 _ 2
2 * ? * _ 3
_ 3 3 3 * *
"""

# Probe on the right edge, settled in the second round
EDGE_SAFE_TEXT = """
* 2 2 2 3 *
2 _ 2 * * 3
1 1 2 4 * _
1 2 3 4 _ ?
2 _ * * 4 3
* 3 3 3 * *
"""

# Clues at (0, 3) and (0, 4) disagree about the probe
CONTRADICTORY_TEXT = """
* 2 2 2 2 *
2 * 2 * ? 3
1 1 2 4 * 3
1 2 3 4 * 2
2 * * * 4 2
* 3 3 3 * *
"""

# Outer clues each force a mine next to the middle clue, which allows one
OVERCOMMITTED_TEXT = """
1 ? 1 _ 1
s s s s s
"""

# 1-2-1 pattern: only the combination of all three clues decides
PATTERN_MINE_TEXT = """
? _ _ s s s
1 2 1 s s s
s s s s s s
s s s s s s
s s s s s s
s s s s s s
"""

PATTERN_SAFE_TEXT = """
_ ? _ s s s
1 2 1 s s s
s s s s s s
s s s s s s
s s s s s s
s s s s s s
"""


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def unknown_board() -> Board:
    """Board whose probe no clue can reach."""
    return Board.from_string(UNKNOWN_TEXT)


@pytest.fixture
def safe_board() -> Board:
    """Board whose probe is forced safe by a saturated clue."""
    return Board.from_string(SAFE_TEXT)


@pytest.fixture
def unsafe_board() -> Board:
    """Board whose probe is forced to be a mine."""
    return Board.from_string(UNSAFE_TEXT)


@pytest.fixture
def edge_safe_board() -> Board:
    """Board whose probe is settled only after a first inference."""
    return Board.from_string(EDGE_SAFE_TEXT)


@pytest.fixture
def contradictory_board() -> Board:
    """Board with two clues forcing opposite statuses on the probe."""
    return Board.from_string(CONTRADICTORY_TEXT)


@pytest.fixture
def overcommitted_board() -> Board:
    """Board that passes the static check but breaks a clue after inference."""
    return Board.from_string(OVERCOMMITTED_TEXT)


@pytest.fixture
def pattern_mine_board() -> Board:
    """1-2-1 pattern with the probe on a cell that must be a mine."""
    return Board.from_string(PATTERN_MINE_TEXT)


@pytest.fixture
def pattern_safe_board() -> Board:
    """1-2-1 pattern with the probe on a cell that must be safe."""
    return Board.from_string(PATTERN_SAFE_TEXT)


@pytest.fixture
def small_board() -> Board:
    """Small rectangular board for neighbour checks."""
    return Board.from_string(
        """
        1 _ _ s s
        _ ? 2 * s
        s s 1 1 s
        """
    )
