"""
Unit tests for the propagation engine.

Tests probe verdicts on reference boards and the fixpoint's
monotonicity, termination and soundness.
"""
from typing import Dict

import pytest
from minefield import Board, Cell, CellState, ConfigurationError, Position
from deduction import (
    ProbeResult,
    PropagationResult,
    PropagationSolver,
    SolverConfig,
)


@pytest.fixture
def solver() -> PropagationSolver:
    """Propagation solver with default configuration."""
    return PropagationSolver()


def _resolve(board: Board, result: PropagationResult) -> Board:
    """Write inferred statuses back into a board."""
    grid = board.get_observation()
    for (row, col), is_safe in result.inferred.items():
        state = CellState.SAFE if is_safe else CellState.MINE
        grid[row, col] = Cell(state).to_observation()
    return Board(grid)


# ============================================================================
# Verdict Tests
# ============================================================================

class TestVerdicts:
    """Test probe verdicts on reference boards."""

    def test_unreachable_probe_is_unknown(
        self, solver: PropagationSolver, unknown_board: Board
    ) -> None:
        """No clue touches the probe, so nothing can be said."""
        assert solver.check(unknown_board) == ProbeResult.UNKNOWN

    def test_saturated_clue_makes_probe_safe(
        self, solver: PropagationSolver, safe_board: Board
    ) -> None:
        """A clue already surrounded by its mines frees the probe."""
        assert solver.check(safe_board) == ProbeResult.SAFE

    def test_full_clue_makes_probe_unsafe(
        self, solver: PropagationSolver, unsafe_board: Board
    ) -> None:
        """A clue needing every covered neighbour marks the probe a mine."""
        assert solver.check(unsafe_board) == ProbeResult.UNSAFE

    def test_second_round_settles_probe(
        self, solver: PropagationSolver, edge_safe_board: Board
    ) -> None:
        """The probe is decided using a mine inferred in round one."""
        result = solver.propagate(edge_safe_board)
        assert result.inferred[(3, 4)] is False
        assert result.status(edge_safe_board.probe) == ProbeResult.SAFE
        probe_inference = next(
            inf for inf in result.trace if inf.position == (3, 5)
        )
        assert probe_inference.round == 2

    def test_pattern_needs_more_than_single_clues(
        self, solver: PropagationSolver, pattern_mine_board: Board
    ) -> None:
        """The 1-2-1 pattern is beyond single-clue propagation."""
        assert solver.check(pattern_mine_board) == ProbeResult.UNKNOWN
        assert solver.propagate(pattern_mine_board).inferred == {}

    def test_missing_probe_raises_error(self, solver: PropagationSolver) -> None:
        """Checking a board without probe is a configuration error."""
        board = Board.from_string("1 _\n_ _")
        with pytest.raises(ConfigurationError, match="No probe"):
            solver.check(board)

    def test_inconsistent_clue_raises_error(self, solver: PropagationSolver) -> None:
        """Static clue arithmetic is checked before propagating."""
        board = Board.from_string("4 _\n_ ?")
        with pytest.raises(ConfigurationError, match="needs 4 mines"):
            solver.check(board)

    def test_contradictory_inferences_raise_error(
        self, solver: PropagationSolver, contradictory_board: Board
    ) -> None:
        """Two clues forcing opposite statuses abort the query."""
        with pytest.raises(ConfigurationError, match="disagree about cell \\(1, 4\\)"):
            solver.check(contradictory_board)

    def test_clue_broken_by_inferences_raises_error(
        self, solver: PropagationSolver, overcommitted_board: Board
    ) -> None:
        """Mines forced by other clues can overfill a clue."""
        with pytest.raises(
            ConfigurationError, match="Clue 1 at \\(0, 2\\) has 2 mines"
        ):
            solver.check(overcommitted_board)

    def test_broken_clue_found_in_later_round(
        self, solver: PropagationSolver
    ) -> None:
        """A clue broken in round two is reported when round three starts."""
        board = Board.from_string(
            "_ 1 _ 1 _ 1 _ s _\n"
            "0 s s s s s 0 s s"
        )
        with pytest.raises(
            ConfigurationError, match="Clue 1 at \\(0, 3\\) has 2 mines"
        ):
            solver.propagate(board)


# ============================================================================
# Inference Content Tests
# ============================================================================

class TestInferences:
    """Test what the fixpoint infers on a fully determined board."""

    def test_all_cells_resolved(
        self, solver: PropagationSolver, safe_board: Board
    ) -> None:
        """Every covered cell of the reference board gets a status."""
        result = solver.propagate(safe_board)
        assert set(result.inferred) == set(safe_board.covered_cells())

    def test_mines_and_safe_cells(
        self, solver: PropagationSolver, safe_board: Board
    ) -> None:
        """Inferred statuses match the only consistent placement."""
        result = solver.propagate(safe_board)
        assert result.mine_cells == [(0, 0), (0, 5), (1, 1), (2, 4), (3, 4), (5, 0)]
        assert result.safe_cells == [(0, 1), (0, 3), (1, 2), (3, 1), (4, 4)]

    def test_probe_not_required(self, solver: PropagationSolver) -> None:
        """Propagation itself runs on boards without a probe."""
        board = Board.from_string("1 _\n* _")
        result = solver.propagate(board)
        assert result.safe_cells == [(0, 1), (1, 1)]

    def test_fresh_result_each_call(
        self, solver: PropagationSolver, safe_board: Board
    ) -> None:
        """Runs must not share state."""
        first = solver.propagate(safe_board)
        second = solver.propagate(safe_board)
        assert first is not second
        assert first.inferred == second.inferred
        assert first.inferred is not second.inferred

    def test_round_limit(self, safe_board: Board) -> None:
        """A round cap stops early but keeps what was inferred."""
        capped = PropagationSolver(SolverConfig(max_rounds=1))
        result = capped.propagate(safe_board)
        full = PropagationSolver().propagate(safe_board)
        assert result.rounds == 1
        assert set(result.inferred) < set(full.inferred)
        assert capped.check(safe_board) == ProbeResult.SAFE


# ============================================================================
# Fixpoint Property Tests
# ============================================================================

BOARDS = [
    "unknown_board",
    "safe_board",
    "unsafe_board",
    "edge_safe_board",
    "pattern_mine_board",
    "small_board",
]


class TestFixpointProperties:
    """Test monotonicity, termination and soundness."""

    @pytest.mark.parametrize("board_name", BOARDS)
    def test_monotonicity(
        self, solver: PropagationSolver, board_name: str, request
    ) -> None:
        """Each cell is inferred once and keeps its first status."""
        board = request.getfixturevalue(board_name)
        result = solver.propagate(board)
        positions = [inf.position for inf in result.trace]
        assert len(positions) == len(set(positions))
        for inf in result.trace:
            assert result.inferred[inf.position] is inf.is_safe
        rounds = [inf.round for inf in result.trace]
        assert rounds == sorted(rounds)

    @pytest.mark.parametrize("board_name", BOARDS)
    def test_termination_bound(
        self, solver: PropagationSolver, board_name: str, request
    ) -> None:
        """Rounds never exceed the number of covered cells."""
        board = request.getfixturevalue(board_name)
        result = solver.propagate(board)
        assert result.rounds <= len(board.covered_cells())

    @pytest.mark.parametrize("board_name", BOARDS)
    def test_soundness(
        self, solver: PropagationSolver, board_name: str, request
    ) -> None:
        """Every inference follows from its clue at the start of its round."""
        board = request.getfixturevalue(board_name)
        result = solver.propagate(board)

        for inf in result.trace:
            before: Dict[Position, bool] = {
                other.position: other.is_safe
                for other in result.trace
                if other.round < inf.round
            }
            mines = 0
            covered = 0
            for pos in board.neighbours(*inf.clue):
                if board.is_mine(*pos) or before.get(pos) is False:
                    mines += 1
                elif board.is_covered(*pos) and pos not in before:
                    covered += 1

            assert (mines, covered) == (inf.known_mines, inf.covered)
            assert inf.label == board.label(*inf.clue)
            assert inf.position in board.neighbours(*inf.clue)
            if inf.is_safe:
                assert inf.label == mines
            else:
                assert inf.label == mines + covered

    def test_fixpoint_is_idempotent(
        self, solver: PropagationSolver, safe_board: Board
    ) -> None:
        """Re-running on a resolved board changes nothing."""
        resolved = _resolve(safe_board, solver.propagate(safe_board))
        assert resolved.covered_cells() == []

        again = solver.propagate(resolved)
        assert again.inferred == {}
        assert again.rounds == 0

    def test_partial_fixpoint_is_stable(
        self, solver: PropagationSolver, unknown_board: Board
    ) -> None:
        """Writing back a partial fixpoint leaves nothing to infer."""
        resolved = _resolve(unknown_board, solver.propagate(unknown_board))
        again = solver.propagate(resolved)
        assert again.inferred == {}
        assert again.rounds == 1
