"""
Minesweeper probe checker - command line interface.

Usage:
    minesweeper-probe check [--file PATH]
    minesweeper-probe sat [--file PATH] [--show-cnf]
    minesweeper-probe solve [--file PATH] [--verbose]

The board is read from the file or standard input; empty input runs the
built-in example board.
"""
import argparse
import logging
import sys
from typing import List, Optional

from minefield import Board, BoardError

from .config import SolverConfig
from .hybrid_solver import HybridSolver
from .propagation import PropagationSolver
from .sat_driver import OracleError, SatDecisionDriver

EXAMPLE_BOARD = """
_ _ 2 _ 3 _
2 _ _ * * 3
1 1 2 4 _ 3
1 ? 3 4 _ 2
2 * * * _ 3
_ 3 3 3 * *
"""

INSTRUCTIONS = (
    "A Minesweeper board configuration consists of `_` (unknown), `*` (mine), "
    "`s` (safe), `?` (probe), number (number of mines around).\n"
    "Enter a consistent Minesweeper board configuration with one probe "
    "(ending with EOF), or an empty string to see example:"
)


def read_board(args: argparse.Namespace) -> Board:
    """Read the board from --file or stdin, falling back to the example."""
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            raw_conf = f.read()
    else:
        if sys.stdin.isatty():
            print(INSTRUCTIONS)
        raw_conf = sys.stdin.read()

    if not raw_conf.strip():
        raw_conf = EXAMPLE_BOARD
        print("Example board:")
        print(raw_conf.strip())
        print()
    return Board.from_string(raw_conf)


def build_config(args: argparse.Namespace) -> SolverConfig:
    """Create the solver configuration from command line options."""
    return SolverConfig(
        sat_solver=args.solver,
        time_limit=args.time_limit,
        conflict_budget=args.conflict_budget,
    )


def check(args: argparse.Namespace) -> None:
    """Print the propagation verdict."""
    board = read_board(args)
    solver = PropagationSolver(build_config(args))
    print(solver.check(board))


def sat(args: argparse.Namespace) -> None:
    """Print the oracle answer for the probe being mine-free."""
    board = read_board(args)
    driver = SatDecisionDriver(build_config(args))
    board.validate()

    if args.show_cnf:
        formula = driver.encoder.encode(board)
        print("Corresponding SAT problem:")
        print(driver.encoder.to_dimacs(formula))

    print(driver.decide(board))


def solve(args: argparse.Namespace) -> None:
    """Print the three-way verdict of the hybrid solver."""
    board = read_board(args)
    result = HybridSolver(build_config(args)).solve(board)
    if args.verbose:
        print(f"{result.verdict} (decided by {result.method})")
    else:
        print(result.verdict)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command."""
    parser.add_argument("--file", help="Board file (default: standard input)")
    parser.add_argument(
        "--solver", default="glucose3", help="PySAT solver name"
    )
    parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Seconds allowed per SAT call",
    )
    parser.add_argument(
        "--conflict-budget", type=int, default=None,
        help="Conflicts allowed per SAT call",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Decide whether a Minesweeper probe cell is safe"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Propagation command
    check_parser = subparsers.add_parser(
        "check", help="Decide the probe with constraint propagation"
    )
    _add_common_arguments(check_parser)

    # SAT command
    sat_parser = subparsers.add_parser(
        "sat", help="Check whether the probe can be mine-free (SAT/UNSAT)"
    )
    _add_common_arguments(sat_parser)
    sat_parser.add_argument(
        "--show-cnf", action="store_true", help="Print the DIMACS formula"
    )

    # Hybrid command
    solve_parser = subparsers.add_parser(
        "solve", help="Propagation first, then SAT (safe/unsafe/unknown)"
    )
    _add_common_arguments(solve_parser)

    args = parser.parse_args(argv)

    commands = {"check": check, "sat": sat, "solve": solve}
    if args.command not in commands:
        parser.print_help()
        return 2

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        commands[args.command](args)
    except (BoardError, OracleError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
