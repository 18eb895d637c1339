#!/usr/bin/env python3
"""
Minesweeper probe checker - main entry point.

Usage:
    python main.py check < board.txt
    python main.py sat [--show-cnf] < board.txt
    python main.py solve < board.txt
"""
import sys
from pathlib import Path

# Add src to path so the script runs from a checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from deduction.cli import main


if __name__ == "__main__":
    sys.exit(main())
