#!/usr/bin/env python3
"""
Minesweeper - run from a source checkout.

Usage:
    python main.py play [--difficulty {easy,medium,hard}]
    python main.py scores
    python main.py theme [{light,dark}]
"""
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minesweeper.cli import main


if __name__ == "__main__":
    main()
