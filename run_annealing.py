#!/usr/bin/env python3
"""
Run the annealing engine on an example model.

Usage:
    python run_annealing.py --model quadratic
    python run_annealing.py --model timetable --deadline 5 --seed 42
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from annealing.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
