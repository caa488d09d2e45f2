"""Main entry point for running kalkulang_pkg as a module.

This allows running Kalkulang with:
    python -m kalkulang_pkg
    python -m kalkulang_pkg --health-check
    python -m kalkulang_pkg -e "2+2"

This is equivalent to running:
    python -m kalkulang_pkg.cli
    kalkulang
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
