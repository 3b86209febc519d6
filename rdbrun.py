#!/usr/bin/env python3
"""rdbloader CLI entrypoint -- run without pip install.

Usage:
    python rdbrun.py validate config.yml
    python rdbrun.py --help
"""

import sys
from pathlib import Path

# Add src/ to import path so the rdbloader package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from rdbloader.cli import app

if __name__ == "__main__":
    app()
