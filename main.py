#!/usr/bin/env python3
"""
Forks — personality-driven branching life simulation.
Entry point for all commands.

Usage:
    python main.py play       # Assessment, then live a life
    python main.py summary    # Saved profile & timeline
    python main.py check      # Validate the question/scenario catalogues
    python main.py --help     # Full command list
"""

import sys
from pathlib import Path

# Ensure project root is in path when running as script
sys.path.insert(0, str(Path(__file__).parent))

# Configure loguru before any other imports
from loguru import logger

from forks.config import get_settings

_settings = get_settings()
_settings.log_dir.mkdir(parents=True, exist_ok=True)

logger.remove()
logger.add(
    _settings.log_dir / "forks.log",
    rotation="10 MB",
    retention="30 days",
    level=_settings.log_level,
    format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {name}:{line} | {message}",
    enqueue=True,
)
# Only show WARNING+ in terminal (console output is handled by Rich)
logger.add(sys.stderr, level="WARNING", format="{level}: {message}")

from forks.cli.app import cli

if __name__ == "__main__":
    cli()
