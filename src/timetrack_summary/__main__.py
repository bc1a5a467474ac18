"""
Package entry point for python -m execution.

USAGE:
    python -m timetrack_summary                 # Serve the dashboard
    python -m timetrack_summary serve --dev     # Serve with template hot-reload
"""

import sys

from timetrack_summary.cli import main

if __name__ == "__main__":
    sys.exit(main())
