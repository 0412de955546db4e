"""
WidgetFinder — Application Runner.

Usage:
    python run.py api                    → FastAPI (API_HOST:API_PORT)
    python run.py find <tag> [offset] [limit] [--expand]
"""

import sys

from widget_finder.cli import main

if __name__ == "__main__":
    sys.exit(main())
