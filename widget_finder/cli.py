"""
WidgetFinder — Command-line runner.

Usage:
    python run.py api                          → FastAPI server (uvicorn)
    python run.py find tag5                    → first page of widgets as JSON
    python run.py find tag5 20 20 --expand     → second page, full tag/dongle records
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from widget_finder.core.config import settings
from widget_finder.core.logging_config import setup_logging


def run_fastapi() -> None:
    """Start the FastAPI app on the configured host/port."""
    import uvicorn

    print(f"🚀 {settings.APP_NAME} API → http://{settings.API_HOST}:{settings.API_PORT}")
    uvicorn.run(
        "widget_finder.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


def run_find(tag: str, offset: str, limit: str, expand: bool) -> int:
    """Run one lookup and print it; returns the process exit status."""
    from widget_finder.api.v1.dependencies import get_widget_service

    lookup = get_widget_service().lookup_widgets_with_tag(tag, offset, limit, expand=expand)
    if not lookup.ok:
        print(lookup.error, file=sys.stderr)
        return 1

    print(json.dumps([w.to_dict() for w in lookup.widgets], indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="widget-finder")
    sub = parser.add_subparsers(dest="mode", required=True)

    sub.add_parser("api", help="Serve the HTTP API")

    find = sub.add_parser("find", help="Print widgets carrying a tag")
    find.add_argument("tag")
    find.add_argument("offset", nargs="?", default="0")
    find.add_argument("limit", nargs="?", default=str(settings.DEFAULT_PAGE_SIZE))
    find.add_argument("--expand", action="store_true", help="Full tag/dongle records")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    if args.mode == "api":
        run_fastapi()
        return 0
    return run_find(args.tag, args.offset, args.limit, args.expand)
