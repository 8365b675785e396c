"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import logging
import sys

from weather_scrubber import __version__
from weather_scrubber.config import get_settings
from weather_scrubber.datasources.weather.client import TARGET_DATE
from weather_scrubber.flows.build import build_snapshot_page
from weather_scrubber.web import create_server


def hour_arg(value: str) -> int:
    """argparse type for a slider hour (0-23)."""
    hour = int(value)
    if not 0 <= hour <= 23:
        raise argparse.ArgumentTypeError(f"hour must be between 0 and 23, got {hour}")
    return hour


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-scrubber",
        description=f"Scrub hourly weather and radar for {TARGET_DATE.isoformat()}",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'snapshot' command - build a static page for one hour
    snapshot_parser = subparsers.add_parser("snapshot", help="Build a static page for one hour")
    snapshot_parser.add_argument(
        "--hour",
        type=hour_arg,
        default=0,
        help=f"Hour of {TARGET_DATE.isoformat()} to show, 0-23 (default: 0)",
    )

    # 'serve' command - interactive slider
    serve_parser = subparsers.add_parser("serve", help="Serve the interactive slider")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: serve_port from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Location: ({settings.lat}, {settings.lon})")
    print(f"Date: {TARGET_DATE.isoformat()} ({settings.timezone})")
    return 0


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Handle the 'snapshot' command: build the static page for one hour."""
    result = build_snapshot_page(args.hour)
    for message in result["errors"]:
        print(f"Error: {message}", file=sys.stderr)
    print(f"Wrote {result['output']}")
    return 1 if result["errors"] else 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: run the interactive slider server."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.serve_port

    with create_server(port) as server:
        print(f"Serving slider on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.debug or get_settings().debug:
        logging.basicConfig(level=logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "snapshot": cmd_snapshot,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
