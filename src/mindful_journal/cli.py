from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .bootstrap import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mindful Journal command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("gui", help="Launch the desktop journal.")

    api_parser = subparsers.add_parser("api", help="Start the local HTTP API for the journal.")
    api_parser.add_argument("--host", default="127.0.0.1")
    api_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    logging.getLogger(__name__).info("Mindful Journal CLI starting (%s)", args.command)

    if args.command == "gui":
        from .ui.app import run_gui

        run_gui()
    elif args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()


if __name__ == "__main__":
    main()
