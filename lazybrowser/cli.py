"""Command-line front door for lazybrowser.

Parses CLI options, builds the runtime configuration, sets up logging,
then hands the terminal to the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import sys
import termios
from pathlib import Path

from .config import LOG_LEVEL_ENV, build_config
from .log import setup_logging
from .preview import DEFAULT_STYLE
from .session import run_session

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazybrowser",
        description="Browse, filter, preview, and rearrange files from the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to start in. Defaults to current directory.")
    parser.add_argument("--editor", default=None, help="Command used to open files (default: $VISUAL, $EDITOR, nvim, vi).")
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the list and preview.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for previews.")
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Log level name (default: ${LOG_LEVEL_ENV} or WARNING).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse arguments and run the browser until the user quits.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("lazybrowser needs an interactive terminal.")

    config = build_config(
        path,
        editor=args.editor,
        no_color=args.no_color,
        style=args.style,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    setup_logging(config.log_level, config.log_file)

    try:
        run_session(config, sys.stdin.fileno(), sys.stdout.fileno())
    except (termios.error, OSError) as exc:
        logger.exception("Terminal session failed")
        raise SystemExit(f"lazybrowser: terminal error: {exc}") from exc


if __name__ == "__main__":
    main()
