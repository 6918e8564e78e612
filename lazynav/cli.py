"""Command-line front door for lazynav.

Parses options, resolves settings from the config file, and either prints a
one-shot snapshot of a level (``--json``/``--render``) or starts the
interactive navigator.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shutil
import sys

from .errors import FetchError
from .highlight import highlight_json
from .render import render_plain, views_to_json
from .runtime import run_navigator
from .runtime.app import load_views
from .runtime.config import NavigatorSettings, load_last_path
from .runtime.views import NavigationViews
from .tree_path import normalize_path
from .ui_theme import available_theme_names, resolve_theme

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _default_render_width() -> int:
    return max(1, shutil.get_terminal_size((80, 24)).columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazynav",
        description="Browse a hierarchical content tree served over HTTP.",
    )
    parser.add_argument("api_url", nargs="?", default=None, help="Backend API base URL (default from config).")
    parser.add_argument("--path", default=None, help="Dotted path to open first (default: root).")
    parser.add_argument("--resume", action="store_true", help="Reopen the path open when the last session exited.")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Request timeout in seconds.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument(
        "--max-cached-paths",
        type=_positive_int,
        default=None,
        help="Bound the number of cached listings (default: unbounded).",
    )
    parser.add_argument("--json", metavar="PATH", default=None, help="Print the views for PATH as JSON and exit.")
    parser.add_argument("--render", metavar="PATH", default=None, help="Print the views for PATH as text and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--style", default="monokai", help="Pygments style name for --json output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--log-file", default=None, help="Write log records to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    return parser


def configure_logging(log_file: str | None, debug: bool, interactive: bool) -> None:
    """Route logging away from the terminal while the TUI owns it."""
    level = logging.DEBUG if debug else logging.INFO
    if log_file is not None:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=log_file)
    elif debug and not interactive:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def _one_shot(settings: NavigatorSettings, target: str) -> NavigationViews:
    try:
        views = asyncio.run(load_views(settings, normalize_path(target) or None))
    except FetchError as e:
        raise SystemExit(f"lazynav: {e}") from e
    return views


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.json is not None and args.render is not None:
        raise SystemExit("Cannot combine --json with --render.")
    interactive = args.json is None and args.render is None
    configure_logging(args.log_file, args.debug, interactive)

    settings = NavigatorSettings.resolve(
        api_url=args.api_url,
        request_timeout=args.timeout,
        max_cached_paths=args.max_cached_paths,
        theme_name=args.theme,
    )

    if args.json is not None:
        text = views_to_json(_one_shot(settings, args.json)) + "\n"
        if sys.stdout.isatty() and not args.no_color:
            text = highlight_json(text, args.style)
        sys.stdout.write(text)
        return

    if args.render is not None:
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(render_plain(_one_shot(settings, args.render), max_cols))
        return

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("lazynav: interactive mode needs a terminal; use --json or --render.")
    initial_path = args.path
    if initial_path is None and args.resume:
        initial_path = load_last_path()
    theme = resolve_theme(settings.theme_name, no_color=args.no_color)
    raise SystemExit(run_navigator(settings, theme, initial_path))


if __name__ == "__main__":
    main()
