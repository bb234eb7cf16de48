"""CLI entry point for pathcanon."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .canon import STYLES, InvalidPathError, PathStyle, canonicalize_style, explain, get_style
from .config import AppConfig, load_config

logger = logging.getLogger(__name__)

_ALL_STYLES = "all"


def _load_config_or_exit(config_path: Path | None = None) -> AppConfig:
    try:
        return load_config(config_path)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def _setup_logging(config: AppConfig, debug: bool = False) -> None:
    level = logging.DEBUG if debug else config.logging.numeric_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


def _run_canon(path: str, style: PathStyle, debug: bool = False) -> int:
    """Print the canonical form of ``path``; return the process exit code."""
    from .cli import renderer

    if debug:
        renderer.render_trace(explain(path, style))

    try:
        result = canonicalize_style(path, style)
    except InvalidPathError:
        renderer.render_invalid(path)
        return 1

    print(result)
    return 0


def _run_check(style_names: list[str], debug: bool = False) -> int:
    """Run the built-in tables; failing cases are replayed with their component tables."""
    from .cli import renderer
    from .selftest import run_self_check

    failed = 0
    for name in style_names:
        style = get_style(name)
        results = run_self_check(style)
        renderer.render_check_results(style.name, results)
        for result in results:
            if debug or not result.passed:
                renderer.render_trace(explain(result.case.path, style))
        failed += sum(1 for r in results if not r.passed)
    return 1 if failed else 0


def _check_styles(requested: str) -> list[str]:
    if requested == _ALL_STYLES:
        return list(STYLES)
    return [requested]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pathcanon", description="Canonicalize POSIX and EFI-style paths")
    subparsers = parser.add_subparsers(dest="command")

    # `pathcanon canon` subcommand
    canon_parser = subparsers.add_parser("canon", help="Canonicalize a single path")
    canon_parser.add_argument("path", help="Path to canonicalize")
    canon_parser.add_argument(
        "-s",
        "--style",
        choices=sorted(STYLES),
        default=None,
        help="Path style (default: canon.style from config)",
    )
    canon_parser.add_argument("--debug", action="store_true", help="Show component tables")

    # `pathcanon check` subcommand
    check_parser = subparsers.add_parser("check", help="Run the built-in self-check tables")
    check_parser.add_argument(
        "-s",
        "--style",
        choices=[*sorted(STYLES), _ALL_STYLES],
        default=_ALL_STYLES,
        help="Table to run (default: all)",
    )
    check_parser.add_argument("--debug", action="store_true", help="Show component tables for every case")

    # `pathcanon config` subcommand
    subparsers.add_parser("config", help="Show the effective configuration")

    # Global flags
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to config.yaml (default: ~/.pathcanon/config.yaml)",
    )

    args = parser.parse_args(argv)

    config = _load_config_or_exit(args.config_path)
    debug = getattr(args, "debug", False) or config.canon.debug
    _setup_logging(config, debug=debug)
    logger.debug("Config loaded from %s", config.source or "defaults")

    if args.command == "config":
        from .cli import renderer

        renderer.render_config(config)
        return

    if args.command == "canon":
        style = get_style(args.style or config.canon.style)
        sys.exit(_run_canon(args.path, style, debug=debug))

    style_arg = getattr(args, "style", _ALL_STYLES)
    sys.exit(_run_check(_check_styles(style_arg), debug=debug))


if __name__ == "__main__":
    main()
