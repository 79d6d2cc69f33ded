"""CLI entry point for browsing projectile records.

Provides ``main()`` for the ``ballistics-projectiles`` console script.

Usage::

    ballistics-projectiles list                      # every built-in projectile
    ballistics-projectiles list --file hornady --base boat
    ballistics-projectiles list --drag-function g7
    ballistics-projectiles show hornady_308_168_eld_m
    ballistics-projectiles --data-dir ./records list
"""

import argparse
import logging
import sys
from pathlib import Path

from ballistics.config import BallisticsConfig
from ballistics.exceptions import BallisticsError
from ballistics.logging_config import setup_logging
from ballistics.models import Projectile
from ballistics.storage import locator_from_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ballistics-projectiles CLI."""
    parser = argparse.ArgumentParser(
        prog="ballistics-projectiles",
        description="List and describe projectile ballistic records",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Record directory with one subdirectory per group (default: built-in records)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write DEBUG logs to this file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output on the console",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List projectiles with their preferred BC")
    list_cmd.add_argument(
        "--file",
        type=str,
        default=None,
        help="Only load this record source (e.g. hornady)",
    )
    list_cmd.add_argument(
        "--base",
        type=str,
        default=None,
        help="Only projectiles with this base (flat, boat, bt, flat-base, ...)",
    )
    list_cmd.add_argument(
        "--drag-function",
        type=str.lower,
        choices=sorted(Projectile.DRAG_NUMBER),
        default=None,
        help="Only projectiles whose preferred drag function is this one",
    )

    show_cmd = sub.add_parser("show", help="Describe a single projectile")
    show_cmd.add_argument("id", help="Projectile record id")
    show_cmd.add_argument(
        "--file",
        type=str,
        default=None,
        help="Only look in this record source",
    )
    return parser


def _make_predicate(args: argparse.Namespace):
    """Combine --base and --drag-function into one predicate, or None."""
    base = Projectile.normalize_base(args.base) if args.base else None
    drag_function = args.drag_function

    if base is None and drag_function is None:
        return None

    def predicate(prj: Projectile) -> bool:
        if base is not None and prj.base != base:
            return False
        if drag_function is not None and prj.drag_function != drag_function:
            return False
        return True

    return predicate


def _format_listing(projectiles: dict[str, Projectile]) -> str:
    """One line per projectile: id, name, drag function and BC."""
    if not projectiles:
        return "No projectiles found"
    width = max(len(str(pid)) for pid in projectiles)
    lines = []
    for pid, prj in sorted(projectiles.items(), key=lambda item: str(item[0])):
        lines.append(
            f"{str(pid).ljust(width)}  {prj.name}  "
            f"{prj.drag_function.upper()} {prj.bc()}"
        )
    return "\n".join(lines)


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command and return the text to print."""
    config = BallisticsConfig()
    if args.data_dir is not None:
        config.data_dir = Path(args.data_dir)
    locator = locator_from_config(config)

    if args.command == "show":
        prj = Projectile.find(file=args.file, id=args.id, locator=locator)
        return prj.describe()

    projectiles = Projectile.find(
        file=args.file, predicate=_make_predicate(args), locator=locator
    )
    logger.debug("Listing %d projectiles", len(projectiles))
    return _format_listing(projectiles)


def main(argv: list[str] | None = None) -> int:
    """Sync entry point for the ballistics-projectiles console script."""
    args = build_parser().parse_args(argv)
    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    try:
        print(run(args))
    except BallisticsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
