"""Entry point: load customers and inventory, then replay the command file."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings
from .main import build_store
from ..exec.engine import CommandEngine
from ..io.loaders import load_commands, read_lines
from ..io.persistence import write_snapshot
from ..io.report import snapshot

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Collectibles store simulator")
    ap.add_argument("--customers", help="Customer file")
    ap.add_argument("--inventory", help="Inventory file")
    ap.add_argument("--commands", help="Command file")
    ap.add_argument(
        "--current-year",
        type=int,
        help="Latest acceptable item year (default: this year)",
    )
    ap.add_argument("--snapshot-json", help="Write the final store state to this path")
    ap.add_argument("--log-level", type=str.upper, help="Logging level")
    return ap


def parse_args(
    argv: Optional[List[str]],
    settings: Settings,
    ap: Optional[argparse.ArgumentParser] = None,
) -> argparse.Namespace:
    ap = ap or build_parser()
    ap.set_defaults(
        customers=settings.customers_file,
        inventory=settings.inventory_file,
        commands=settings.commands_file,
        current_year=settings.current_year,
        snapshot_json=settings.snapshot_json,
        log_level=settings.log_level,
    )
    args = ap.parse_args(argv)
    # defaults from the environment skip argparse's own checks
    if args.log_level not in LOG_LEVELS:
        ap.error(f"unknown log level {args.log_level!r}, pick one of {', '.join(LOG_LEVELS)}")
    if args.current_year is not None and args.current_year < 1:
        ap.error(f"--current-year must be positive, got {args.current_year}")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    try:
        settings = Settings.from_env()
    except ValueError as e:
        ap.error(str(e))
    args = parse_args(argv, settings, ap)
    settings.customers_file = args.customers
    settings.inventory_file = args.inventory
    settings.commands_file = args.commands
    settings.current_year = args.current_year
    settings.snapshot_json = args.snapshot_json

    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store = build_store(settings)
        commands = load_commands(read_lines(settings.commands_file))
    except OSError as e:
        logger.error("File could not be opened: %s", e)
        return 1

    engine = CommandEngine(store, settings.validation_context(), out=sys.stdout)
    summary = engine.run(commands)
    logger.info("%d commands run, %d failed", summary.executed, summary.failed)

    if settings.snapshot_json:
        write_snapshot(settings.snapshot_json, snapshot(store))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
