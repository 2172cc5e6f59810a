"""Load record streams into the store structures.

A bad record is logged, counted and skipped; loading always continues with
the next line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple

from ..core.context import ValidationContext
from ..core.errors import InvalidArgument, RecordError
from ..core.events import Command
from ..state.catalog import CatalogIndex
from ..state.ledger import CustomerLedger
from . import metrics
from .records import parse_command, parse_customer, parse_inventory

logger = logging.getLogger(__name__)

Lines = Iterable[Tuple[int, str]]


@dataclass
class LoadSummary:
    accepted: int = 0
    rejected: int = 0


def read_lines(path: str | Path) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_no, text)`` for each non-blank line of ``path``.

    Bytes that are not UTF-8 decode to U+FFFD, so the field checks reject
    the one record that carries them instead of the whole file.
    """
    with Path(path).open("r", encoding="utf-8", errors="replace") as f:
        for line_no, line in enumerate(f, start=1):
            if line.strip():
                yield line_no, line.rstrip("\r\n")


def numbered(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Number in-memory lines the way :func:`read_lines` numbers a file."""
    for line_no, line in enumerate(lines, start=1):
        if line.strip():
            yield line_no, line


def _reject(stream: str, summary: LoadSummary, err: Exception):
    summary.rejected += 1
    metrics.inc_rejected(stream)
    logger.warning("skipping %s record: %s", stream, err)


def load_customers(ledger: CustomerLedger, lines: Lines) -> LoadSummary:
    summary = LoadSummary()
    for line_no, line in lines:
        try:
            record = parse_customer(line, line_no)
            if ledger.find(record.id) is not None:
                raise RecordError(f"customer ID {record.id} already loaded", line_no)
            ledger.add_customer(record.id, record.name)
        except (RecordError, InvalidArgument) as e:
            _reject("customers", summary, e)
            continue
        summary.accepted += 1
    logger.info(
        "loaded %d customers (%d rejected)", summary.accepted, summary.rejected
    )
    return summary


def load_inventory(
    catalog: CatalogIndex, lines: Lines, ctx: ValidationContext
) -> LoadSummary:
    summary = LoadSummary()
    for line_no, line in lines:
        try:
            record = parse_inventory(line, ctx, line_no)
            catalog.add_units(record.category, record.item, record.count)
        except (RecordError, InvalidArgument) as e:
            _reject("inventory", summary, e)
            continue
        summary.accepted += 1
    logger.info(
        "loaded %d inventory records (%d rejected)", summary.accepted, summary.rejected
    )
    return summary


def load_commands(lines: Lines) -> List[Command]:
    commands: List[Command] = []
    rejected = LoadSummary()
    for line_no, line in lines:
        try:
            commands.append(parse_command(line, line_no))
        except RecordError as e:
            _reject("commands", rejected, e)
    logger.info("parsed %d commands (%d rejected)", len(commands), rejected.rejected)
    return commands
