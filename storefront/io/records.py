"""Parsing and validation of the three delimited record streams.

Line formats (fields separated by commas, surrounding blanks ignored)::

    customers:  ID, Name                      e.g. ``001, Mickey Mouse``
    inventory:  Symbol, Count, item fields    e.g. ``M, 3, 2001, 65, Lincoln``
    commands:   Symbol[, args...]             e.g. ``S, 001, M, 2001, 65, Lincoln``

Item fields are ``year, grade, ...`` followed by the kind-specific strings:
coins ``type``; comics ``title, publisher``; sports cards ``player,
manufacturer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from ..core.context import ValidationContext
from ..core.errors import RecordError
from ..core.events import Command
from ..core.types import (
    Category,
    CommandKind,
    Coin,
    Comic,
    Item,
    SportsCard,
)
from ..core.utils import (
    is_letters_and_spaces,
    parse_positive_int,
    split_fields,
)
from ..state.ledger import normalize_id


@dataclass(frozen=True)
class CustomerRecord:
    id: str
    name: str


@dataclass(frozen=True)
class InventoryRecord:
    category: Category
    count: int
    item: Item


def parse_customer_id(raw: str, line_no: Optional[int] = None) -> int:
    if normalize_id(raw) is None:
        raise RecordError(f"customer ID {raw!r} invalid", line_no)
    return int(raw)


def parse_customer(line: str, line_no: Optional[int] = None) -> CustomerRecord:
    fields = split_fields(line)
    if len(fields) != 2:
        raise RecordError(f"expected 'ID, Name', got {line.strip()!r}", line_no)
    raw_id, name = fields
    parse_customer_id(raw_id, line_no)
    if not is_letters_and_spaces(name):
        raise RecordError(f"customer name {name!r} must be letters and spaces", line_no)
    return CustomerRecord(id=raw_id, name=name)


def parse_category(symbol: str, line_no: Optional[int] = None) -> Category:
    try:
        return Category(symbol)
    except ValueError:
        raise RecordError(f"invalid item type: {symbol!r}", line_no) from None


def _year(raw: str, ctx: ValidationContext, line_no: Optional[int]) -> int:
    year = parse_positive_int(raw)
    if year is None or year > ctx.current_year:
        raise RecordError(
            f"year {raw!r} must be between 1 and {ctx.current_year}", line_no
        )
    return year


def _coin(fields: Sequence[str], ctx: ValidationContext, line_no: Optional[int]) -> Coin:
    year_raw, grade_raw, coin_type = fields
    grade = parse_positive_int(grade_raw)
    if grade is None:
        raise RecordError(f"coin grade {grade_raw!r} must be a positive integer", line_no)
    return Coin(type=coin_type, year=_year(year_raw, ctx, line_no), grade=grade)


def _comic(fields: Sequence[str], ctx: ValidationContext, line_no: Optional[int]) -> Comic:
    year_raw, grade, title, publisher = fields
    return Comic(
        publisher=publisher, title=title, year=_year(year_raw, ctx, line_no), grade=grade
    )


def _sports_card(
    fields: Sequence[str], ctx: ValidationContext, line_no: Optional[int]
) -> SportsCard:
    year_raw, grade, player, manufacturer = fields
    return SportsCard(
        player=player,
        year=_year(year_raw, ctx, line_no),
        manufacturer=manufacturer,
        grade=grade,
    )


ItemParser = Callable[[Sequence[str], ValidationContext, Optional[int]], Item]

# category -> (field count, parser)
_ITEM_PARSERS: Dict[Category, Tuple[int, ItemParser]] = {
    Category.COIN: (3, _coin),
    Category.COMIC: (4, _comic),
    Category.SPORTS_CARD: (4, _sports_card),
}


def parse_item(
    category: Category,
    fields: Sequence[str],
    ctx: ValidationContext,
    line_no: Optional[int] = None,
) -> Item:
    width, parser = _ITEM_PARSERS[category]
    if len(fields) != width or any(not f for f in fields):
        raise RecordError(
            f"{category.name.lower()} needs {width} non-empty fields, got {list(fields)}",
            line_no,
        )
    return parser(fields, ctx, line_no)


def parse_inventory(
    line: str, ctx: ValidationContext, line_no: Optional[int] = None
) -> InventoryRecord:
    fields = split_fields(line)
    if len(fields) < 2:
        raise RecordError(f"expected 'Symbol, Count, ...', got {line.strip()!r}", line_no)
    category = parse_category(fields[0], line_no)
    count = parse_positive_int(fields[1])
    if count is None:
        raise RecordError(f"invalid item count {fields[1]!r}", line_no)
    item = parse_item(category, fields[2:], ctx, line_no)
    return InventoryRecord(category=category, count=count, item=item)


_ARITY: Dict[CommandKind, Callable[[int], bool]] = {
    CommandKind.SELL: lambda n: n >= 2,
    CommandKind.BUY: lambda n: n >= 2,
    CommandKind.CUSTOMER: lambda n: n == 1,
    CommandKind.HISTORY: lambda n: n == 0,
    CommandKind.DISPLAY: lambda n: n == 0,
}


def parse_command(line: str, line_no: Optional[int] = None) -> Command:
    fields = split_fields(line)
    symbol, args = fields[0], fields[1:]
    try:
        kind = CommandKind(symbol)
    except ValueError:
        raise RecordError(f"unknown command {symbol!r}", line_no) from None
    if not _ARITY[kind](len(args)):
        raise RecordError(
            f"wrong number of arguments for {kind.name.lower()}: {args}", line_no
        )
    return Command(kind=kind, args=list(args), line_no=line_no)
