"""Command engine: replays buy/sell/report commands against a store.

Each handler validates everything it needs (customer, item) before touching
the catalog or the ledger, so a rejected command leaves no trace. Tree
consistency errors are not caught here; they end the run.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, TextIO

from ..core.context import ValidationContext
from ..core.errors import RecordError
from ..core.events import Command
from ..core.types import CommandKind, Customer, Item, TransactionKind
from ..io import metrics
from ..io.records import parse_category, parse_customer_id, parse_item
from ..io.report import format_customer, format_history, format_inventory
from ..state.store import Store

logger = logging.getLogger(__name__)

Handler = Callable[[Command], bool]


@dataclass
class RunSummary:
    executed: int = 0
    failed: int = 0


class CommandEngine:
    def __init__(
        self,
        store: Store,
        ctx: ValidationContext,
        out: Optional[TextIO] = None,
    ):
        self.store = store
        self.ctx = ctx
        self.out = out if out is not None else sys.stdout
        self._handlers: Dict[CommandKind, Handler] = {
            CommandKind.SELL: self._sell,
            CommandKind.BUY: self._buy,
            CommandKind.CUSTOMER: self._show_customer,
            CommandKind.HISTORY: self._show_history,
            CommandKind.DISPLAY: self._show_inventory,
        }

    def execute(self, command: Command) -> bool:
        ok = self._handlers[command.kind](command)
        metrics.inc_command(command.kind.name.lower(), ok)
        return ok

    def run(self, commands: Iterable[Command]) -> RunSummary:
        summary = RunSummary()
        for command in commands:
            summary.executed += 1
            if not self.execute(command):
                summary.failed += 1
        return summary

    # ---------------------------------------------------------------- lookups

    def _fail(self, message: str) -> bool:
        """Report a rejected command on the output stream, in line with the reports."""
        logger.warning("%s", message)
        self.out.write(f"{message}\n\n")
        return False

    def _customer(self, command: Command, prefix: str = "") -> Optional[Customer]:
        if not command.args:
            self._fail(f"{prefix}Customer ID missing.")
            return None
        raw_id = command.args[0]
        try:
            parse_customer_id(raw_id, command.line_no)
        except RecordError:
            self._fail(f"{prefix}Customer ID {raw_id} invalid.")
            return None
        customer = self.store.ledger.find(raw_id)
        if customer is None:
            self._fail(f"{prefix}Customer ID {raw_id} not found.")
        return customer

    def _item(self, command: Command, label: str) -> Optional[Item]:
        if len(command.args) < 2:
            self._fail(f"{label}. Item missing.")
            return None
        symbol = command.args[1]
        try:
            category = parse_category(symbol, command.line_no)
        except RecordError:
            self._fail(f"{label}. Invalid item type: {symbol}")
            return None
        try:
            return parse_item(category, command.args[2:], self.ctx, command.line_no)
        except RecordError as e:
            logger.debug("%s", e)
            self._fail(f"{label}. Invalid data.")
            return None

    # --------------------------------------------------------------- handlers

    def _sell(self, command: Command) -> bool:
        customer = self._customer(command, "Sell Item Error: ")
        if customer is None:
            return False
        item = self._item(command, "Sell Item Error")
        if item is None:
            return False
        if not self.store.catalog.sell_one(item.category, item):
            return self._fail(f"Sell Item Error. Item not found: {item}")
        self.store.ledger.append_transaction(command.args[0], TransactionKind.SELL, item)
        return True

    def _buy(self, command: Command) -> bool:
        customer = self._customer(command, "Buy Item Error: ")
        if customer is None:
            return False
        item = self._item(command, "Buy Item Error")
        if item is None:
            return False
        result = self.store.catalog.buy_one(item.category, item)
        if not result.already_present:
            logger.debug("buy: new catalog record %s", item)
        self.store.ledger.append_transaction(command.args[0], TransactionKind.BUY, item)
        return True

    def _show_customer(self, command: Command) -> bool:
        customer = self._customer(command)
        if customer is None:
            return False
        self.out.write(format_customer(customer))
        return True

    def _show_history(self, command: Command) -> bool:
        self.out.write(format_history(self.store.ledger))
        return True

    def _show_inventory(self, command: Command) -> bool:
        self.out.write(format_inventory(self.store.catalog))
        return True
