"""In-memory store: the item catalog plus the customer ledger."""

from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import CatalogIndex
from .ledger import CustomerLedger


@dataclass
class Store:
    catalog: CatalogIndex = field(default_factory=CatalogIndex)
    ledger: CustomerLedger = field(default_factory=CustomerLedger)
