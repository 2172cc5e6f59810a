"""App bootstrap: build a loaded store from the configured input files."""

from __future__ import annotations

from ..core.context import ValidationContext
from ..io.loaders import load_customers, load_inventory, read_lines
from ..state.store import Store
from .config import Settings


def build_store(settings: Settings, ctx: ValidationContext | None = None) -> Store:
    """Load customers, then inventory, into a fresh store."""
    ctx = ctx or settings.validation_context()
    store = Store()
    load_customers(store.ledger, read_lines(settings.customers_file))
    load_inventory(store.catalog, read_lines(settings.inventory_file), ctx)
    return store
