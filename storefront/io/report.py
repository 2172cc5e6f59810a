"""Console reports and the JSON snapshot of a store."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from ..core.types import Customer, Item
from ..state.catalog import CatalogIndex
from ..state.ledger import CustomerLedger
from ..state.store import Store


def format_item_line(item: Item, count: int) -> str:
    return f"{item}; Count: {count}"


def format_inventory(catalog: CatalogIndex) -> str:
    """Every category in canonical order, items ascending, one per line."""
    lines = ["Inventory: "]
    for _, tree in catalog.sections():
        lines.extend(format_item_line(item, count) for item, count in tree.items())
    return "\n".join(lines) + "\n\n"


def format_customer(customer: Customer) -> str:
    lines = [str(customer), "Transactions:"]
    if customer.transactions:
        lines.extend(str(t) for t in customer.transactions)
    else:
        lines.append("none")
    return "\n".join(lines) + "\n\n"


def format_history(ledger: CustomerLedger) -> str:
    parts = ["Transaction History: \n"]
    ledger.for_each_in_name_order(lambda c: parts.append(format_customer(c)))
    return "".join(parts)


def _item_dict(item: Item) -> Dict[str, Any]:
    return {"category": item.category.value, **asdict(item), "label": str(item)}


def snapshot(store: Store) -> Dict[str, Any]:
    inventory: Dict[str, List[Dict[str, Any]]] = {}
    for category, tree in store.catalog.sections():
        inventory[category.name.lower()] = [
            {"item": _item_dict(item), "count": count} for item, count in tree.items()
        ]
    customers = [
        {
            "id": c.id,
            "name": c.name,
            "transactions": [
                {"kind": t.kind.value, "item": _item_dict(t.item)} for t in c.transactions
            ],
        }
        for c in store.ledger.customers()
    ]
    return {"inventory": inventory, "customers": customers}
