"""Customer directory.

Customers are reachable two ways: by numeric ID through a direct lookup table,
and in name order through an ordered multiset. Both hold the very same
Customer objects.

The name index cannot tell apart two customers sharing a name. The second one
only bumps the name's count, so the first keeps the node and the second is
reachable by ID alone.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Callable, Dict, Iterator, Optional, Union

from ..core.errors import DuplicateCustomer, InvalidArgument, UnknownCustomer
from ..core.types import Customer, Item, Transaction, TransactionKind
from ..core.utils import is_digits
from .multiset import OrderedMultiset

logger = logging.getLogger(__name__)

MAX_CUSTOMERS = 1000

CustomerId = Union[int, str]


def normalize_id(customer_id: CustomerId) -> Optional[int]:
    """Return the table slot for an ID, or None when it is not 0-999."""
    if isinstance(customer_id, bool):
        return None
    if isinstance(customer_id, int):
        value = customer_id
    elif isinstance(customer_id, str) and is_digits(customer_id.strip()):
        value = int(customer_id.strip())
    else:
        return None
    return value if 0 <= value < MAX_CUSTOMERS else None


class CustomerLedger:
    def __init__(self) -> None:
        self._by_id: Dict[int, Customer] = {}
        self._by_name: OrderedMultiset[Customer] = OrderedMultiset()

    def add_customer(self, customer_id: CustomerId, name: str) -> Customer:
        slot = normalize_id(customer_id)
        if slot is None:
            raise InvalidArgument(f"customer ID out of range: {customer_id!r}")
        if not name:
            raise InvalidArgument("customer name is required")
        if slot in self._by_id:
            raise DuplicateCustomer(slot)
        display_id = customer_id if isinstance(customer_id, str) else f"{slot:03d}"
        customer = Customer(id=display_id.strip(), name=name)
        self._by_id[slot] = customer
        if not self._by_name.insert(customer):
            logger.warning(
                "customer %s shares the name %r with an existing customer; "
                "only the first appears in name-ordered reports",
                customer.id,
                name,
            )
        return customer

    def find(self, customer_id: CustomerId) -> Optional[Customer]:
        slot = normalize_id(customer_id)
        if slot is None:
            return None
        return self._by_id.get(slot)

    def append_transaction(
        self, customer_id: CustomerId, kind: TransactionKind, item: Item
    ) -> Transaction:
        """Record a transaction holding its own copy of ``item``."""
        if item is None:
            raise InvalidArgument("an item is required, got None")
        customer = self.find(customer_id)
        if customer is None:
            raise UnknownCustomer(customer_id)
        transaction = Transaction(kind=TransactionKind(kind), item=deepcopy(item))
        customer.add_transaction(transaction)
        return transaction

    def customers(self) -> Iterator[Customer]:
        """Customers in ascending name order."""
        return self._by_name.keys()

    def for_each_in_name_order(self, visitor: Callable[[Customer], None]) -> None:
        for customer in self._by_name.keys():
            visitor(customer)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, customer_id: object) -> bool:
        return self.find(customer_id) is not None  # type: ignore[arg-type]
