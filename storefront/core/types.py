"""Core type definitions for the store.

Three collectible kinds are sold, each with its own sort order. Items are only
ever compared with items of the same kind because every kind lives in its own
multiset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import ClassVar, Dict, List, Type, Union


class Category(str, Enum):
    COIN = "M"
    COMIC = "C"
    SPORTS_CARD = "S"


# inventory report order
CANONICAL_ORDER = (Category.COIN, Category.COMIC, Category.SPORTS_CARD)


class TransactionKind(str, Enum):
    BUY = "B"
    SELL = "S"


class CommandKind(str, Enum):
    SELL = "S"
    BUY = "B"
    CUSTOMER = "C"
    HISTORY = "H"
    DISPLAY = "D"


@dataclass(frozen=True, order=True)
class Coin:
    # field order is the sort order: type, year, grade
    type: str
    year: int
    grade: int

    category: ClassVar[Category] = Category.COIN

    def __str__(self) -> str:
        return f"{self.type}, {self.year}, {self.grade}"


@dataclass(frozen=True, order=True)
class Comic:
    publisher: str
    title: str
    year: int
    grade: str

    category: ClassVar[Category] = Category.COMIC

    def __str__(self) -> str:
        return f"{self.publisher}, {self.title}, {self.year}, {self.grade}"


@dataclass(frozen=True, order=True)
class SportsCard:
    player: str
    year: int
    manufacturer: str
    grade: str

    category: ClassVar[Category] = Category.SPORTS_CARD

    def __str__(self) -> str:
        return f"{self.player}, {self.year}, {self.manufacturer}, {self.grade}"


Item = Union[Coin, Comic, SportsCard]

ITEM_KINDS: Dict[Category, Type[Item]] = {
    Category.COIN: Coin,
    Category.COMIC: Comic,
    Category.SPORTS_CARD: SportsCard,
}


@dataclass
class Transaction:
    kind: TransactionKind
    item: Item

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.item}"


@total_ordering
@dataclass(eq=False)
class Customer:
    """A store customer.

    Customers are ordered and compared by name only, so two customers sharing
    a name collapse onto the same node of the name index.
    """

    id: str
    name: str
    transactions: List[Transaction] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Customer):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: "Customer") -> bool:
        if not isinstance(other, Customer):
            return NotImplemented
        return self.name < other.name

    __hash__ = None  # type: ignore[assignment]

    def add_transaction(self, transaction: Transaction):
        self.transactions.append(transaction)

    def __str__(self) -> str:
        return f"Customer: {self.id}, {self.name}"
