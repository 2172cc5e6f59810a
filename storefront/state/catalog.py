"""Per-category item inventory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple, Union

from ..core.errors import InvalidArgument, UnknownCategory
from ..core.types import CANONICAL_ORDER, ITEM_KINDS, Category, Item
from .multiset import OrderedMultiset


CategoryLike = Union[Category, str]


@dataclass(frozen=True)
class BuyResult:
    already_present: bool


def resolve_category(category: CategoryLike) -> Category:
    """Map a Category or its one-letter symbol to a Category."""
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise UnknownCategory(category) from None


class CatalogIndex:
    """One ordered multiset of items per collectible category."""

    def __init__(self) -> None:
        self._trees: Dict[Category, OrderedMultiset[Item]] = {
            c: OrderedMultiset() for c in CANONICAL_ORDER
        }

    def tree(self, category: CategoryLike) -> OrderedMultiset[Item]:
        return self._trees[resolve_category(category)]

    def _tree_for(self, category: CategoryLike, item: Item) -> OrderedMultiset[Item]:
        if item is None:
            raise InvalidArgument("an item is required, got None")
        cat = resolve_category(category)
        if not isinstance(item, ITEM_KINDS[cat]):
            raise InvalidArgument(
                f"{type(item).__name__} does not belong to category {cat.name}"
            )
        return self._trees[cat]

    def add_units(self, category: CategoryLike, item: Item, count: int) -> bool:
        """Stock ``count`` units of ``item``; True when the item is new."""
        return self._tree_for(category, item).insert(item, count)

    def sell_one(self, category: CategoryLike, item: Item) -> bool:
        """Take one unit out of stock; False means the item is not in stock."""
        return self._tree_for(category, item).remove(item)

    def buy_one(self, category: CategoryLike, item: Item) -> BuyResult:
        inserted = self._tree_for(category, item).insert(item, 1)
        return BuyResult(already_present=not inserted)

    def count(self, category: CategoryLike, item: Item) -> int:
        return self._tree_for(category, item).count(item)

    def contains(self, category: CategoryLike, item: Item) -> bool:
        return self._tree_for(category, item).contains(item)

    def sections(self) -> Iterator[Tuple[Category, OrderedMultiset[Item]]]:
        """Categories in report order, each with its multiset."""
        for cat in CANONICAL_ORDER:
            yield cat, self._trees[cat]

    def total_units(self) -> int:
        return sum(t.total() for t in self._trees.values())
