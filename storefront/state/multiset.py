"""Ordered multiset backed by an unbalanced binary search tree.

Each distinct key is stored once, in its own node, together with the number of
occurrences it stands for. Keys only need ``<`` and ``==``; the same comparison
decides placement and duplicate detection, there is no separate identity.

The tree is never rebalanced, so its height follows insertion order (sorted
input degenerates into a chain). Every walk below is iterative for that reason.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from ..core.errors import InternalConsistencyError, InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("key", "count", "left", "right")

    def __init__(self, key: T, count: int):
        self.key = key
        self.count = count
        self.left: Optional[_Node[T]] = None
        self.right: Optional[_Node[T]] = None


class OrderedMultiset(Generic[T]):
    """Sorted bag of keys with per-key occurrence counts.

    Counts are always >= 1: a node whose last occurrence is removed is unlinked
    from the tree. Equality is structural, two multisets are equal only when
    their trees have the same shape and matching nodes hold equal keys and
    counts. Holding the same keys in a differently shaped tree is not enough.
    """

    def __init__(self) -> None:
        self._root: Optional[_Node[T]] = None
        self._size = 0  # distinct keys
        self._total = 0  # sum of counts

    # ------------------------------------------------------------------ mutation

    def insert(self, key: T, units: int = 1) -> bool:
        """Add ``units`` occurrences of ``key``.

        Returns True when a new node was created. When an equal key is already
        stored its count grows by ``units``, the stored key stays canonical
        and the passed-in ``key`` is dropped; returns False.
        """
        _require_key(key)
        if isinstance(units, bool) or not isinstance(units, int) or units < 1:
            raise InvalidArgument(f"units must be a positive integer, got {units!r}")
        parent: Optional[_Node[T]] = None
        node = self._root
        while node is not None:
            if key < node.key:
                parent, node = node, node.left
            elif key == node.key:
                node.count += units
                self._total += units
                return False
            else:
                parent, node = node, node.right
        fresh = _Node(key, units)
        if parent is None:
            self._root = fresh
        elif key < parent.key:
            parent.left = fresh
        else:
            parent.right = fresh
        self._size += 1
        self._total += units
        return True

    def remove(self, key: T) -> bool:
        """Remove one occurrence of ``key``; False when it is not stored."""
        parent, node = self._locate(key)
        if node is None:
            return False
        self._total -= 1
        if node.count > 1:
            node.count -= 1
            return True
        self._unlink(parent, node)
        self._size -= 1
        return True

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._total = 0

    # ------------------------------------------------------------------- lookup

    def retrieve(self, key: T) -> Optional[T]:
        """Return the stored key equal to ``key`` (do not mutate it), or None."""
        _, node = self._locate(key)
        return node.key if node is not None else None

    def contains(self, key: T) -> bool:
        return self._locate(key)[1] is not None

    def __contains__(self, key: object) -> bool:
        return self.contains(key)  # type: ignore[arg-type]

    def count(self, key: T) -> int:
        _, node = self._locate(key)
        return node.count if node is not None else 0

    def height(self, key: T) -> int:
        """Height of the subtree rooted at the node holding ``key``.

        A leaf has height 0; -1 means the key is not stored. This is measured
        downwards from the matching node, not as its depth below the root.
        """
        _, node = self._locate(key)
        if node is None:
            return -1
        levels = -1
        frontier: List[_Node[T]] = [node]
        while frontier:
            levels += 1
            frontier = [c for n in frontier for c in (n.left, n.right) if c is not None]
        return levels

    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self) -> int:
        return self._size

    def total(self) -> int:
        return self._total

    # ---------------------------------------------------------------- traversal

    def items(self) -> Iterator[Tuple[T, int]]:
        """Yield ``(key, count)`` pairs in ascending key order."""
        stack: List[_Node[T]] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.key, node.count
            node = node.right

    def keys(self) -> Iterator[T]:
        for key, _ in self.items():
            yield key

    def elements(self) -> Iterator[T]:
        """Yield every key repeated by its count, in ascending order."""
        for key, count in self.items():
            for _ in range(count):
                yield key

    def __iter__(self) -> Iterator[T]:
        return self.keys()

    # --------------------------------------------------------- copy / equality

    def copy(self) -> "OrderedMultiset[T]":
        """Deep copy: new nodes and copied keys, nothing shared with ``self``."""
        return self._clone({})

    def __copy__(self) -> "OrderedMultiset[T]":
        return self._clone({})

    def __deepcopy__(self, memo: Dict[int, Any]) -> "OrderedMultiset[T]":
        return self._clone(memo)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMultiset):
            return NotImplemented
        pairs: List[Tuple[Optional[_Node[Any]], Optional[_Node[Any]]]] = [
            (self._root, other._root)
        ]
        while pairs:
            a, b = pairs.pop()
            if a is None and b is None:
                continue
            if a is None or b is None:
                return False
            if not (a.key == b.key and a.count == b.count):
                return False
            pairs.append((a.left, b.left))
            pairs.append((a.right, b.right))
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items())!r})"

    # ------------------------------------------------------------------ helpers

    def _locate(self, key: T) -> Tuple[Optional[_Node[T]], Optional[_Node[T]]]:
        """Return ``(parent, node)`` for ``key``; node is None when absent."""
        _require_key(key)
        parent: Optional[_Node[T]] = None
        node = self._root
        while node is not None:
            if key < node.key:
                parent, node = node, node.left
            elif key == node.key:
                return parent, node
            else:
                parent, node = node, node.right
        return parent, None

    def _unlink(self, parent: Optional[_Node[T]], node: _Node[T]) -> None:
        if node.left is None or node.right is None:
            child = node.right if node.right is not None else node.left
            self._replace_child(parent, node, child)
            return
        # two children: the in-order successor takes over this node's slot
        successor = self._detach_leftmost(node, node.right)
        logger.debug("successor %r replaces %r", successor.key, node.key)
        node.key = successor.key
        node.count = successor.count

    def _detach_leftmost(
        self, parent: _Node[T], subtree: Optional[_Node[T]]
    ) -> _Node[T]:
        if subtree is None:
            raise InternalConsistencyError(
                "successor search started on an empty subtree"
            )
        node = subtree
        while node.left is not None:
            parent, node = node, node.left
        # the leftmost node has at most a right child
        self._replace_child(parent, node, node.right)
        return node

    def _replace_child(
        self,
        parent: Optional[_Node[T]],
        child: _Node[T],
        replacement: Optional[_Node[T]],
    ) -> None:
        if parent is None:
            self._root = replacement
        elif parent.left is child:
            parent.left = replacement
        elif parent.right is child:
            parent.right = replacement
        else:
            raise InternalConsistencyError("node is not linked under its parent")

    def _clone(self, memo: Dict[int, Any]) -> "OrderedMultiset[T]":
        clone: OrderedMultiset[T] = type(self)()
        clone._size = self._size
        clone._total = self._total
        if self._root is None:
            return clone
        clone._root = _Node(deepcopy(self._root.key, memo), self._root.count)
        pending: List[Tuple[_Node[T], _Node[T]]] = [(self._root, clone._root)]
        while pending:
            src, dst = pending.pop()
            if src.left is not None:
                dst.left = _Node(deepcopy(src.left.key, memo), src.left.count)
                pending.append((src.left, dst.left))
            if src.right is not None:
                dst.right = _Node(deepcopy(src.right.key, memo), src.right.count)
                pending.append((src.right, dst.right))
        return clone


def _require_key(key: object) -> None:
    if key is None:
        raise InvalidArgument("a key is required, got None")
