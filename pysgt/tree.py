"""Scapegoat tree: an ordered map balanced by lazy partial rebuilding.

Unlike red-black or AVL trees the nodes keep no balance information. The tree
only remembers its size and ``max_size`` (the size at the last rebuild) and
repairs itself in two situations:

    • insert – the new leaf is deeper than ``h_alpha(n) = ⌊log_{1/α} n⌋``.
      Walk up from the leaf to the first ancestor whose subtree is not
      α-weight-balanced (the *scapegoat*) and rebuild that subtree.
    • erase  – ``size < α · max_size``. Rebuild the whole tree.

Complexities (amortized):
    • find      – O(log n) worst case
    • insert    – O(log n)
    • erase     – O(log n)
    • iterate   – O(n)

Reference: Galperin & Rivest, *Scapegoat Trees* (SODA 1993).
"""
from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from fractions import Fraction
from typing import Any, Generic, Optional, TypeVar, Union

from .cursor import Cursor
from .node import _Node, copy_subtree, maximum, minimum, unlink_subtree, weight
from .node import height as _subtree_height
from .ordering import Ordering
from .rebuild import rebuild

__all__ = ["ScapegoatTree"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

_DEFAULT_ALPHA = 0.57


class ScapegoatTree(Generic[K, V]):
    """Ordered key → value mapping backed by a scapegoat tree.

    Parameters
    ----------
    alpha: float
        Balance factor in the open interval (0.5, 1). Lower values keep the
        tree flatter at the price of more frequent rebuilds; higher values
        rebuild less often and tolerate taller trees.
    less: Callable[[K, K], bool] | None
        Strict weak order over keys. Defaults to ``<``.
    key: Callable[[K], Any] | None
        Alternative to *less*: compare ``key(a) < key(b)``.
    """

    def __init__(
        self,
        alpha: float = _DEFAULT_ALPHA,
        *,
        less: Optional[Callable[[K, K], bool]] = None,
        key: Optional[Callable[[K], Any]] = None,
    ):
        if not 0.5 < alpha < 1:
            raise ValueError("alpha must lie strictly between 0.5 and 1")
        self._alpha = alpha
        self._ordering: Ordering[K] = Ordering(less, key=key)
        self._owner = object()
        self._root: Optional[_Node[K, V]] = None
        self._first: Optional[_Node[K, V]] = None
        self._last: Optional[_Node[K, V]] = None
        self._size = 0
        self._max_size = 0
        self._rebuilds = 0

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def ordering(self) -> Ordering[K]:
        return self._ordering

    # ------------------------------------------------------------------
    # Lookup 🔍
    # ------------------------------------------------------------------
    def find(self, key: K) -> Cursor[K, V]:
        """Cursor at *key*, or the past-the-end cursor when absent."""
        return Cursor(self, self._find_node(key))

    def get(self, key: K, default: Any = None) -> Any:
        node = self._find_node(key)
        return default if node is None else node.value

    def __getitem__(self, key: K) -> V:
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __contains__(self, key: Any) -> bool:
        return self._find_node(key) is not None

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def insert(self, key: K, value: V) -> tuple[Cursor[K, V], bool]:
        """Insert or update *key*.

        Returns a cursor at the entry and whether anything changed: ``True``
        for a new key or a different value, ``False`` when the key already
        mapped to an equal value.
        """
        less = self._ordering.less
        parent: Optional[_Node[K, V]] = None
        node = self._root
        depth = 0
        leftmost = rightmost = True
        went_left = False
        while node is not None:
            parent = node
            depth += 1
            if less(key, node.key):
                node = node.left
                went_left = True
                rightmost = False
            elif less(node.key, key):
                node = node.right
                went_left = False
                leftmost = False
            else:  # Update
                changed = bool(node.value != value)
                if changed:
                    node.value = value
                return Cursor(self, node), changed

        new_node: _Node[K, V] = _Node(key, value, self._owner)
        new_node.parent = parent
        if parent is None:
            self._root = new_node
        elif went_left:
            parent.left = new_node
        else:
            parent.right = new_node
        self._size += 1
        self._max_size = max(self._max_size, self._size)
        if leftmost:
            self._first = new_node
        if rightmost:
            self._last = new_node

        if self._size > 2 and self._is_deep(depth):
            self._rebalance_from(new_node)
        return Cursor(self, new_node), True

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def erase(self, target: Union[K, Cursor[K, V]]) -> None:
        """Remove the entry at a cursor or with a key; no-op when absent.

        A cursor must come from this tree and still point at one of its live
        entries, otherwise ``ValueError`` is raised. Entries that were erased
        or handed over by :meth:`move_from` no longer count as live.
        """
        if isinstance(target, Cursor):
            if target.tree is not self:
                raise ValueError("cursor belongs to a different tree")
            node = target._node
            if node is not None and node.owner is not self._owner:
                raise ValueError("cursor no longer points at an entry of this tree")
        else:
            node = self._find_node(target)
        if node is not None:
            self._remove(node)

    def __delitem__(self, key: K) -> None:
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        self._remove(node)

    def clear(self) -> None:
        unlink_subtree(self._root)
        self._owner = object()
        self._root = self._first = self._last = None
        self._size = 0
        self._max_size = 0

    # ------------------------------------------------------------------
    # Size & ends
    # ------------------------------------------------------------------
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def front(self) -> tuple[K, V]:
        """Smallest entry as ``(key, value)``."""
        if self._first is None:
            raise IndexError("front() on an empty tree")
        return self._first.key, self._first.value

    def back(self) -> tuple[K, V]:
        """Largest entry as ``(key, value)``."""
        if self._last is None:
            raise IndexError("back() on an empty tree")
        return self._last.key, self._last.value

    def begin(self) -> Cursor[K, V]:
        return Cursor(self, self._first)

    def end(self) -> Cursor[K, V]:
        return Cursor(self, None)

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        return _subtree_height(self._root)

    @property
    def rebuild_count(self) -> int:
        """Rebuilds performed over this tree's lifetime (statistics only)."""
        return self._rebuilds

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[tuple[K, V]]:
        node = self._first
        while node is not None:
            yield node.key, node.value
            node = node.successor()

    def __reversed__(self) -> Iterator[tuple[K, V]]:
        node = self._last
        while node is not None:
            yield node.key, node.value
            node = node.predecessor()

    def items(self) -> Iterator[tuple[K, V]]:
        return iter(self)

    def keys(self) -> Iterator[K]:
        return (k for k, _ in self)

    def values(self) -> Iterator[V]:
        return (v for _, v in self)

    # ------------------------------------------------------------------
    # Copy & move
    # ------------------------------------------------------------------
    def copy(self) -> "ScapegoatTree[K, V]":
        """Structural copy in O(n); keys and values are shared, nodes are not."""
        other: ScapegoatTree[K, V] = type(self).__new__(type(self))
        other._alpha = self._alpha
        other._ordering = self._ordering
        other._owner = object()
        other._root = copy_subtree(self._root, other._owner)
        other._first = minimum(other._root) if other._root is not None else None
        other._last = maximum(other._root) if other._root is not None else None
        other._size = self._size
        other._max_size = self._max_size
        other._rebuilds = 0
        return other

    __copy__ = copy

    def move_from(self, other: "ScapegoatTree[K, V]") -> None:
        """Take over *other*'s entries in O(1), leaving *other* empty."""
        if other is self:
            return
        self.clear()
        self._alpha = other._alpha
        self._ordering = other._ordering
        # The nodes keep their token; it now names this tree.
        self._owner = other._owner
        self._root, self._first, self._last = other._root, other._first, other._last
        self._size, self._max_size = other._size, other._max_size
        other._owner = object()
        other._root = other._first = other._last = None
        other._size = other._max_size = 0

    @classmethod
    def moved(cls, other: "ScapegoatTree[K, V]") -> "ScapegoatTree[K, V]":
        tree: ScapegoatTree[K, V] = cls(other.alpha)
        tree.move_from(other)
        return tree

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        """Content equality: same entries in the same order."""
        if not isinstance(other, ScapegoatTree):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(
            k1 == k2 and v1 == v2 for (k1, v1), (k2, v2) in zip(self, other)
        )

    __hash__ = None  # type: ignore[assignment]

    def same_shape(self, other: "ScapegoatTree[K, V]") -> bool:
        """Stricter equality that also compares how entries are linked.

        Besides equal entries, each pair of corresponding nodes must have
        parents with equal key and value, or both be the root. Two trees with
        the same content can differ here if they were built through different
        insert/erase histories.
        """
        if self._size != other._size:
            return False
        a, b = self._first, other._first
        while a is not None and b is not None:
            if a.key != b.key or a.value != b.value:
                return False
            if (a.parent is None) != (b.parent is None):
                return False
            if a.parent is not None and b.parent is not None:
                if a.parent.key != b.parent.key or a.parent.value != b.parent.value:
                    return False
            a, b = a.successor(), b.successor()
        return a is None and b is None

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self)
        return f"{type(self).__name__}({{{body}}})"

    # ------------------------------------------------------------------
    # Internal helpers — search
    # ------------------------------------------------------------------
    def _find_node(self, key: K) -> Optional[_Node[K, V]]:
        less = self._ordering.less
        node = self._root
        while node is not None:
            if less(key, node.key):
                node = node.left
            elif less(node.key, key):
                node = node.right
            else:
                return node
        return None

    # ------------------------------------------------------------------
    # Internal helpers — balancing
    # ------------------------------------------------------------------
    def _is_deep(self, depth: int) -> bool:
        """``depth > h_alpha(size)`` where ``h_alpha(n) = ⌊log_{1/α} n⌋``.

        For an integer depth this is ``(1/α)**depth > size``. Compare in
        floating point and, when the two sides are too close to call, again
        with exact rationals so an exact power of 1/α is never misjudged.
        """
        margin = depth * math.log(1 / self._alpha) - math.log(self._size)
        if abs(margin) > 1e-9:
            return margin > 0
        return Fraction(self._alpha) ** depth * self._size < 1

    def _rebalance_from(self, leaf: _Node[K, V]) -> None:
        """Find the scapegoat above *leaf* and rebuild its subtree."""
        child = leaf
        child_weight = 1
        while child.parent is not None:
            parent = child.parent
            sibling = parent.right if child is parent.left else parent.left
            sibling_weight = weight(sibling)
            total = child_weight + sibling_weight + 1
            limit = self._alpha * total
            if child_weight > limit or sibling_weight > limit:
                self._rebuild_subtree(parent, total)
                return
            child, child_weight = parent, total
        # A deep leaf always has an unbalanced ancestor, so this means the
        # ordering policy is not a strict weak order.
        logger.warning("no scapegoat found above key %r", leaf.key)

    def _rebuild_subtree(self, node: _Node[K, V], n: int) -> None:
        parent = node.parent
        on_left = parent is not None and parent.left is node
        sub = rebuild(node, n)
        if sub is not None:
            sub.parent = parent
        if parent is None:
            self._root = sub
        elif on_left:
            parent.left = sub
        else:
            parent.right = sub
        self._max_size = self._size
        self._rebuilds += 1
        logger.debug("rebuilt subtree of %d nodes (tree size %d)", n, self._size)

    # ------------------------------------------------------------------
    # Internal helpers — deletion
    # ------------------------------------------------------------------
    def _shift(self, u: _Node[K, V], v: Optional[_Node[K, V]]) -> None:
        """Put subtree *v* where *u* hangs."""
        if u.parent is None:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        if v is not None:
            v.parent = u.parent

    def _remove(self, node: _Node[K, V]) -> None:
        if node is self._first:
            self._first = node.successor()
        if node is self._last:
            self._last = node.predecessor()

        if node.left is None:
            self._shift(node, node.right)
        elif node.right is None:
            self._shift(node, node.left)
        else:
            succ = minimum(node.right)
            if succ.parent is not node:
                self._shift(succ, succ.right)
                succ.right = node.right
                succ.right.parent = succ
            self._shift(node, succ)
            succ.left = node.left
            succ.left.parent = succ
        node.parent = node.left = node.right = node.owner = None
        self._size -= 1

        if self._size < self._alpha * self._max_size:
            self._root = rebuild(self._root, self._size)
            self._max_size = self._size
            self._rebuilds += 1
            logger.debug("rebuilt whole tree after erase (size %d)", self._size)
