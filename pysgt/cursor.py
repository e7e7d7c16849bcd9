"""Bidirectional cursor over a :class:`~pysgt.tree.ScapegoatTree`.

A cursor is a (tree, node) pair. ``node is None`` is the past-the-end
position. Stepping uses only the nodes' parent/left/right links, so no side
list or threading has to be kept in sync with the tree.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from .node import _Node

if TYPE_CHECKING:  # pragma: no cover
    from .tree import ScapegoatTree

__all__ = ["Cursor"]

K = TypeVar("K")
V = TypeVar("V")


class Cursor(Generic[K, V]):
    """Position inside a tree's ordered sequence of entries."""

    __slots__ = ("_tree", "_node")

    def __init__(self, tree: "ScapegoatTree[K, V]", node: Optional[_Node[K, V]] = None):
        self._tree = tree
        self._node = node

    # ------------------------------------------------------------------
    # Dereference
    # ------------------------------------------------------------------
    @property
    def tree(self) -> "ScapegoatTree[K, V]":
        return self._tree

    @property
    def is_end(self) -> bool:
        return self._node is None

    def _deref(self) -> _Node[K, V]:
        if self._node is None:
            raise IndexError("cannot dereference the past-the-end cursor")
        return self._node

    @property
    def key(self) -> K:
        return self._deref().key

    @property
    def value(self) -> V:
        return self._deref().value

    @value.setter
    def value(self, value: V) -> None:
        self._deref().value = value

    @property
    def item(self) -> tuple[K, V]:
        node = self._deref()
        return node.key, node.value

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def next(self) -> "Cursor[K, V]":
        """Cursor at the following entry (past-the-end after the maximum)."""
        return Cursor(self._tree, self._deref().successor())

    def prev(self) -> "Cursor[K, V]":
        """Cursor at the preceding entry.

        Stepping back from past-the-end lands on the maximum; stepping back
        from the minimum yields past-the-end.
        """
        if self._node is None:
            return Cursor(self._tree, self._tree._last)
        return Cursor(self._tree, self._node.predecessor())

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._tree is other._tree and self._node is other._node

    def __hash__(self) -> int:
        return hash((id(self._tree), id(self._node)))

    def __repr__(self) -> str:  # pragma: no cover
        if self._node is None:
            return "Cursor<end>"
        return f"Cursor<{self._node.key!r}:{self._node.value!r}>"
