"""Node store for the scapegoat tree.

Nodes carry no balance metadata at all: no colour, no height, no size. The
only bookkeeping is the three links plus an ownership token. ``left``/``right``
form the tree proper while ``parent`` is a navigation-only back link used by
cursors and by the scapegoat search. ``owner`` lets a tree tell its live
nodes apart from erased ones or ones handed to another tree.

All helpers below are iterative so that a degenerate (list-shaped) subtree
never runs into the interpreter's recursion limit.
"""
from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "owner", "parent", "left", "right")

    def __init__(self, key: K, value: V, owner: Optional[object] = None):
        self.key = key
        self.value = value
        # Token of the tree holding this node; None once erased.
        self.owner = owner
        self.parent: Optional[_Node[K, V]] = None
        self.left: Optional[_Node[K, V]] = None
        self.right: Optional[_Node[K, V]] = None

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r}>"

    # ------------------------------------------------------------------
    # Ordered neighbours
    # ------------------------------------------------------------------
    def successor(self) -> Optional[_Node[K, V]]:
        """In-order successor, or ``None`` when this is the maximum."""
        if self.right is not None:
            return minimum(self.right)
        node = self
        # Climb until we arrive from a left edge; that parent comes next.
        while node.parent is not None and node is node.parent.right:
            node = node.parent
        return node.parent

    def predecessor(self) -> Optional[_Node[K, V]]:
        """In-order predecessor, or ``None`` when this is the minimum."""
        if self.left is not None:
            return maximum(self.left)
        node = self
        while node.parent is not None and node is node.parent.left:
            node = node.parent
        return node.parent


# ----------------------------------------------------------------------
# Subtree helpers
# ----------------------------------------------------------------------
def minimum(node: _Node[K, V]) -> _Node[K, V]:
    while node.left is not None:
        node = node.left
    return node


def maximum(node: _Node[K, V]) -> _Node[K, V]:
    while node.right is not None:
        node = node.right
    return node


def weight(node: Optional[_Node[K, V]]) -> int:
    """Number of nodes in the subtree rooted at *node* (0 for ``None``)."""
    if node is None:
        return 0
    count = 0
    stack = [node]
    while stack:
        n = stack.pop()
        count += 1
        if n.left is not None:
            stack.append(n.left)
        if n.right is not None:
            stack.append(n.right)
    return count


def height(node: Optional[_Node[K, V]]) -> int:
    """Number of nodes on the longest root-to-leaf path (0 for ``None``)."""
    if node is None:
        return 0
    best = 0
    stack = [(node, 1)]
    while stack:
        n, depth = stack.pop()
        best = max(best, depth)
        if n.left is not None:
            stack.append((n.left, depth + 1))
        if n.right is not None:
            stack.append((n.right, depth + 1))
    return best


def inorder(node: Optional[_Node[K, V]]) -> Iterator[_Node[K, V]]:
    """Yield the nodes of a subtree in key order."""
    stack: list[_Node[K, V]] = []
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def copy_subtree(node: Optional[_Node[K, V]], owner: Optional[object] = None) -> Optional[_Node[K, V]]:
    """Structural copy of a subtree: same shape, fresh nodes, shared keys/values."""
    if node is None:
        return None
    root: _Node[K, V] = _Node(node.key, node.value, owner)
    stack = [(node, root)]
    while stack:
        src, dst = stack.pop()
        if src.left is not None:
            dst.left = _Node(src.left.key, src.left.value, owner)
            dst.left.parent = dst
            stack.append((src.left, dst.left))
        if src.right is not None:
            dst.right = _Node(src.right.key, src.right.value, owner)
            dst.right.parent = dst
            stack.append((src.right, dst.right))
    return root


def unlink_subtree(node: Optional[_Node[K, V]]) -> None:
    """Break every link in a subtree so its nodes are freed promptly."""
    stack = [node] if node is not None else []
    while stack:
        n = stack.pop()
        if n.left is not None:
            stack.append(n.left)
        if n.right is not None:
            stack.append(n.right)
        n.parent = n.left = n.right = n.owner = None
