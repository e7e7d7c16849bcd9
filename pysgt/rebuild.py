"""Linear-time subtree rebuilding (Galperin & Rivest).

A rebuild never allocates or copies entries: ``flatten`` threads the nodes of
a subtree into a sorted singly linked list through their ``right`` links and
``build`` regrows a perfectly balanced tree from the front of that list.

    subtree ──flatten──▶ n1 → n2 → … → nk → tail
                                       │
    balanced subtree ◀──build(k)───────┘   (tail.left is the new root)

Complexities:
    • flatten  – O(k) time, O(h) extra space
    • build    – O(k) time, O(log k) recursion depth
"""
from __future__ import annotations

from typing import Optional

from .node import _Node

__all__ = ["flatten", "build", "rebuild"]


def flatten(root: Optional[_Node], tail: _Node) -> _Node:
    """Thread the subtree at *root* into a sorted list ending with *tail*.

    Every node in the result has ``left`` and ``parent`` cleared and ``right``
    pointing to its in-order successor. Returns the head of the list (which is
    *tail* itself for an empty subtree).
    """
    head: Optional[_Node] = None
    prev: Optional[_Node] = None
    stack: list[_Node] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        nxt = node.right  # read before relinking
        node.left = None
        node.parent = None
        if prev is None:
            head = node
        else:
            prev.right = node
        prev = node
        node = nxt
    if prev is None:
        return tail
    prev.right = tail
    return head  # type: ignore[return-value]


def build(n: int, head: _Node) -> _Node:
    """Grow a balanced tree from the first *n* nodes of the list at *head*.

    Returns the (n+1)-th list node, whose ``left`` is the root of the new
    subtree. Parent links inside the subtree are restored; the root's parent
    is left for the caller to set.
    """
    if n == 0:
        head.left = None
        return head
    r = build(n // 2, head)  # ceil((n-1)/2)
    s = build((n - 1) // 2, r.right)  # type: ignore[arg-type]  # floor((n-1)/2)
    r.right = s.left
    if r.right is not None:
        r.right.parent = r
    if r.left is not None:
        r.left.parent = r
    s.left = r
    return s


def rebuild(root: Optional[_Node], n: int) -> Optional[_Node]:
    """Return *root*'s subtree (of *n* nodes) rebuilt into minimum height.

    The returned root is detached (``parent is None``); relinking it is the
    caller's job.
    """
    if n == 0:
        return None
    sentinel = _Node(None, None)
    head = flatten(root, sentinel)
    new_root = build(n, head).left
    # Drop the sentinel's grip on the rebuilt subtree before discarding it.
    sentinel.left = None
    if new_root is not None:
        new_root.parent = None
    return new_root
