"""Unit tests for the flatten/build rebuild engine."""
import math

import pytest

from pysgt.node import _Node, height, inorder, weight
from pysgt.rebuild import build, flatten, rebuild


def make_chain(keys):
    """Degenerate right-leaning subtree (worst case for recursion)."""
    root = prev = None
    for k in keys:
        node = _Node(k, f"v{k}")
        if prev is None:
            root = node
        else:
            prev.right = node
            node.parent = prev
        prev = node
    return root


def check_links(root):
    assert root is None or root.parent is None
    for node in inorder(root):
        for child in (node.left, node.right):
            if child is not None:
                assert child.parent is node


def is_perfectly_balanced(root):
    for node in inorder(root):
        w = weight(node)
        if weight(node.left) > w / 2 or weight(node.right) > w / 2:
            return False
    return True


def test_flatten_threads_sorted_list():
    """Flatten yields an in-order list ending with the sentinel."""
    root = make_chain([1, 2, 3, 4, 5])
    tail = _Node(None, None)
    head = flatten(root, tail)

    keys = []
    node = head
    while node is not tail:
        assert node.left is None
        assert node.parent is None
        keys.append(node.key)
        node = node.right
    assert keys == [1, 2, 3, 4, 5]


def test_flatten_empty_subtree_returns_tail():
    tail = _Node(None, None)
    assert flatten(None, tail) is tail


def test_build_returns_node_after_consumed_prefix():
    """build(n) consumes n nodes and hangs the tree on the next one."""
    root = make_chain(range(7))
    tail = _Node(None, None)
    head = flatten(root, tail)
    s = build(7, head)
    assert s is tail
    assert [n.key for n in inorder(s.left)] == list(range(7))


@pytest.mark.parametrize("n", [1, 2, 3, 7, 8, 100, 1023, 1024])
def test_rebuild_minimal_height(n):
    root = make_chain(range(n))
    new_root = rebuild(root, n)

    assert [nd.key for nd in inorder(new_root)] == list(range(n))
    assert height(new_root) == math.ceil(math.log2(n + 1))
    assert is_perfectly_balanced(new_root)
    check_links(new_root)


def test_rebuild_keeps_node_identity():
    """Rebuilding relinks existing nodes; nothing is copied."""
    root = make_chain(range(20))
    before = {id(n) for n in inorder(root)}
    new_root = rebuild(root, 20)
    assert {id(n) for n in inorder(new_root)} == before


def test_rebuild_deep_chain_does_not_recurse_per_node():
    n = 50_000
    new_root = rebuild(make_chain(range(n)), n)
    assert height(new_root) == math.ceil(math.log2(n + 1))


def test_rebuild_empty():
    assert rebuild(None, 0) is None


def test_weight_and_height_helpers():
    root = make_chain(range(10))
    assert weight(root) == 10
    assert height(root) == 10
    assert weight(None) == 0
    assert height(None) == 0
