"""Ordering policy: the strict weak order a tree compares its keys with.

The policy is chosen once when a tree is built and never changes afterwards.
It can be given either as a ``less(a, b)`` predicate or as a ``key``
function in the style of :func:`sorted`; without either the keys' own ``<``
is used.
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, Generic, Optional, TypeVar

__all__ = ["Ordering"]

K = TypeVar("K")


class Ordering(Generic[K]):
    """Immutable strict-weak-order comparator over keys."""

    __slots__ = ("_less",)

    def __init__(
        self,
        less: Optional[Callable[[K, K], bool]] = None,
        *,
        key: Optional[Callable[[K], Any]] = None,
    ):
        if less is not None and key is not None:
            raise ValueError("pass either less or key, not both")
        if key is not None:
            less = lambda a, b: key(a) < key(b)  # noqa: E731
        self._less: Callable[[K, K], bool] = less or operator.lt

    def less(self, a: K, b: K) -> bool:
        return self._less(a, b)

    def equivalent(self, a: K, b: K) -> bool:
        """Neither key orders before the other."""
        return not self._less(a, b) and not self._less(b, a)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_less"):
            raise AttributeError("Ordering is immutable")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:  # pragma: no cover
        return f"Ordering({self._less!r})"
