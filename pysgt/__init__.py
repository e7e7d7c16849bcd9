"""PySGT: an ordered key-value container backed by a scapegoat tree.

The high-level API is `pysgt.ScapegoatTree`; cursors (`pysgt.Cursor`) give
bidirectional ordered access. The rebuild engine and node store are kept in
their own modules so the balancing algorithm can be studied in isolation.
"""

from __future__ import annotations

__all__ = [
    "Cursor",
    "Ordering",
    "ScapegoatTree",
]

from .cursor import Cursor
from .ordering import Ordering
from .tree import ScapegoatTree
