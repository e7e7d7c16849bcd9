"""In-memory snapshots of a tree's entries.

Layout of a snapshot blob (a ``bytes`` object; nothing is written to disk):

    ┌────────────────────────────────────────────┐
    │ header: <u8 version><f64 alpha><u32 count> │
    ├────────────────────────────────────────────┤
    │ msgpack array of [key, value] (key order)  │
    └────────────────────────────────────────────┘

Only the entries and the balance factor are recorded, not the tree shape;
loading re-inserts the entries and lets the tree balance itself. The ordering
policy is code, so it has to be passed again to :func:`loads`.

Lists and tuples stay distinct: packing uses ``strict_types`` so tuples are
stored as an ext type and come back as tuples, lists as msgpack arrays.
"""
from __future__ import annotations

import struct
from collections.abc import Callable
from typing import Any, Optional

import msgpack

from .tree import ScapegoatTree

__all__ = ["dumps", "loads"]

_HEADER = struct.Struct("!BdI")  # version, alpha, count
_VERSION = 1
_EXT_TUPLE = 1


def _pack(obj: Any) -> bytes:
    return msgpack.packb(obj, use_bin_type=True, strict_types=True, default=_encode)


def _unpack(blob: bytes) -> Any:
    return msgpack.unpackb(blob, raw=False, ext_hook=_decode)


def _encode(obj: Any) -> msgpack.ExtType:
    if isinstance(obj, tuple):
        return msgpack.ExtType(_EXT_TUPLE, _pack(list(obj)))
    raise TypeError(f"cannot serialise object of type {type(obj).__name__}")


def _decode(code: int, data: bytes) -> Any:
    if code == _EXT_TUPLE:
        return tuple(_unpack(data))
    return msgpack.ExtType(code, data)


def dumps(tree: ScapegoatTree) -> bytes:
    """Serialise *tree*'s entries (keys and values must be msgpack-able)."""
    body = _pack([[k, v] for k, v in tree])
    return _HEADER.pack(_VERSION, tree.alpha, len(tree)) + body


def loads(
    blob: bytes,
    *,
    less: Optional[Callable[[Any, Any], bool]] = None,
    key: Optional[Callable[[Any], Any]] = None,
) -> ScapegoatTree:
    """Rebuild a tree from :func:`dumps` output."""
    if len(blob) < _HEADER.size:
        raise ValueError("snapshot too short")
    version, alpha, count = _HEADER.unpack(blob[: _HEADER.size])
    if version != _VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")
    entries = _unpack(blob[_HEADER.size :])
    if len(entries) != count:
        raise ValueError(f"snapshot holds {len(entries)} entries, header says {count}")
    tree: ScapegoatTree = ScapegoatTree(alpha, less=less, key=key)
    for k, v in entries:
        tree.insert(k, v)
    return tree
