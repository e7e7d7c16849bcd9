"""Line-oriented driver for a ScapegoatTree.

Usage:
    python -m pysgt < commands.txt
    python -m pysgt --alpha 0.7 --verbose

Commands (one per line, integer keys, string values):
    insert K V | find K | erase K | size | empty | front | back
    print | print_tmp | copy | move | == | clear | stop

``copy`` and ``move`` fill a scratch tree from the working tree; ``==``
compares the two.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from .tree import ScapegoatTree, _DEFAULT_ALPHA

logger = logging.getLogger(__name__)


def _fmt_entries(tree: ScapegoatTree[int, str]) -> str:
    return " ".join(f"[{k}|{v}]" for k, v in tree)


def run(lines: TextIO, out: TextIO, *, alpha: float = _DEFAULT_ALPHA) -> None:
    """Execute commands from *lines* until EOF or ``stop``."""
    tree: ScapegoatTree[int, str] = ScapegoatTree(alpha)
    tmp_tree: ScapegoatTree[int, str] = ScapegoatTree(alpha)

    def emit(text: str) -> None:
        print(text, file=out)

    for lineno, line in enumerate(lines, 1):
        parts = line.split()
        if not parts:
            continue
        cmd, args = parts[0], parts[1:]
        try:
            key = int(args[0]) if args else 0
        except ValueError:
            logger.warning("line %d: bad key %r", lineno, args[0])
            emit(f"Bad key: {args[0]}")
            continue
        value = args[1] if len(args) > 1 else ""

        if cmd == "size":
            emit(str(tree.size()))
        elif cmd == "empty":
            emit("Tree is empty" if tree.empty() else "Tree is not empty")
        elif cmd == "insert":
            _, changed = tree.insert(key, value)
            emit(f"Inserted: [{key}|{value}]" if changed else "Failed insert")
        elif cmd == "find":
            cur = tree.find(key)
            emit(f"Not found: {key}" if cur.is_end else f"[{cur.key}|{cur.value}]")
        elif cmd == "erase":
            tree.erase(key)
            emit(f"Erased node: {key}")
        elif cmd == "clear":
            tree.clear()
            emit("Cleared Tree")
        elif cmd in ("front", "back"):
            if tree.empty():
                emit("Tree is empty")
            else:
                k, v = tree.front() if cmd == "front" else tree.back()
                emit(f"{k}|{v}")
        elif cmd == "print":
            emit(f"Print: {_fmt_entries(tree)}")
        elif cmd == "print_tmp":
            emit(f"Print TMP: {_fmt_entries(tmp_tree)}")
        elif cmd == "copy":
            tmp_tree = tree.copy()
            emit("Tree copied")
        elif cmd == "move":
            tmp_tree.move_from(tree)
            emit("Tree moved")
        elif cmd == "==":
            emit(f"== returned {'true' if tree == tmp_tree else 'false'}")
        elif cmd == "stop":
            break
        else:
            emit(f"Unknown command: {cmd}")
        logger.debug("line %d: %s -> size=%d", lineno, cmd, len(tree))


def main() -> None:
    parser = argparse.ArgumentParser(prog="python -m pysgt", description="Drive a scapegoat tree from stdin")
    parser.add_argument("--alpha", type=float, default=_DEFAULT_ALPHA, help="Balance factor in (0.5, 1)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log tree statistics and rebuilds")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        run(sys.stdin, sys.stdout, alpha=args.alpha)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
