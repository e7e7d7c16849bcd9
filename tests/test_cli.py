"""Tests for the ``python -m pysgt`` command driver."""
import io

from pysgt.__main__ import run


def execute(script: str, **kwargs) -> list[str]:
    out = io.StringIO()
    run(io.StringIO(script), out, **kwargs)
    return out.getvalue().splitlines()


def test_insert_print_and_size():
    lines = execute("insert 2 b\ninsert 1 a\ninsert 1 a\nprint\nsize\n")
    assert lines == [
        "Inserted: [2|b]",
        "Inserted: [1|a]",
        "Failed insert",
        "Print: [1|a] [2|b]",
        "2",
    ]


def test_find_front_back_erase():
    lines = execute(
        "insert 5 five\ninsert 3 three\nfind 3\nfind 9\nfront\nback\nerase 5\nfind 5\n"
    )
    assert lines[2:] == [
        "[3|three]",
        "Not found: 9",
        "3|three",
        "5|five",
        "Erased node: 5",
        "Not found: 5",
    ]


def test_copy_move_and_compare():
    lines = execute("insert 1 a\ncopy\n==\ninsert 2 b\n==\nmove\nprint\nprint_tmp\nempty\n")
    assert lines[1:] == [
        "Tree copied",
        "== returned true",
        "Inserted: [2|b]",
        "== returned false",
        "Tree moved",
        "Print: ",
        "Print TMP: [1|a] [2|b]",
        "Tree is empty",
    ]


def test_stop_and_unknown_commands():
    lines = execute("frobnicate\nclear\nfront\nstop\ninsert 1 a\n")
    assert lines == ["Unknown command: frobnicate", "Cleared Tree", "Tree is empty"]


def test_bad_key_is_reported():
    assert execute("insert x y\n") == ["Bad key: x"]


def test_custom_alpha():
    script = "".join(f"insert {k} v\n" for k in range(50)) + "size\n"
    assert execute(script, alpha=0.9)[-1] == "50"
