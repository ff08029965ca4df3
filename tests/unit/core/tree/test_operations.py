from __future__ import annotations

"""
Unit tests for the pure forest transformations.
"""

from dataclasses import replace

import pytest

from workspace_vfs.core.tree import operations as ops
from workspace_vfs.domain.errors import InvalidParentError, NotFoundError
from workspace_vfs.domain.node_models import FileNode, FolderNode


@pytest.fixture
def forest():
    """
    src/
      a.py
      lib/
        b.py
    notes.md
    """
    b = FileNode(id="b", name="b.py", parent_id="lib")
    lib = FolderNode(id="lib", name="lib", parent_id="src", children=(b,))
    a = FileNode(id="a", name="a.py", parent_id="src")
    src = FolderNode(id="src", name="src", children=(a, lib))
    notes = FileNode(id="n", name="notes.md")
    return (src, notes)


def test_find_node_depth_first(forest) -> None:
    assert ops.find_node(forest, "b").name == "b.py"
    assert ops.find_node(forest, "n").name == "notes.md"
    assert ops.find_node(forest, "zzz") is None


def test_find_path(forest) -> None:
    assert [n.id for n in ops.find_path(forest, "b")] == ["src", "lib", "b"]
    assert ops.find_path(forest, "zzz") is None


def test_walk_reports_depth(forest) -> None:
    assert [(d, n.id) for d, n in ops.walk(forest)] == [
        (0, "src"), (1, "a"), (1, "lib"), (2, "b"), (0, "n"),
    ]


def test_subtree_ids(forest) -> None:
    assert ops.subtree_ids(forest[0]) == {"src", "a", "lib", "b"}
    assert ops.subtree_ids(forest[1]) == {"n"}


def test_insert_child_appends_to_folder(forest) -> None:
    child = FileNode(id="c", name="c.py", parent_id="lib")
    new = ops.insert_child(forest, "lib", child)

    lib = ops.find_node(new, "lib")
    assert [c.id for c in lib.children] == ["b", "c"]
    # Sibling root untouched
    assert new[1] is forest[1]
    # Original snapshot unchanged
    assert [c.id for c in ops.find_node(forest, "lib").children] == ["b"]


def test_insert_root(forest) -> None:
    child = FolderNode(id="d", name="docs")
    new = ops.insert_child(forest, None, child)
    assert [n.id for n in new] == ["src", "n", "d"]
    assert new[0] is forest[0]


def test_insert_under_file_or_missing_parent(forest) -> None:
    with pytest.raises(InvalidParentError):
        ops.insert_child(forest, "a", FileNode(id="x", name="x", parent_id="a"))
    with pytest.raises(InvalidParentError):
        ops.insert_child(forest, "ghost", FileNode(id="x", name="x", parent_id="ghost"))


def test_insert_with_mismatched_parent_reference(forest) -> None:
    with pytest.raises(ValueError):
        ops.insert_child(forest, "src", FileNode(id="x", name="x", parent_id="lib"))


def test_replace_node_rebuilds_only_the_path(forest) -> None:
    new = ops.replace_node(forest, "b", lambda n: replace(n, content="changed"))

    assert ops.find_node(new, "b").content == "changed"
    assert ops.find_node(new, "a") is ops.find_node(forest, "a")
    assert new[1] is forest[1]
    assert new[0] is not forest[0]


def test_replace_missing(forest) -> None:
    with pytest.raises(NotFoundError):
        ops.replace_node(forest, "ghost", lambda n: n)


def test_remove_node_returns_detached_subtree(forest) -> None:
    new, removed = ops.remove_node(forest, "lib")

    assert removed.id == "lib"
    assert ops.find_node(new, "lib") is None
    assert ops.find_node(new, "b") is None
    assert [c.id for c in new[0].children] == ["a"]


def test_remove_missing(forest) -> None:
    with pytest.raises(NotFoundError):
        ops.remove_node(forest, "ghost")


def test_check_integrity_clean(forest) -> None:
    assert ops.check_integrity(forest, "b") == []


def test_check_integrity_detects_violations() -> None:
    dup = FileNode(id="x", name="x.py")
    orphan = FileNode(id="y", name="", parent_id="elsewhere")
    problems = ops.check_integrity((dup, dup, orphan), active_id="ghost")

    assert any("Duplicate id 'x'" in p for p in problems)
    assert any("'y' points to parent" in p for p in problems)
    assert any("empty name" in p for p in problems)
    assert any("Active id 'ghost'" in p for p in problems)


@pytest.mark.parametrize("parent_id", ["a", "b", "ghost"])
def test_insert_rejection_reports_parent_and_keeps_forest(forest, parent_id) -> None:
    """Nested files and unknown ids are rejected the same way as roots."""
    with pytest.raises(InvalidParentError) as exc:
        ops.insert_child(forest, parent_id, FileNode(id="x", name="x", parent_id=parent_id))
    assert exc.value.node_id == parent_id
    assert [c.id for c in ops.find_node(forest, "lib").children] == ["b"]
