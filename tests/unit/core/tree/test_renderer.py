from __future__ import annotations

"""
Unit tests for the ASCII tree renderer.
"""

from workspace_vfs.core.tree.renderer import render_forest
from workspace_vfs.core.tree.store import TreeStore


def test_empty_forest_renders_nothing(store: TreeStore) -> None:
    assert render_forest(store.forest) == []


def test_nested_layout_keeps_insertion_order(store: TreeStore) -> None:
    src = store.create_folder("src")
    store.create_file("z.py", src)
    lib = store.create_folder("lib", src)
    store.create_file("b.py", lib)
    store.create_file("README.md")

    assert render_forest(store.forest) == [
        "├── src/",
        "│   ├── z.py",
        "│   └── lib/",
        "│       └── b.py",
        "└── README.md",
    ]


def test_ids_and_active_marker(store: TreeStore) -> None:
    src = store.create_folder("src")
    file_id = store.create_file("a.py", src)
    store.select(file_id)

    lines = render_forest(store.forest, active_id=store.active_id, show_ids=True)
    assert lines == [
        f"└── src/  [{src}]",
        f"    └── a.py  [{file_id}]  *",
    ]
