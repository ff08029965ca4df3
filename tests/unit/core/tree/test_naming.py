from __future__ import annotations

"""
Unit tests for the Naming Policy (name -> language tag).
"""

import pytest

from workspace_vfs.core.tree.naming import classify


@pytest.mark.parametrize(
    "name, expected",
    [
        ("app.js", "javascript"),
        ("App.jsx", "javascript"),
        ("a.ts", "typescript"),
        ("App.tsx", "typescript"),
        ("main.py", "python"),
        ("index.html", "html"),
        ("index.css", "css"),
        ("theme.scss", "scss"),
        ("package.json", "json"),
        ("README.md", "markdown"),
        ("ci.yaml", "yaml"),
        ("ci.yml", "yaml"),
    ],
)
def test_known_suffixes(name: str, expected: str) -> None:
    assert classify(name) == expected


@pytest.mark.parametrize("name", ["README.MD", "Main.PY", "STYLE.Css"])
def test_suffix_match_is_case_insensitive(name: str) -> None:
    assert classify(name) != "plaintext"


def test_only_last_segment_counts() -> None:
    assert classify("archive.tar.gz") == "plaintext"
    assert classify("component.test.tsx") == "typescript"
    assert classify("notes.md.bak") == "plaintext"


@pytest.mark.parametrize("name", ["Makefile", "", "data.bin", "trailing.", "LICENSE"])
def test_fallback(name: str) -> None:
    assert classify(name) == "plaintext"


def test_dotfile_uses_text_after_dot() -> None:
    assert classify(".json") == "json"
