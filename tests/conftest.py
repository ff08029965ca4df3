from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for stores, controllers and configuration dictionaries.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from workspace_vfs.core.tree.ids import IdAllocator  # noqa: E402
from workspace_vfs.core.tree.store import TreeStore  # noqa: E402
from workspace_vfs.core.workspace.controller import WorkspaceController  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def store() -> TreeStore:
    """Return an empty store with deterministic ids ('t-1', 't-2', ...)."""
    return TreeStore(IdAllocator(session="t"))


@pytest.fixture
def seeded_store() -> TreeStore:
    """Return a store holding the starter project."""
    return TreeStore.with_seed_project(IdAllocator(session="s"))


class FakeAssistant:
    """Scripted stand-in for the text generator."""

    def __init__(self, reply: str = "console.log('hi');", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []
        self.options: List[Dict[str, Any]] = []

    def __call__(self, prompt: str, **options: Any) -> str:
        self.prompts.append(prompt)
        self.options.append(options)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_assistant() -> FakeAssistant:
    return FakeAssistant()


@pytest.fixture
def controller(store: TreeStore, fake_assistant: FakeAssistant) -> WorkspaceController:
    return WorkspaceController(store, assistant=fake_assistant)


@pytest.fixture
def mock_config_dict(tmp_path: Any) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'workspace_vfs.domain.config'.
    """
    return {
        "assistant_endpoint": "http://localhost:9999/v1/completions",
        "assistant_model": "test-model",
        "temperature": 0.2,
        "max_tokens": 64,
        "request_timeout": 5,
        "generated_file_name": "generated.js",
        "export_dir": str(tmp_path / "exports"),
        "seed_project": True,
    }
