from __future__ import annotations

"""
workspace-vfs.

In-memory hierarchical document store backing an interactive editing
workspace, with export helpers and an assistant-driven content generator.
"""

__version__ = "1.0.0"
