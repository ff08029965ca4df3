from __future__ import annotations

"""
Tree Store Error Hierarchy.

All failures raised by the workspace store are local, synchronous and
non-retryable. Each error also derives from the closest builtin so that
callers using generic handlers keep working.
"""

from typing import Optional


class VfsError(Exception):
    """Base class for every error raised by the workspace store."""

    def __init__(self, message: str, node_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.node_id = node_id

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class NotFoundError(VfsError, KeyError):
    """The given id does not resolve to any node."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}", node_id)


class InvalidParentError(VfsError, ValueError):
    """The given parent id does not resolve to a folder."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Parent is not an existing folder: {node_id}", node_id)


class NotAFileError(VfsError, TypeError):
    """A content operation targeted a folder."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node is not a file: {node_id}", node_id)
