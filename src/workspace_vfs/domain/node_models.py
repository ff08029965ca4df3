from __future__ import annotations

"""
Virtual File System Node Models.

Provides the immutable structural nodes that make up the in-memory
workspace forest. Nodes never change after construction: every edit
produces a new node value, which lets unchanged subtrees be shared
between consecutive snapshots.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

# -----------------------------------------------------------------------------
# NODE KINDS
# -----------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Discriminator for the two node variants."""
    FILE = "file"
    FOLDER = "folder"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    Represents a leaf entry (file) in the workspace forest.

    Attributes:
        id: Opaque identifier, unique within the session.
        name: Display name (sibling duplicates are permitted).
        parent_id: Owning folder id, or None for a forest root.
        content: Text content of the file.
        language: Content classifier derived from the name at creation.
    """
    id: str
    name: str
    parent_id: Optional[str] = None
    content: str = ""
    language: str = "plaintext"

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE


@dataclass(frozen=True)
class FolderNode:
    """
    Represents a branch entry (folder) in the workspace forest.

    Attributes:
        id: Opaque identifier, unique within the session.
        name: Display name (sibling duplicates are permitted).
        parent_id: Owning folder id, or None for a forest root.
        children: Owned child nodes in display order.
    """
    id: str
    name: str
    parent_id: Optional[str] = None
    children: Tuple["Node", ...] = field(default_factory=tuple)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FOLDER


Node = Union[FileNode, FolderNode]

# Ordered collection of root nodes
Forest = Tuple[Node, ...]
