from __future__ import annotations

"""
Tree Renderer.

Converts a forest snapshot into visual ASCII lines for the tree-view
collaborator and the CLI. Display order is insertion order; nothing is
sorted.
"""

from typing import List, Optional

from workspace_vfs.domain.node_models import FolderNode, Forest

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_forest(
        forest: Forest,
        active_id: Optional[str] = None,
        show_ids: bool = False,
) -> List[str]:
    """
    Render the full forest as a list of lines.

    Args:
        forest: Snapshot to render.
        active_id: Node to highlight with a leading marker.
        show_ids: Append node ids in brackets (used by the CLI shell).

    Returns:
        List[str]: Visual lines of the forest.
    """
    lines: List[str] = []
    render_tree_structure(forest, lines, prefix="", active_id=active_id, show_ids=show_ids)
    return lines


def render_tree_structure(
        nodes: Forest,
        lines: List[str],
        prefix: str = "",
        active_id: Optional[str] = None,
        show_ids: bool = False,
) -> None:
    """
    Recursively transform a node sequence into a list of strings.

    Uses standard ASCII connectors (├──, └──) and manages indentation
    levels for nested folders.

    Args:
        nodes: Current node sequence to process.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        active_id: Node to highlight.
        show_ids: Append node ids in brackets.
    """
    total = len(nodes)

    for i, node in enumerate(nodes):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        label = node.name + ("/" if isinstance(node, FolderNode) else "")
        if show_ids:
            label += f"  [{node.id}]"
        if node.id == active_id:
            label += "  *"

        lines.append(f"{prefix}{connector}{label}")

        if isinstance(node, FolderNode):
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(
                node.children,
                lines,
                prefix=new_prefix,
                active_id=active_id,
                show_ids=show_ids,
            )
