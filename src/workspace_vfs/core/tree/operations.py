from __future__ import annotations

"""
Pure Forest Transformations.

Every function in this module takes a forest value and returns a new one,
rebuilding only the nodes on the path from a root to the edited node.
Sibling subtrees off that path are reused by identity, which keeps
references held by the tree view stable and makes snapshots cheap to
compare.
"""

from dataclasses import replace
from typing import Callable, Iterator, List, Optional, Set, Tuple

from workspace_vfs.domain.errors import InvalidParentError, NotFoundError
from workspace_vfs.domain.node_models import FolderNode, Forest, Node

# Rewrites the matched node into zero (removal) or more replacement nodes
NodeEdit = Callable[[Node], Tuple[Node, ...]]

# -----------------------------------------------------------------------------
# READ API
# -----------------------------------------------------------------------------

def find_node(forest: Forest, node_id: str) -> Optional[Node]:
    """
    Depth-first lookup of a node by id.

    Args:
        forest: Forest to search.
        node_id: Target id.

    Returns:
        Optional[Node]: The matching node, or None.
    """
    for node in forest:
        if node.id == node_id:
            return node
        if isinstance(node, FolderNode):
            found = find_node(node.children, node_id)
            if found is not None:
                return found
    return None


def find_path(forest: Forest, node_id: str) -> Optional[List[Node]]:
    """Return the chain of nodes from a root down to the target, inclusive."""
    for node in forest:
        if node.id == node_id:
            return [node]
        if isinstance(node, FolderNode):
            sub = find_path(node.children, node_id)
            if sub is not None:
                return [node] + sub
    return None


def walk(forest: Forest, depth: int = 0) -> Iterator[Tuple[int, Node]]:
    """Yield (depth, node) pairs in depth-first display order."""
    for node in forest:
        yield depth, node
        if isinstance(node, FolderNode):
            yield from walk(node.children, depth + 1)


def subtree_ids(node: Node) -> Set[str]:
    """Collect the ids of a node and all of its descendants."""
    ids = {node.id}
    if isinstance(node, FolderNode):
        for child in node.children:
            ids |= subtree_ids(child)
    return ids

# -----------------------------------------------------------------------------
# WRITE API (COPY-ON-WRITE)
# -----------------------------------------------------------------------------

def insert_child(forest: Forest, parent_id: Optional[str], child: Node) -> Forest:
    """
    Attach a node as the last child of a folder, or as a new root.

    Args:
        forest: Current forest.
        parent_id: Owning folder id, or None to append a root.
        child: Node to attach. Its parent_id must equal parent_id.

    Returns:
        Forest: The new forest.

    Raises:
        InvalidParentError: parent_id does not resolve to a folder.
    """
    if child.parent_id != parent_id:
        raise ValueError(
            f"Node '{child.id}' carries parent '{child.parent_id}' but is inserted under '{parent_id}'."
        )

    if parent_id is None:
        return forest + (child,)

    def _append(folder: Node) -> Tuple[Node, ...]:
        if not isinstance(folder, FolderNode):
            raise InvalidParentError(parent_id)
        return (replace(folder, children=folder.children + (child,)),)

    rebuilt = _rewrite(forest, parent_id, _append)
    if rebuilt is None:
        raise InvalidParentError(parent_id)
    return rebuilt


def replace_node(forest: Forest, node_id: str, transform: Callable[[Node], Node]) -> Forest:
    """
    Replace a node with the result of `transform` applied to it.

    Raises:
        NotFoundError: node_id does not resolve.
    """
    rebuilt = _rewrite(forest, node_id, lambda node: (transform(node),))
    if rebuilt is None:
        raise NotFoundError(node_id)
    return rebuilt


def remove_node(forest: Forest, node_id: str) -> Tuple[Forest, Node]:
    """
    Detach a node and its whole subtree.

    Returns:
        Tuple[Forest, Node]: The new forest and the removed node.

    Raises:
        NotFoundError: node_id does not resolve.
    """
    removed: List[Node] = []

    def _drop(node: Node) -> Tuple[Node, ...]:
        removed.append(node)
        return ()

    rebuilt = _rewrite(forest, node_id, _drop)
    if rebuilt is None:
        raise NotFoundError(node_id)
    return rebuilt, removed[0]

# -----------------------------------------------------------------------------
# INTEGRITY
# -----------------------------------------------------------------------------

def check_integrity(forest: Forest, active_id: Optional[str] = None) -> List[str]:
    """
    Verify structural invariants of a forest.

    Checks id uniqueness, root/child parent back-references and that the
    active pointer, if any, resolves.

    Returns:
        List[str]: Human readable violations (empty when consistent).
    """
    problems: List[str] = []
    seen: Set[str] = set()

    def _visit(nodes: Forest, expected_parent: Optional[str]) -> None:
        for node in nodes:
            if node.id in seen:
                problems.append(f"Duplicate id '{node.id}'.")
            seen.add(node.id)
            if node.parent_id != expected_parent:
                problems.append(
                    f"Node '{node.id}' points to parent '{node.parent_id}' "
                    f"but is owned by '{expected_parent}'."
                )
            if not node.name:
                problems.append(f"Node '{node.id}' has an empty name.")
            if isinstance(node, FolderNode):
                _visit(node.children, node.id)

    _visit(forest, None)

    if active_id is not None and active_id not in seen:
        problems.append(f"Active id '{active_id}' does not resolve.")

    return problems

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _rewrite(nodes: Forest, node_id: str, edit: NodeEdit) -> Optional[Forest]:
    """
    Rebuild the sequence along the path to node_id.

    Returns None when node_id is not inside `nodes`, so callers can tell a
    miss apart from an edit and untouched sequences are never copied.
    """
    for index, node in enumerate(nodes):
        if node.id == node_id:
            return nodes[:index] + edit(node) + nodes[index + 1:]
        if isinstance(node, FolderNode) and node.children:
            children = _rewrite(node.children, node_id, edit)
            if children is not None:
                return nodes[:index] + (replace(node, children=children),) + nodes[index + 1:]
    return None
