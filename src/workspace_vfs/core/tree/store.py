from __future__ import annotations

"""
Workspace Tree Store.

Owns the forest of root nodes and the active-node pointer. Every
mutation is a pure structural rebuild: the store swaps in a new forest
value only after the whole edit succeeded, so an operation either fully
applies or leaves the previous snapshot untouched.
"""

import logging
from dataclasses import replace
from typing import Callable, Iterator, List, Optional, Tuple

from workspace_vfs.core.export import serializer
from workspace_vfs.core.tree import operations as ops
from workspace_vfs.core.tree.ids import IdAllocator
from workspace_vfs.core.tree.naming import classify
from workspace_vfs.domain import constants as const
from workspace_vfs.domain.errors import InvalidParentError, NotAFileError, NotFoundError
from workspace_vfs.domain.node_models import FileNode, FolderNode, Forest, Node

logger = logging.getLogger(__name__)

ForestListener = Callable[[Forest], None]


class TreeStore:
    """
    Single source of truth for the workspace forest.

    Consumers (tree view, editor, assistant routing) read snapshots via
    `forest` and `find`, and mutate exclusively through the operations
    below.
    """

    def __init__(self, allocator: Optional[IdAllocator] = None) -> None:
        """Initialize an empty forest with no active node."""
        self._forest: Forest = ()
        self._active_id: Optional[str] = None
        self._ids = allocator or IdAllocator()
        self._listeners: List[ForestListener] = []

    @classmethod
    def with_seed_project(cls, allocator: Optional[IdAllocator] = None) -> "TreeStore":
        """
        Build a store holding the starter project.

        Layout: folder 'src' with 'App.tsx' and 'index.css'; 'App.tsx' is active.
        """
        store = cls(allocator)
        folder_id = store.create_folder(const.SEED_FOLDER)
        file_ids = [
            store.create_file(name, folder_id, content)
            for name, content in const.SEED_FILES
        ]
        store.select(file_ids[0])
        return store

    # -------------------------------------------------------------------------
    # SNAPSHOT ACCESS
    # -------------------------------------------------------------------------

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    def find(self, node_id: str) -> Optional[Node]:
        """Depth-first lookup across the whole forest. Side-effect free."""
        return ops.find_node(self._forest, node_id)

    def get_file(self, node_id: str) -> FileNode:
        """
        Resolve a file node.

        Raises:
            NotFoundError: The id does not resolve.
            NotAFileError: The id resolves to a folder.
        """
        node = self.find(node_id)
        if node is None:
            raise NotFoundError(node_id)
        if not isinstance(node, FileNode):
            raise NotAFileError(node_id)
        return node

    def active_node(self) -> Optional[Node]:
        if self._active_id is None:
            return None
        return self.find(self._active_id)

    def walk(self) -> Iterator[Tuple[int, Node]]:
        return ops.walk(self._forest)

    def path_of(self, node_id: str) -> str:
        """Slash-joined names from the owning root down to the node."""
        chain = ops.find_path(self._forest, node_id)
        if chain is None:
            raise NotFoundError(node_id)
        return "/".join(node.name for node in chain)

    # -------------------------------------------------------------------------
    # SELECTION
    # -------------------------------------------------------------------------

    def select(self, node_id: str) -> None:
        if self.find(node_id) is None:
            raise NotFoundError(node_id)
        self._active_id = node_id
        logger.debug(f"Active node set to {node_id}")

    def clear_selection(self) -> None:
        self._active_id = None

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def create_file(self, name: str, parent_id: Optional[str] = None, content: str = "") -> str:
        """
        Create a file node and attach it under a folder or as a new root.

        Args:
            name: Display name; also drives the language classification.
            parent_id: Existing folder id, or None for a new root.
            content: Initial text content.

        Returns:
            str: The id of the new file.

        Raises:
            InvalidParentError: parent_id does not resolve to a folder.
        """
        _require_name(name)
        node = FileNode(
            id=self._ids.next_id(),
            name=name,
            parent_id=parent_id,
            content=content,
            language=classify(name),
        )
        self._attach(node)
        logger.debug(f"Created file '{name}' ({node.id}) language={node.language}")
        return node.id

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        """
        Create an empty folder under a folder or as a new root.

        Raises:
            InvalidParentError: parent_id does not resolve to a folder.
        """
        _require_name(name)
        node = FolderNode(id=self._ids.next_id(), name=name, parent_id=parent_id)
        self._attach(node)
        logger.debug(f"Created folder '{name}' ({node.id})")
        return node.id

    def update_content(self, node_id: str, content: str) -> None:
        """
        Replace the content of a file.

        Setting the content a file already holds keeps the current snapshot.

        Raises:
            NotFoundError: The id does not resolve.
            NotAFileError: The id resolves to a folder.
        """
        current = self.get_file(node_id)
        if current.content == content:
            return
        self._commit(ops.replace_node(self._forest, node_id, lambda n: replace(n, content=content)))
        logger.debug(f"Updated content of {node_id} ({len(content)} chars)")

    def delete(self, node_id: str) -> None:
        """
        Remove a node and, for folders, its entire subtree.

        Clears the active pointer if it named any removed node.

        Raises:
            NotFoundError: The id does not resolve.
        """
        forest, removed = ops.remove_node(self._forest, node_id)
        removed_ids = ops.subtree_ids(removed)
        if self._active_id in removed_ids:
            self._active_id = None
        self._commit(forest)
        logger.debug(f"Deleted {node_id} ({len(removed_ids)} node(s) removed)")

    # -------------------------------------------------------------------------
    # EXPORT
    # -------------------------------------------------------------------------

    def export_all(self) -> bytes:
        """Serialize the full forest as nested JSON records."""
        return serializer.export_forest_bytes(self._forest)

    def export_one(self, node_id: str) -> bytes:
        """
        Serialize a single file's raw content.

        Raises:
            NotFoundError: The id does not resolve.
            NotAFileError: The id resolves to a folder.
        """
        return serializer.export_file_bytes(self.get_file(node_id))

    # -------------------------------------------------------------------------
    # CHANGE NOTIFICATION
    # -------------------------------------------------------------------------

    def subscribe(self, listener: ForestListener) -> Callable[[], None]:
        """
        Register a callback invoked with every new forest snapshot.

        Returns:
            Callable[[], None]: Function that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _attach(self, node: Node) -> None:
        try:
            forest = ops.insert_child(self._forest, node.parent_id, node)
        except InvalidParentError:
            logger.warning(f"Rejected creation of '{node.name}': invalid parent {node.parent_id}")
            raise
        self._commit(forest)

    def _commit(self, forest: Forest) -> None:
        # The new snapshot is final here; a failing listener must not undo it
        self._forest = forest
        for listener in list(self._listeners):
            try:
                listener(forest)
            except Exception:
                logger.exception(f"Forest listener {listener!r} failed")


def _require_name(name: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Node name must be a non-empty string.")
