from __future__ import annotations

"""
Workspace Controller.

Composition point between the tree view, the editing surface and the
assistant. Routes their events into TreeStore operations and keeps the
presentation state that is not part of the forest (expanded folders,
chat transcript, pending generation flag). Owns no tree logic itself.
"""

import logging
from typing import Any, Callable, List, Optional, Set

from workspace_vfs.core.tree.operations import walk
from workspace_vfs.core.tree.store import TreeStore
from workspace_vfs.domain import constants as const
from workspace_vfs.domain.chat_models import (
    ROLE_ASSISTANT,
    ROLE_USER,
    ChatMessage,
    GenerationResult,
    create_error_generation,
)
from workspace_vfs.domain.errors import NotFoundError, VfsError
from workspace_vfs.domain.node_models import FileNode, FolderNode, Forest

logger = logging.getLogger(__name__)

# Opaque text generator: prompt (plus optional overrides) in, finished text out
Assistant = Callable[..., str]


class WorkspaceController:
    """
    Event router for the interactive workspace.

    Attributes:
        store: The tree store all forest changes go through.
        assistant: Text generator invoked on generation requests.
        generated_file_name: Name used when generated text has no target file.
        expanded_folders: Folder ids currently expanded in the tree view.
    """

    def __init__(
            self,
            store: TreeStore,
            assistant: Optional[Assistant] = None,
            generated_file_name: str = const.DEFAULT_GENERATED_NAME,
    ) -> None:
        self.store = store
        self.assistant = assistant
        self.generated_file_name = generated_file_name
        self.expanded_folders: Set[str] = {
            node.id for node in store.forest if isinstance(node, FolderNode)
        }
        self._messages: List[ChatMessage] = []
        self._busy = False
        store.subscribe(self._on_forest_changed)

    # -------------------------------------------------------------------------
    # TREE VIEW EVENTS
    # -------------------------------------------------------------------------

    def select(self, node_id: str) -> None:
        """
        Handle a click in the tree view.

        Files become active; folders toggle their expanded state and leave
        the active pointer untouched.

        Raises:
            NotFoundError: The id does not resolve.
        """
        node = self.store.find(node_id)
        if node is None:
            raise NotFoundError(node_id)
        if isinstance(node, FolderNode):
            self.toggle_folder(node_id)
            return
        self.store.select(node_id)

    def toggle_folder(self, folder_id: str) -> None:
        if folder_id in self.expanded_folders:
            self.expanded_folders.discard(folder_id)
        else:
            self.expanded_folders.add(folder_id)

    def create_file(self, name: str, parent_id: Optional[str] = None) -> str:
        """Create an empty file and make it the active node."""
        file_id = self.store.create_file(name, parent_id)
        self.store.select(file_id)
        return file_id

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> str:
        """Create a folder and expand it in the tree view."""
        folder_id = self.store.create_folder(name, parent_id)
        self.expanded_folders.add(folder_id)
        return folder_id

    def delete(self, node_id: str) -> None:
        self.store.delete(node_id)

    # -------------------------------------------------------------------------
    # EDITING SURFACE EVENTS
    # -------------------------------------------------------------------------

    def current_file(self) -> Optional[FileNode]:
        """The active file shown in the editor, if any."""
        node = self.store.active_node()
        return node if isinstance(node, FileNode) else None

    def change_content(self, content: str) -> None:
        """Funnel an editor change into the active file. Last write wins."""
        active = self.current_file()
        if active is None:
            return
        self.store.update_content(active.id, content)

    # -------------------------------------------------------------------------
    # ASSISTANT EVENTS
    # -------------------------------------------------------------------------

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    @property
    def is_busy(self) -> bool:
        return self._busy

    def clear_messages(self) -> None:
        self._messages.clear()

    def apply_generated(self, text: str) -> GenerationResult:
        """
        Store finished generated text.

        Replaces the active file's content, or creates a new root file
        holding the text and selects it when no file is active.

        Returns:
            GenerationResult: Target id and whether a file was created.
        """
        active = self.current_file()
        if active is not None:
            self.store.update_content(active.id, text)
            return GenerationResult(ok=True, text=text, target_id=active.id)

        file_id = self.store.create_file(self.generated_file_name, None, text)
        self.store.select(file_id)
        logger.info(f"Generated text stored in new file '{self.generated_file_name}' ({file_id})")
        return GenerationResult(ok=True, text=text, target_id=file_id, created=True)

    def request_generation(self, prompt: str, **options: Any) -> GenerationResult:
        """
        Run one assistant call and route its result into the workspace.

        The forest is only touched after the assistant returned text; a
        failing call leaves it exactly as it was.

        Args:
            prompt: User request.
            **options: Per-request generation overrides (temperature,
                max_tokens, context) forwarded to the assistant.

        Returns:
            GenerationResult: Outcome of the request.
        """
        prompt = (prompt or "").strip()
        if not prompt:
            return create_error_generation("Prompt is empty.")
        if self.assistant is None:
            return create_error_generation("No assistant configured.")
        if self._busy:
            return create_error_generation("A generation request is already running.")

        self._messages.append(ChatMessage(role=ROLE_USER, content=prompt))
        self._busy = True
        try:
            text = self.assistant(prompt, **options)
        except Exception as e:
            logger.error(f"Code generation failed: {e}")
            return create_error_generation(str(e) or type(e).__name__)
        finally:
            self._busy = False

        self._messages.append(ChatMessage(role=ROLE_ASSISTANT, content=text))
        try:
            return self.apply_generated(text)
        except VfsError as e:
            logger.error(f"Generated text could not be stored: {e}")
            return create_error_generation(str(e))

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _on_forest_changed(self, forest: Forest) -> None:
        # Forget expansion state of folders that no longer exist
        if not self.expanded_folders:
            return
        alive = {node.id for _, node in walk(forest) if isinstance(node, FolderNode)}
        self.expanded_folders &= alive
