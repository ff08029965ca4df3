from __future__ import annotations

"""
Export/Download Adapter.

Turns store payloads into named, typed artifacts and hands them to the
host's save-to-disk facility (a target directory). Delivery reports the
outcome of the handoff only; it never mutates the store.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from workspace_vfs.core.tree.store import TreeStore
from workspace_vfs.domain import constants as const
from workspace_vfs.infra.fs import is_within, normalize_path, safe_mkdir, unique_destination

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ARTIFACT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExportArtifact:
    """
    A device-deliverable byte stream.

    Attributes:
        filename: Suggested file name on the host.
        media_type: MIME type of the payload.
        data: Raw bytes.
    """
    filename: str
    media_type: str
    data: bytes

# -----------------------------------------------------------------------------
# ADAPTER
# -----------------------------------------------------------------------------

class DownloadAdapter:
    """Bridge between the tree store and the host filesystem."""

    def __init__(self, target_dir: str) -> None:
        self.target_dir = normalize_path(target_dir, ".")

    @staticmethod
    def project_artifact(store: TreeStore) -> ExportArtifact:
        """Build the full-forest export artifact ('project.json')."""
        return ExportArtifact(
            filename=const.PROJECT_EXPORT_NAME,
            media_type=const.PROJECT_MEDIA_TYPE,
            data=store.export_all(),
        )

    @staticmethod
    def file_artifact(store: TreeStore, node_id: str) -> ExportArtifact:
        """
        Build a single-file artifact named after the file.

        Raises:
            NotFoundError: The id does not resolve.
            NotAFileError: The id resolves to a folder.
        """
        node = store.get_file(node_id)
        return ExportArtifact(
            filename=node.name,
            media_type=const.FILE_MEDIA_TYPE,
            data=store.export_one(node_id),
        )

    def deliver(self, artifact: ExportArtifact) -> Tuple[bool, str]:
        """
        Write an artifact into the target directory without overwriting.

        Args:
            artifact: The artifact to save.

        Returns:
            Tuple[bool, str]: (Success flag, saved path or error message).
        """
        ok, err = safe_mkdir(self.target_dir)
        if not ok:
            logger.error(f"Export directory unavailable '{self.target_dir}': {err}")
            return False, err or "Export directory unavailable"

        destination = unique_destination(self.target_dir, artifact.filename)
        if not is_within(self.target_dir, destination):
            logger.error(f"Refused to save '{artifact.filename}' outside '{self.target_dir}'")
            return False, "Destination outside export directory"

        try:
            with open(destination, "wb") as f:
                f.write(artifact.data)
        except OSError as e:
            logger.error(f"Failed to save '{artifact.filename}' to '{destination}': {e}")
            return False, str(e)

        logger.info(f"Saved {artifact.media_type} artifact ({len(artifact.data)} bytes): {destination}")
        return True, destination

    def download_project(self, store: TreeStore) -> Tuple[bool, str]:
        return self.deliver(self.project_artifact(store))

    def download_file(self, store: TreeStore, node_id: str) -> Tuple[bool, str]:
        """
        Save one file's content. Empty files are skipped.

        Raises:
            NotFoundError: The id does not resolve.
            NotAFileError: The id resolves to a folder.
        """
        artifact = self.file_artifact(store, node_id)
        if not artifact.data:
            logger.info(f"Skipped download of empty file '{artifact.filename}'")
            return False, "File is empty"
        return self.deliver(artifact)
