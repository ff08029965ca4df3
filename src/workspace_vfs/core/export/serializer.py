from __future__ import annotations

"""
Forest Export Serializer.

Translates forest snapshots into transferable byte payloads. Export is
one-directional: no reader for these payloads exists in the workspace.
"""

import json
from typing import Any, Dict, List

from workspace_vfs.domain.node_models import FileNode, FolderNode, Forest, Node

ENCODING = "utf-8"


def node_to_record(node: Node) -> Dict[str, Any]:
    """
    Convert a node and its subtree into a plain, order-preserving record.

    Files carry 'content' and 'language'; folders carry 'children'.
    """
    record: Dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "kind": node.kind.value,
    }
    if isinstance(node, FileNode):
        record["content"] = node.content
        record["language"] = node.language
    elif isinstance(node, FolderNode):
        record["children"] = [node_to_record(child) for child in node.children]
    return record


def forest_to_records(forest: Forest) -> List[Dict[str, Any]]:
    return [node_to_record(node) for node in forest]


def export_forest_bytes(forest: Forest) -> bytes:
    """Serialize the whole forest as indented UTF-8 JSON."""
    return json.dumps(forest_to_records(forest), ensure_ascii=False, indent=2).encode(ENCODING)


def export_file_bytes(node: FileNode) -> bytes:
    """Serialize a single file's raw content."""
    return node.content.encode(ENCODING)
