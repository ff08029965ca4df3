from __future__ import annotations

"""
Network Communication Infrastructure.

Orchestrates external HTTP interactions via specialized domain clients.
"""

from workspace_vfs.infra.network.assistant_client import (
    AssistantClient,
    AssistantError,
    build_code_prompt,
)
from workspace_vfs.infra.network.common import USER_AGENT

__all__ = [
    "AssistantClient",
    "AssistantError",
    "build_code_prompt",
    "USER_AGENT",
]
