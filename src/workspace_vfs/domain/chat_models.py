from __future__ import annotations

"""
Assistant Conversation Data Models.

Defines the transcript entries exchanged with the assistant and the
result object returned to interface layers after a generation request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """A single transcript entry."""
    role: str
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a generation request routed through the workspace.

    Attributes:
        ok: Flag indicating whether the generated text was stored.
        error: Descriptive message in case of failure.
        text: The generated text (empty on failure).
        target_id: Id of the file that received the text.
        created: True if a new file had to be created to hold the text.
    """
    ok: bool
    error: str = ""
    text: str = ""
    target_id: Optional[str] = None
    created: bool = False


def create_error_generation(error: str) -> GenerationResult:
    """Build a failed generation result."""
    return GenerationResult(ok=False, error=error)
