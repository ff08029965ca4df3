from __future__ import annotations

"""
Node Identifier Allocation.

Ids combine a random per-session token with a monotonically increasing
counter, so bursts of creations within the same clock tick still yield
distinct values and no id is ever handed out twice in a session.
"""

import itertools
import threading
import uuid
from typing import Iterator, Optional


class IdAllocator:
    """Generator of opaque, session-unique node ids."""

    def __init__(self, session: Optional[str] = None, start: int = 1) -> None:
        self._session = session or uuid.uuid4().hex[:8]
        self._counter: Iterator[int] = itertools.count(start)
        self._lock = threading.Lock()

    @property
    def session(self) -> str:
        return self._session

    def next_id(self) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{self._session}-{value}"
