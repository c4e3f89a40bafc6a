"""In-memory transport for dry runs and tests."""

from __future__ import annotations

import logging
from typing import List

logger = logging.getLogger(__name__)

__all__ = [
    "MemoryTransport",
]


class MemoryTransport:
    """
    Transport that records every write instead of sending it.

    Attributes:
        chunks: Each write call as a separate bytes object.
        flush_count: Number of flush() calls.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.chunks: List[bytes] = []
        self.flush_count = 0

    @property
    def data(self) -> bytes:
        """Everything written so far, concatenated."""
        return bytes(self._buffer)

    def write(self, data: bytes) -> None:
        chunk = bytes(data)
        self._buffer.extend(chunk)
        self.chunks.append(chunk)
        logger.debug("Memory transport recorded %d bytes", len(chunk))

    def flush(self) -> None:
        self.flush_count += 1

    def clear(self) -> None:
        """Forget recorded data."""
        self._buffer.clear()
        self.chunks.clear()
        self.flush_count = 0
