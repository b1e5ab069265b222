"""Ring buffer storage adapter for logs.

Provides bounded in-memory storage that automatically evicts oldest
entries when the buffer is full, so a long-running exporter keeps a
predictable memory footprint.
"""

import threading
from collections import deque
from collections.abc import Iterable

from brother_exporter.core.models import LogEntry


class RingBufferLogStorage:
    """Ring buffer implementation of LogStoragePort.

    Stores log entries in a fixed-size circular buffer. When the buffer
    is full, the oldest entry is automatically evicted to make room for
    new entries. Writes may come from any thread.

    Args:
        max_size: Maximum number of entries to store.
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._buffer: deque[LogEntry] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        with self._lock:
            self._buffer.append(entry)

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since (and matching ``level`` when
        given), ordered by timestamp ascending.
        """
        with self._lock:
            snapshot = list(self._buffer)
        filtered = [
            e
            for e in snapshot
            if e.timestamp > since and (level is None or e.level == level)
        ]
        return sorted(filtered, key=lambda e: e.timestamp)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
