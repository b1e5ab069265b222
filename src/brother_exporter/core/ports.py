"""Port interfaces for adapters.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from brother_exporter.core.models import LogEntry


@runtime_checkable
class SnapshotFetcherPort(Protocol):
    """Port for retrieving one raw CSV snapshot from the device.

    Examples: HttpSnapshotFetcher, or a static fetcher in tests.
    """

    @property
    def url(self) -> str:
        """Target the snapshot is fetched from (used in log output)."""
        ...

    async def fetch(self) -> str:
        """Fetch the snapshot body.

        Raises:
            TransportError: If the device cannot be reached or times out.
            ProtocolError: If the device answers with a non-200 status.
        """
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for log storage operations.

    Adapters implementing this protocol can store and retrieve log entries.
    Examples: RingBufferLogStorage.
    """

    def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(self, since: float = 0, level: str | None = None) -> Iterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
                   Default 0 returns all entries.
            level: Only return entries of this level when given.

        Returns:
            Iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
