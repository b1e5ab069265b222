"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Iterator

import httpx
import pytest
from tests.helpers import StaticFetcher, build_csv, build_row

from brother_exporter.adapters.logging import configure_logging
from brother_exporter.adapters.storage.ring_buffer import RingBufferLogStorage
from brother_exporter.core.collector import ScrapeCollector
from brother_exporter.core.logs import ROOT_LOGGER
from brother_exporter.core.models import FieldKind, SchemaEntry
from brother_exporter.core.schema import SchemaTable


@pytest.fixture
def snapshot_csv() -> str:
    """A header plus one data row with two distinct error codes."""
    return build_csv(build_row(codes=["Jam Tray 1", "Toner Low"], counts=["4", "7"]))


@pytest.fixture
def static_fetcher(snapshot_csv: str) -> StaticFetcher:
    """Fetcher returning the default snapshot."""
    return StaticFetcher(snapshot_csv)


@pytest.fixture
def collector(static_fetcher: StaticFetcher) -> ScrapeCollector:
    """Collector over the default snapshot and the Brother schema."""
    return ScrapeCollector(static_fetcher)


@pytest.fixture
def small_schema() -> SchemaTable:
    """Synthetic six-column schema: two labels, two gauges, one error pair."""
    return SchemaTable(
        [
            SchemaEntry(0, FieldKind.LABEL, "host"),
            SchemaEntry(1, FieldKind.LABEL, "model"),
            SchemaEntry(2, FieldKind.GAUGE, "dev_pages", "Pages."),
            SchemaEntry(3, FieldKind.GAUGE, "dev_jams", "Jams."),
            SchemaEntry(4, FieldKind.ERROR_CODE, "code"),
            SchemaEntry(5, FieldKind.ERROR_COUNT, "count"),
        ],
        error_metric_name="dev_error_count",
        error_label_name="error_code",
    )


@pytest.fixture
def log_storage() -> Iterator[RingBufferLogStorage]:
    """Exporter logging routed into a fresh ring buffer."""
    storage = RingBufferLogStorage(max_size=100)
    configure_logging("DEBUG", storage)
    yield storage
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
    root.setLevel(logging.NOTSET)


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(collector)
            async with asgi_test_client(app) as client:
                response = await client.get("/metrics")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
