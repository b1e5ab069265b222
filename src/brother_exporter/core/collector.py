"""Scrape pipeline: fetch, parse, and map one device snapshot.

Each call to :meth:`ScrapeCollector.collect` runs the whole pipeline with
its own local state. Failures are reported in the returned result rather
than raised, so one bad snapshot only affects the request that saw it.
"""

import asyncio
import time
from dataclasses import dataclass, field

from brother_exporter.core.exceptions import ScrapeError
from brother_exporter.core.labels import build_label_set
from brother_exporter.core.logs import get_logger
from brother_exporter.core.mapper import map_gauges
from brother_exporter.core.models import MetricSample
from brother_exporter.core.parser import parse_snapshot
from brother_exporter.core.ports import SnapshotFetcherPort
from brother_exporter.core.schema import BROTHER_SCHEMA, SchemaTable
from brother_exporter.core.tally import build_error_tally, map_error_samples

logger = get_logger(__name__)

SCRAPE_SUCCESS_METRIC = "brother_scrape_success"
SCRAPE_DURATION_METRIC = "brother_scrape_duration_seconds"


def map_snapshot(text: str, schema: SchemaTable = BROTHER_SCHEMA) -> list[MetricSample]:
    """Turn a raw CSV snapshot into gauge and error samples.

    Args:
        text: CSV body as returned by the device.
        schema: Column layout of the snapshot.

    Returns:
        Gauge samples in schema order followed by one error sample per
        distinct error code.

    Raises:
        FormatError: If the body is not CSV or has no data row.
        RowShapeError: If the data row is shorter than the schema.
    """
    parsed = parse_snapshot(text, schema)
    label_set = build_label_set(parsed.raw, schema)
    samples = map_gauges(parsed, label_set, schema)
    samples.extend(map_error_samples(build_error_tally(parsed, schema), label_set, schema))
    return samples


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of one scrape.

    Attributes:
        samples: Device samples; empty when the scrape failed.
        success: Whether fetch and mapping completed.
        duration: Wall time of the scrape in seconds.
        error: The failure, when ``success`` is False.
    """

    samples: list[MetricSample] = field(default_factory=list)
    success: bool = True
    duration: float = 0.0
    error: ScrapeError | None = None

    @property
    def status_samples(self) -> list[MetricSample]:
        """Samples describing the scrape itself."""
        return [
            MetricSample(
                name=SCRAPE_SUCCESS_METRIC,
                value=1.0 if self.success else 0.0,
                documentation="Whether the last scrape of the device succeeded.",
            ),
            MetricSample(
                name=SCRAPE_DURATION_METRIC,
                value=self.duration,
                documentation="Duration of the device scrape in seconds.",
            ),
        ]

    @property
    def all_samples(self) -> list[MetricSample]:
        return [*self.samples, *self.status_samples]


class ScrapeCollector:
    """Runs the fetch and mapping pipeline for each scrape request.

    Args:
        fetcher: Source of raw CSV snapshots.
        schema: Column layout, shared read-only across scrapes.
        serialize_fetches: Allow only one outbound fetch at a time, for
            devices that do not tolerate concurrent requests.
    """

    def __init__(
        self,
        fetcher: SnapshotFetcherPort,
        schema: SchemaTable = BROTHER_SCHEMA,
        serialize_fetches: bool = False,
    ) -> None:
        self._fetcher = fetcher
        self._schema = schema
        self._fetch_lock = asyncio.Lock() if serialize_fetches else None

    @property
    def schema(self) -> SchemaTable:
        return self._schema

    async def _fetch(self) -> str:
        if self._fetch_lock is None:
            return await self._fetcher.fetch()
        async with self._fetch_lock:
            return await self._fetcher.fetch()

    async def collect(self) -> ScrapeResult:
        """Scrape the device once.

        Returns:
            ScrapeResult holding the device samples on success, or the
            failure and no device samples otherwise.
        """
        start = time.perf_counter()
        try:
            text = await self._fetch()
            samples = map_snapshot(text, self._schema)
        except ScrapeError as e:
            duration = time.perf_counter() - start
            logger.warning(
                "scrape failed: %s",
                e.describe(),
                extra={"error_kind": e.kind, "target": self._fetcher.url},
            )
            return ScrapeResult(success=False, duration=duration, error=e)

        duration = time.perf_counter() - start
        logger.debug(
            "scrape completed",
            extra={
                "target": self._fetcher.url,
                "sample_count": len(samples),
                "duration_seconds": duration,
            },
        )
        return ScrapeResult(samples=samples, success=True, duration=duration)
