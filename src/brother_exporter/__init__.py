"""Prometheus exporter for Brother printer maintenance data."""

from brother_exporter.adapters.fetcher import HttpSnapshotFetcher
from brother_exporter.adapters.frameworks.asgi import create_asgi_app
from brother_exporter.core.collector import ScrapeCollector, ScrapeResult, map_snapshot
from brother_exporter.core.exceptions import (
    CsvParseError,
    FetchTimeoutError,
    FormatError,
    NoDataError,
    ProtocolError,
    RowShapeError,
    ScrapeError,
    TransportError,
)
from brother_exporter.core.logs import get_logger
from brother_exporter.core.models import FieldKind, MetricSample, SchemaEntry
from brother_exporter.core.schema import BROTHER_SCHEMA, SchemaTable

__all__ = [
    "BROTHER_SCHEMA",
    "CsvParseError",
    "FetchTimeoutError",
    "FieldKind",
    "FormatError",
    "HttpSnapshotFetcher",
    "MetricSample",
    "NoDataError",
    "ProtocolError",
    "RowShapeError",
    "SchemaEntry",
    "SchemaTable",
    "ScrapeCollector",
    "ScrapeError",
    "ScrapeResult",
    "TransportError",
    "create_asgi_app",
    "get_logger",
    "map_snapshot",
]
