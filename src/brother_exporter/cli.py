"""Command-line entry point: configure and serve the exporter."""

import sys
from collections.abc import Sequence

import uvicorn

from brother_exporter.adapters.fetcher import HttpSnapshotFetcher
from brother_exporter.adapters.frameworks.asgi import ASGIApp, create_asgi_app
from brother_exporter.adapters.logging import configure_logging
from brother_exporter.adapters.storage.ring_buffer import RingBufferLogStorage
from brother_exporter.config import ExporterConfig, load_config
from brother_exporter.core.collector import ScrapeCollector
from brother_exporter.core.exceptions import ConfigError
from brother_exporter.core.logs import get_logger
from brother_exporter.core.schema import BROTHER_SCHEMA

logger = get_logger(__name__)


def build_app(config: ExporterConfig, log_storage: RingBufferLogStorage | None = None) -> ASGIApp:
    """Wire fetcher, collector and HTTP app for the given configuration."""
    fetcher = HttpSnapshotFetcher(config.target_url, config.timeout)
    collector = ScrapeCollector(
        fetcher, BROTHER_SCHEMA, serialize_fetches=config.serialize_fetches
    )
    return create_asgi_app(
        collector, log_storage=log_storage, process_metrics=config.process_metrics
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the exporter until uvicorn stops.

    Args:
        argv: Command-line arguments; ``None`` reads ``sys.argv``.

    Returns:
        Process exit status: 0 after a clean shutdown, 2 when the
        configuration or the target URL is invalid.
    """
    try:
        config = load_config(argv)
    except ConfigError as e:
        print(f"brother-exporter: {e}", file=sys.stderr)
        return 2

    log_storage = RingBufferLogStorage(config.log_buffer_size)
    configure_logging(config.log_level, log_storage)

    try:
        app = build_app(config, log_storage)
    except ValueError as e:
        logger.error("invalid target %s: %s", config.target_url, e)
        return 2

    logger.info(
        "Beginning to serve on %s:%d, scraping %s",
        config.listen_host,
        config.port,
        config.target_url,
    )
    uvicorn.run(
        app,
        host=config.listen_host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0
