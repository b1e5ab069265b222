"""Exporter configuration from command-line flags and environment.

Every flag has a ``BROTHER_EXPORTER_*`` environment variable that
supplies its default, so the exporter can be configured either way in
containers.
"""

import argparse
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from brother_exporter.core.exceptions import ConfigError

ENV_PREFIX = "BROTHER_EXPORTER_"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExporterConfig:
    """Settings for one exporter process.

    Attributes:
        address: Host (and optional port) of the device.
        csv_path: Path of the maintenance CSV on the device.
        timeout: Deadline for each device fetch, in seconds.
        listen_host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        log_level: Level name for exporter logging.
        log_buffer_size: Number of recent log entries kept for /logs.
        serialize_fetches: Allow only one outbound fetch at a time.
        process_metrics: Include process_* runtime samples in /metrics.
    """

    address: str = "10.0.0.3"
    csv_path: str = "etc/mnt_info.csv"
    timeout: float = 10.0
    listen_host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    log_buffer_size: int = 1000
    serialize_fetches: bool = False
    process_metrics: bool = True

    def __post_init__(self) -> None:
        if not self.address.strip():
            raise ConfigError("address must not be empty")
        if "/" in self.address or "://" in self.address:
            raise ConfigError(f"address must be a host[:port], got {self.address!r}")
        if not self.timeout > 0:
            raise ConfigError(f"timeout must be greater than 0, got {self.timeout}")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"log level must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.log_level!r}"
            )
        if self.log_buffer_size < 1:
            raise ConfigError(
                f"log buffer size must be at least 1, got {self.log_buffer_size}"
            )

    @property
    def target_url(self) -> str:
        """Full URL of the CSV snapshot on the device."""
        return f"http://{self.address}/{self.csv_path.lstrip('/')}"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_parser(environ: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser, taking defaults from the environment."""
    env = os.environ if environ is None else environ
    defaults = ExporterConfig.__dataclass_fields__

    def default(name: str) -> str:
        return env.get(f"{ENV_PREFIX}{name.upper()}", str(defaults[name].default))

    parser = argparse.ArgumentParser(
        prog="brother-exporter",
        description="Prometheus exporter for Brother printer maintenance CSV data.",
    )
    parser.add_argument(
        "--address", default=default("address"), help="IP address of the printer"
    )
    parser.add_argument(
        "--csv-url",
        dest="csv_path",
        default=default("csv_path"),
        help="Path of the CSV file on the printer",
    )
    parser.add_argument(
        "--timeout",
        default=default("timeout"),
        help="Timeout in seconds for the HTTP call to the printer",
    )
    parser.add_argument(
        "--listen-host", default=default("listen_host"), help="Interface to bind to"
    )
    parser.add_argument("--port", default=default("port"), help="Port to serve /metrics on")
    parser.add_argument("--log-level", default=default("log_level"), help="Log level")
    parser.add_argument(
        "--log-buffer-size",
        default=default("log_buffer_size"),
        help="Number of recent log entries served on /logs",
    )
    parser.add_argument(
        "--serialize-fetches",
        action="store_true",
        default=_env_bool(env.get(f"{ENV_PREFIX}SERIALIZE_FETCHES", "false")),
        help="Never send more than one request to the printer at a time",
    )
    parser.add_argument(
        "--no-process-metrics",
        dest="process_metrics",
        action="store_false",
        default=_env_bool(env.get(f"{ENV_PREFIX}PROCESS_METRICS", "true")),
        help="Do not include process_* runtime metrics",
    )
    return parser


def load_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExporterConfig:
    """Parse flags and environment into an ExporterConfig.

    Args:
        argv: Command-line arguments, without the program name.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated ExporterConfig.

    Raises:
        ConfigError: If a value cannot be converted or fails validation.
    """
    args = build_parser(environ).parse_args(argv)
    try:
        timeout = float(args.timeout)
        port = int(args.port)
        log_buffer_size = int(args.log_buffer_size)
    except ValueError as e:
        raise ConfigError(f"invalid numeric setting: {e}") from e

    return ExporterConfig(
        address=args.address,
        csv_path=args.csv_path,
        timeout=timeout,
        listen_host=args.listen_host,
        port=port,
        log_level=args.log_level.upper(),
        log_buffer_size=log_buffer_size,
        serialize_fetches=args.serialize_fetches,
        process_metrics=args.process_metrics,
    )
