"""Python logging handler that keeps recent records in log storage.

The handler bridges the standard library logging module to
LogStoragePort so recent exporter activity (scrape failures in
particular) can be read back over the ``/logs`` endpoint.
"""

import logging
import sys
import traceback

from brother_exporter.core.logs import ROOT_LOGGER
from brother_exporter.core.models import LogEntry
from brother_exporter.core.ports import LogStoragePort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


class LogBufferHandler(logging.Handler):
    """Logging handler that writes log records to a LogStoragePort.

    Example:
        ```python
        storage = RingBufferLogStorage(max_size=500)
        logging.getLogger("brother_exporter").addHandler(LogBufferHandler(storage))
        ```
    """

    def __init__(self, storage: LogStoragePort, level: int = logging.NOTSET) -> None:
        """Initialize the handler with a log storage backend.

        Args:
            storage: Storage adapter implementing LogStoragePort.
            level: Minimum level of records to store.
        """
        super().__init__(level)
        self._storage = storage

    def emit(self, record: logging.LogRecord) -> None:
        """Convert a log record to a LogEntry and store it.

        Args:
            record: The log record to emit.
        """
        try:
            attributes: dict[str, str | int | float | bool] = {
                "logger": record.name,
                "funcName": record.funcName or "",
                "lineno": record.lineno,
            }

            # Fields passed via ``extra=``
            for key, value in record.__dict__.items():
                if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                    value, (str, int, float, bool)
                ):
                    attributes[key] = value

            if record.exc_info:
                exc_type, exc_value, exc_tb = record.exc_info
                if exc_type is not None:
                    attributes["exc_type"] = exc_type.__name__
                if exc_value is not None:
                    attributes["exc_message"] = str(exc_value)
                if exc_tb is not None:
                    attributes["exc_traceback"] = "".join(
                        traceback.format_exception(exc_type, exc_value, exc_tb)
                    )

            entry = LogEntry(
                timestamp=record.created,
                level=record.levelname,
                message=record.getMessage(),
                attributes=attributes,
            )
            self._storage.write(entry)
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "INFO", storage: LogStoragePort | None = None) -> None:
    """Set up exporter logging to stderr and, optionally, a log buffer.

    Replaces handlers previously installed by this function, so calling
    it again (e.g. in tests) does not duplicate output.

    Args:
        level: Log level name for the exporter's loggers.
        storage: When given, records are also kept in this storage.
    """
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(level.upper())
    root.propagate = False

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(stream)

    if storage is not None:
        root.addHandler(LogBufferHandler(storage))
