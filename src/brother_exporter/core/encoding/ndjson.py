"""NDJSON rendering of buffered exporter log entries for ``/logs``."""

import json
from collections.abc import Iterable

from brother_exporter.core.models import LogEntry

CONTENT_TYPE = "application/x-ndjson"


def encode_log_entry(entry: LogEntry) -> str:
    """Render one entry as a compact JSON object with sorted keys.

    The originating logger name, when the handler recorded one, is lifted
    out of ``attributes`` into a top-level ``logger`` field.

    Args:
        entry: The log entry to render.

    Returns:
        A single line of JSON without a trailing newline.
    """
    attributes = dict(entry.attributes)
    obj = {
        "timestamp": entry.timestamp,
        "level": entry.level,
        "logger": attributes.pop("logger", None),
        "message": entry.message,
        "attributes": attributes,
    }
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def encode_logs(entries: Iterable[LogEntry]) -> str:
    """Encode entries as newline-delimited JSON; no entries gives ``""``."""
    return "".join(encode_log_entry(entry) + "\n" for entry in entries)
