"""Core domain models for scraped device data."""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field


class FieldKind(enum.Enum):
    """Role of a CSV column in the device snapshot."""

    LABEL = "label"
    GAUGE = "gauge"
    ERROR_CODE = "error_code"
    ERROR_COUNT = "error_count"


@dataclass(frozen=True)
class SchemaEntry:
    """A single column of the fixed device schema.

    Attributes:
        position: Zero-based column index in the data row.
        kind: What the column holds (label, gauge, error code or error count).
        name: Label name or metric name, depending on kind.
        documentation: HELP text for gauge columns.
    """

    position: int
    kind: FieldKind
    name: str
    documentation: str = ""


@dataclass(frozen=True)
class ParsedRow:
    """The selected data row in both raw and numeric form.

    Attributes:
        raw: Cells exactly as decoded from the CSV record.
        typed: One float per cell; non-numeric cells are 0.0.
    """

    raw: tuple[str, ...]
    typed: tuple[float, ...]


@dataclass(frozen=True)
class MetricSample:
    """A single metric measurement.

    Attributes:
        name: Metric name (e.g., brother_page_counter).
        value: The metric value.
        labels: Key-value pairs for metric dimensions.
        documentation: HELP text used by the exposition encoder.
        metric_type: Prometheus metric type (gauge or counter).
    """

    name: str
    value: float
    labels: Mapping[str, str] = field(default_factory=dict)
    documentation: str = ""
    metric_type: str = "gauge"


@dataclass(frozen=True)
class LogEntry:
    """A structured log entry.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Log level (e.g., INFO, ERROR, DEBUG).
        message: The log message.
        attributes: Additional structured fields.
    """

    timestamp: float
    level: str
    message: str
    attributes: dict[str, str | int | float | bool] = field(default_factory=dict)
