"""Identity label set shared by every sample of a scrape."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from brother_exporter.core.exceptions import RowShapeError
from brother_exporter.core.schema import SchemaTable


def build_label_set(raw_row: Sequence[str], schema: SchemaTable) -> Mapping[str, str]:
    """Take the identity labels verbatim from the raw cells.

    The returned mapping is read-only so a single instance can be attached
    to every gauge sample of the scrape.

    Args:
        raw_row: Cells of the data row, before numeric coercion.
        schema: Column layout naming the label positions.

    Returns:
        Read-only mapping of label name to cell value, in schema order.

    Raises:
        RowShapeError: If a label position lies past the end of the row.
    """
    labels: dict[str, str] = {}
    for entry in schema.labels:
        if entry.position >= len(raw_row):
            raise RowShapeError(entry.position + 1, len(raw_row))
        labels[entry.name] = raw_row[entry.position]
    return MappingProxyType(labels)
