"""Gauge samples for the numeric columns of a snapshot."""

from collections.abc import Mapping

from brother_exporter.core.models import MetricSample, ParsedRow
from brother_exporter.core.schema import SchemaTable


def map_gauges(
    parsed: ParsedRow,
    label_set: Mapping[str, str],
    schema: SchemaTable,
) -> list[MetricSample]:
    """Emit one gauge sample per GAUGE column, in schema order.

    Every configured gauge is emitted, including columns whose cell did
    not parse and therefore read as 0.0.

    Args:
        parsed: The parsed data row.
        label_set: Identity labels shared by all samples of this scrape.
        schema: Column layout naming the gauge positions.

    Returns:
        List of gauge MetricSample objects.
    """
    return [
        MetricSample(
            name=entry.name,
            value=parsed.typed[entry.position],
            labels=label_set,
            documentation=entry.documentation,
        )
        for entry in schema.gauges
    ]
