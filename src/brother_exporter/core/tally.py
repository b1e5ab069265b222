"""Error code tally built from the paired code/count columns."""

from collections.abc import Mapping

from brother_exporter.core.models import MetricSample, ParsedRow
from brother_exporter.core.schema import SchemaTable

ERROR_COUNT_HELP = "Occurrences reported by the device for each error code."


def build_error_tally(parsed: ParsedRow, schema: SchemaTable) -> dict[str, float]:
    """Map each error code to the count paired with it.

    The pairs are scanned once in column order. A code that appears more
    than once keeps the count from its last column. Empty codes are kept
    as ordinary keys.

    Args:
        parsed: The parsed data row.
        schema: Column layout naming the code/count pairs.

    Returns:
        Dict of error code to count, in first-seen order.
    """
    tally: dict[str, float] = {}
    for code_pos, count_pos in schema.error_pairs:
        tally[parsed.raw[code_pos]] = parsed.typed[count_pos]
    return tally


def map_error_samples(
    tally: Mapping[str, float],
    label_set: Mapping[str, str],
    schema: SchemaTable,
) -> list[MetricSample]:
    """Emit one error sample per distinct code in the tally.

    Each sample carries the identity labels plus the code under
    ``schema.error_label_name``.
    """
    return [
        MetricSample(
            name=schema.error_metric_name,
            value=count,
            labels={**label_set, schema.error_label_name: code},
            documentation=ERROR_COUNT_HELP,
        )
        for code, count in tally.items()
    ]
