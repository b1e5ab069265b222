"""Prometheus text exposition format encoder."""

import math
from collections.abc import Iterable, Mapping

from brother_exporter.core.models import MetricSample

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def _escape_label_value(value: str) -> str:
    """Escape backslash, double quote and newline in a label value."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def _format_labels(labels: Mapping[str, str]) -> str:
    """Format labels as {key="value",...} in insertion order."""
    if not labels:
        return ""
    pairs = [f'{k}="{_escape_label_value(v)}"' for k, v in labels.items()]
    return "{" + ",".join(pairs) + "}"


def _format_value(value: float) -> str:
    """Format a sample value the way Prometheus parses it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def encode_samples(samples: Iterable[MetricSample]) -> str:
    """Encode metric samples to Prometheus text format.

    Samples sharing a name are grouped under one ``# HELP`` / ``# TYPE``
    header. Groups keep the order in which each name first appears.

    Args:
        samples: An iterable of MetricSample objects.

    Returns:
        Prometheus text format string. Empty string if no samples.
    """
    groups: dict[str, list[MetricSample]] = {}
    for sample in samples:
        groups.setdefault(sample.name, []).append(sample)

    if not groups:
        return ""

    lines: list[str] = []
    for name, group in groups.items():
        head = group[0]
        if head.documentation:
            lines.append(f"# HELP {name} {_escape_help(head.documentation)}")
        lines.append(f"# TYPE {name} {head.metric_type}")
        for sample in group:
            lines.append(
                f"{name}{_format_labels(sample.labels)} {_format_value(sample.value)}"
            )

    return "\n".join(lines) + "\n"
