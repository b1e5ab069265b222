"""Fixed column layout of the device maintenance CSV.

The schema maps each column position to its meaning. It is built once at
startup and only read afterwards, so one instance is shared by every
scrape. Tests construct smaller tables with the same rules.
"""

from collections.abc import Iterable

from brother_exporter.core.exceptions import SchemaError
from brother_exporter.core.models import FieldKind, SchemaEntry

DEFAULT_ERROR_METRIC = "brother_error_count"
DEFAULT_ERROR_LABEL = "error_message"


class SchemaTable:
    """Immutable, validated mapping from column position to field.

    Args:
        entries: Schema entries in declaration order.
        error_metric_name: Metric name for error tally samples.
        error_label_name: Extra label carrying the error code.

    Raises:
        SchemaError: If positions repeat, or the error code and count
            regions differ in length or are not paired at a fixed offset.
    """

    def __init__(
        self,
        entries: Iterable[SchemaEntry],
        error_metric_name: str = DEFAULT_ERROR_METRIC,
        error_label_name: str = DEFAULT_ERROR_LABEL,
    ) -> None:
        self._entries = tuple(entries)
        self._error_metric_name = error_metric_name
        self._error_label_name = error_label_name
        self._validate()
        self._labels = self._of_kind(FieldKind.LABEL)
        self._gauges = self._of_kind(FieldKind.GAUGE)
        codes = sorted(self._of_kind(FieldKind.ERROR_CODE), key=lambda e: e.position)
        counts = sorted(self._of_kind(FieldKind.ERROR_COUNT), key=lambda e: e.position)
        self._error_pairs = tuple(
            (code.position, count.position) for code, count in zip(codes, counts)
        )

    def _of_kind(self, kind: FieldKind) -> tuple[SchemaEntry, ...]:
        return tuple(e for e in self._entries if e.kind is kind)

    def _validate(self) -> None:
        if not self._entries:
            raise SchemaError("schema table must contain at least one entry")

        seen: set[int] = set()
        for entry in self._entries:
            if entry.position < 0:
                raise SchemaError(f"negative position {entry.position} for {entry.name!r}")
            if entry.position in seen:
                raise SchemaError(f"duplicate position {entry.position}")
            seen.add(entry.position)

        codes = sorted(
            e.position for e in self._entries if e.kind is FieldKind.ERROR_CODE
        )
        counts = sorted(
            e.position for e in self._entries if e.kind is FieldKind.ERROR_COUNT
        )
        if len(codes) != len(counts):
            raise SchemaError(
                f"error code region has {len(codes)} columns, "
                f"error count region has {len(counts)}"
            )
        offsets = {count - code for code, count in zip(codes, counts)}
        if len(offsets) > 1:
            raise SchemaError(
                f"error codes and counts are not paired at a fixed offset: {sorted(offsets)}"
            )

        names = [e.name for e in self._entries if e.kind is FieldKind.LABEL]
        if self._error_label_name in names:
            raise SchemaError(
                f"error label {self._error_label_name!r} collides with an identity label"
            )

    @property
    def entries(self) -> tuple[SchemaEntry, ...]:
        return self._entries

    @property
    def labels(self) -> tuple[SchemaEntry, ...]:
        return self._labels

    @property
    def gauges(self) -> tuple[SchemaEntry, ...]:
        return self._gauges

    @property
    def error_pairs(self) -> tuple[tuple[int, int], ...]:
        """``(code_position, count_position)`` pairs in scan order."""
        return self._error_pairs

    @property
    def label_names(self) -> tuple[str, ...]:
        return tuple(e.name for e in self._labels)

    @property
    def min_row_length(self) -> int:
        """Smallest data row that covers every schema position."""
        return max(e.position for e in self._entries) + 1

    @property
    def error_metric_name(self) -> str:
        return self._error_metric_name

    @property
    def error_label_name(self) -> str:
        return self._error_label_name

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"SchemaTable(labels={len(self._labels)}, gauges={len(self._gauges)}, "
            f"error_pairs={len(self._error_pairs)})"
        )


_LABEL_NAMES = (
    "nodeName",
    "modelName",
    "location",
    "contact",
    "ipAddress",
    "serialNumber",
    "mainFirmwareVersion",
    "sub1FirmwareVersion",
)

# (metric name, HELP text) for columns 8..40, in column order
_GAUGES = (
    ("brother_memory_size", "Installed memory size."),
    ("brother_page_counter", "Total page counter."),
    ("brother_average_coverage", "Average toner coverage in percent."),
    ("brother_drum_unit_percent_life_remaining", "Remaining drum unit life in percent."),
    ("brother_toner_percent_life_remaining", "Remaining toner life in percent."),
    ("brother_page_counter_a4_letter", "Pages printed on A4/Letter paper."),
    ("brother_page_counter_legal_folio", "Pages printed on Legal/Folio paper."),
    ("brother_page_counter_b5_executive", "Pages printed on B5/Executive paper."),
    ("brother_page_counter_envelopes", "Pages printed on envelopes."),
    ("brother_page_counter_a5", "Pages printed on A5 paper."),
    ("brother_others_01", "Pages printed on other paper sizes."),
    ("brother_page_counter_plain_thin_recycled", "Pages printed on plain, thin or recycled media."),
    ("brother_page_counter_thick_thicker_bond", "Pages printed on thick, thicker or bond media."),
    ("brother_page_counter_envelopes_env_thic_env_thin", "Pages printed on envelope media."),
    ("brother_page_counter_label", "Pages printed on label media."),
    ("brother_page_counter_hagaki", "Pages printed on Hagaki media."),
    ("brother_page_counter_total", "Total pages across all media types."),
    ("brother_page_counter_total_two_sided", "Total two-sided pages."),
    ("brother_copies", "Copied pages."),
    ("brother_copies_two_sided", "Two-sided copied pages."),
    ("brother_prints", "Printed pages."),
    ("brother_prints_two_sided", "Two-sided printed pages."),
    ("brother_others_02", "Pages from other jobs."),
    ("brother_others_two_sided", "Two-sided pages from other jobs."),
    ("brother_scan", "Flatbed scans."),
    ("brother_scan_page_counter", "Scanned pages."),
    ("brother_toner_replacements", "Toner replacement count."),
    ("brother_drum_replacements", "Drum replacement count."),
    ("brother_paper_jams", "Total paper jams."),
    ("brother_paper_jam_tray_1", "Paper jams in tray 1."),
    ("brother_paper_jam_inside", "Paper jams inside the device."),
    ("brother_paper_jam_rear", "Paper jams at the rear."),
    ("brother_paper_jam_two_sided", "Paper jams in the duplex unit."),
)

LABEL_START = 0
GAUGE_START = LABEL_START + len(_LABEL_NAMES)
ERROR_CODE_START = GAUGE_START + len(_GAUGES)
ERROR_SLOTS = 10
ERROR_COUNT_START = ERROR_CODE_START + ERROR_SLOTS


def _brother_entries() -> list[SchemaEntry]:
    entries = [
        SchemaEntry(LABEL_START + i, FieldKind.LABEL, name)
        for i, name in enumerate(_LABEL_NAMES)
    ]
    entries += [
        SchemaEntry(GAUGE_START + i, FieldKind.GAUGE, name, doc)
        for i, (name, doc) in enumerate(_GAUGES)
    ]
    entries += [
        SchemaEntry(ERROR_CODE_START + i, FieldKind.ERROR_CODE, f"error_code_{i + 1}")
        for i in range(ERROR_SLOTS)
    ]
    entries += [
        SchemaEntry(ERROR_COUNT_START + i, FieldKind.ERROR_COUNT, f"error_count_{i + 1}")
        for i in range(ERROR_SLOTS)
    ]
    return entries


BROTHER_SCHEMA = SchemaTable(_brother_entries())
