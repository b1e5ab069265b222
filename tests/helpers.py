"""Builders for synthetic device snapshots and fake fetchers."""

import csv
import io
from collections.abc import Sequence

from brother_exporter.core.exceptions import ScrapeError
from brother_exporter.core.schema import (
    ERROR_CODE_START,
    ERROR_COUNT_START,
    ERROR_SLOTS,
    GAUGE_START,
)

LABEL_VALUES = (
    "BRN001",
    "Brother HL-L2350DW",
    "Office 2",
    "it@example.com",
    "10.0.0.3",
    "E78234K1N123456",
    "1.22",
    "1.05",
)

GAUGE_COUNT = ERROR_CODE_START - GAUGE_START
ROW_LENGTH = ERROR_COUNT_START + ERROR_SLOTS
TARGET_URL = "http://printer.test/etc/mnt_info.csv"


def build_row(
    labels: Sequence[str] = LABEL_VALUES,
    gauges: Sequence[str] | None = None,
    codes: Sequence[str] = (),
    counts: Sequence[str] = (),
) -> list[str]:
    """Build a 61-column data row.

    Gauge cells default to their own column index. Error codes and counts
    are padded with empty cells.
    """
    if gauges is None:
        gauges = [str(GAUGE_START + i) for i in range(GAUGE_COUNT)]
    code_cells = list(codes) + [""] * (ERROR_SLOTS - len(codes))
    count_cells = list(counts) + [""] * (ERROR_SLOTS - len(counts))
    return [*labels, *gauges, *code_cells, *count_cells]


def build_csv(*rows: Sequence[str], header: bool = True) -> str:
    """Render rows as a CSV body, preceded by a header row by default.

    The header is as wide as the first row, or the full schema width when
    there are no rows.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    if header:
        width = len(rows[0]) if rows else ROW_LENGTH
        writer.writerow([f"col{i}" for i in range(width)])
    writer.writerows(rows)
    return buffer.getvalue()


class StaticFetcher:
    """Fetcher that returns a fixed body, or raises a fixed error."""

    def __init__(self, body: str = "", error: ScrapeError | None = None) -> None:
        self.body = body
        self.error = error
        self.calls = 0

    @property
    def url(self) -> str:
        return TARGET_URL

    async def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.body
