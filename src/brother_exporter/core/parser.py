"""CSV decoding and numeric coercion for device snapshots."""

import csv
import io
import math
from collections.abc import Iterable, Sequence

from brother_exporter.core.exceptions import CsvParseError, NoDataError, RowShapeError
from brother_exporter.core.models import ParsedRow
from brother_exporter.core.schema import SchemaTable

# The header is record 0; the device writes a single data row after it.
DATA_ROW_INDEX = 1


def _find_bare_quote(text: str) -> int | None:
    """Return the line of the first quote inside an unquoted field, if any.

    The csv module keeps such quotes as literal characters, while the
    device format only allows quotes around a whole field.
    """
    line = 1
    in_quotes = False
    field_start = True
    chars = iter(text)
    for ch in chars:
        if in_quotes:
            if ch == '"':
                following = next(chars, "")
                if following != '"':
                    in_quotes = False
                    ch = following
        elif ch == '"':
            if not field_start:
                return line
            in_quotes = True
        if ch == "\n":
            line += 1
        field_start = not in_quotes and ch in ",\r\n"
    return None


def decode_records(text: str) -> list[list[str]]:
    """Decode a CSV body into records.

    Blank lines are skipped. Quoting errors raise instead of being silently
    repaired, including a quote inside an unquoted field. Every record must
    have as many fields as the first one.

    Args:
        text: The raw response body.

    Returns:
        List of records, each a list of cell strings.

    Raises:
        CsvParseError: If the body is not valid CSV.
    """
    bare_quote_line = _find_bare_quote(text)
    if bare_quote_line is not None:
        raise CsvParseError(f'line {bare_quote_line}: bare " in non-quoted field')

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    records: list[list[str]] = []
    try:
        for record in reader:
            if not record:
                continue
            if records and len(record) != len(records[0]):
                raise CsvParseError(
                    f"line {reader.line_num}: wrong number of fields, "
                    f"expected {len(records[0])}, got {len(record)}"
                )
            records.append(record)
    except csv.Error as e:
        raise CsvParseError(f"line {reader.line_num}: {e}") from e
    return records


def select_data_row(records: Sequence[Sequence[str]]) -> list[str]:
    """Return the data row that follows the header.

    Raises:
        NoDataError: If there are fewer than two records.
    """
    if len(records) <= DATA_ROW_INDEX:
        raise NoDataError(len(records))
    return list(records[DATA_ROW_INDEX])


def coerce_cell(cell: str) -> float:
    """Parse a cell as a float, defaulting to 0.0 when it is not numeric.

    Only plain ASCII number syntax counts. A cell with digit separators or
    surrounding whitespace reads as 0.0, as does a value that overflows.
    ``inf`` and ``nan`` spelled out are kept.
    """
    if not cell.isascii() or "_" in cell or cell != cell.strip():
        return 0.0
    try:
        value = float(cell)
    except ValueError:
        return 0.0
    if math.isinf(value) and "inf" not in cell.lower():
        return 0.0
    return value


def coerce_row(cells: Iterable[str]) -> tuple[float, ...]:
    """Coerce every cell of a row; see :func:`coerce_cell`."""
    return tuple(coerce_cell(cell) for cell in cells)


def parse_snapshot(text: str, schema: SchemaTable) -> ParsedRow:
    """Decode a snapshot body and return its data row in raw and typed form.

    Args:
        text: The raw CSV body fetched from the device.
        schema: Column layout the row must cover.

    Returns:
        ParsedRow with the raw cells and their float coercions.

    Raises:
        CsvParseError: If the body is not valid CSV.
        NoDataError: If there is no data row after the header.
        RowShapeError: If the data row is shorter than the schema.
    """
    row = select_data_row(decode_records(text))
    if len(row) < schema.min_row_length:
        raise RowShapeError(schema.min_row_length, len(row))
    return ParsedRow(raw=tuple(row), typed=coerce_row(row))
