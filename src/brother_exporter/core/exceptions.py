"""Exception hierarchy for scrape failures and invalid setup.

Every failure that can abort a single scrape derives from ``ScrapeError``
and carries a short ``kind`` used in log lines and by callers that need
to tell transport, protocol, format and shape problems apart.
"""


class ScrapeError(Exception):
    """Base class for failures that abort one scrape."""

    kind = "scrape"

    def describe(self) -> str:
        """Return ``"<kind>: <detail>"`` for log and status output."""
        return f"{self.kind}: {self}"


class TransportError(ScrapeError):
    """The device could not be reached (DNS, connect, read errors)."""

    kind = "transport"


class FetchTimeoutError(TransportError):
    """The fetch did not complete before its deadline."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"request to {url} timed out after {timeout:g}s")
        self.url = url
        self.timeout = timeout


class ProtocolError(ScrapeError):
    """The device answered with a status other than 200 OK."""

    kind = "protocol"

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"did not get a 200 OK from {url}: {status_code}")
        self.url = url
        self.status_code = status_code


class FormatError(ScrapeError):
    """The snapshot body is not a usable CSV record set."""

    kind = "format"


class CsvParseError(FormatError):
    """The CSV body could not be decoded."""


class NoDataError(FormatError):
    """The record set has no data row after the header."""

    def __init__(self, row_count: int) -> None:
        super().__init__(
            f"no printer rows found. found {row_count} rows in total"
        )
        self.row_count = row_count


class RowShapeError(ScrapeError, IndexError):
    """The data row is shorter than the schema requires."""

    kind = "shape"

    def __init__(self, required: int, actual: int) -> None:
        super().__init__(
            f"data row has {actual} columns, schema requires at least {required}"
        )
        self.required = required
        self.actual = actual


class SchemaError(ValueError):
    """A schema table violates its structural invariants."""


class ConfigError(ValueError):
    """Exporter configuration is missing or invalid."""
