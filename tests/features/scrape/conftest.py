"""Step definitions for scrape.feature."""

import asyncio
import re
from dataclasses import dataclass, field

import httpx
import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import LABEL_VALUES, StaticFetcher, build_csv, build_row

from brother_exporter.adapters.frameworks.asgi import create_asgi_app
from brother_exporter.core.collector import ScrapeCollector
from brother_exporter.core.schema import BROTHER_SCHEMA, ERROR_SLOTS, GAUGE_START

_LINE = re.compile(r"^(?P<name>[a-zA-Z_:][a-zA-Z0-9_:]*)(?:\{(?P<labels>.*)\})? (?P<value>\S+)$")
_LABEL = re.compile(r'(?P<key>[a-zA-Z_][a-zA-Z0-9_]*)="(?P<value>(?:[^"\\]|\\.)*)"')
_GAUGE_NAMES = {e.name for e in BROTHER_SCHEMA.gauges}


@dataclass
class ExposedSample:
    name: str
    labels: dict[str, str]
    value: float


@dataclass
class ScrapeScenarioContext:
    """State shared between the steps of one scenario."""

    gauges: list[str] = field(default_factory=list)
    codes: list[str] = field(default_factory=list)
    counts: list[str] = field(default_factory=list)
    header_only: bool = False
    samples: list[ExposedSample] = field(default_factory=list)

    def body(self) -> str:
        if self.header_only:
            return build_csv()
        return build_csv(build_row(gauges=self.gauges, codes=self.codes, counts=self.counts))


def _parse_exposition(text: str) -> list[ExposedSample]:
    samples = []
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        match = _LINE.match(line)
        assert match, f"unparseable exposition line: {line!r}"
        labels = {
            m.group("key"): m.group("value")
            for m in _LABEL.finditer(match.group("labels") or "")
        }
        samples.append(ExposedSample(match.group("name"), labels, float(match.group("value"))))
    return samples


async def _scrape(body: str) -> str:
    app = create_asgi_app(ScrapeCollector(StaticFetcher(body)), process_metrics=False)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/metrics")
    assert response.status_code == 200
    return response.text


@pytest.fixture
def ctx() -> ScrapeScenarioContext:
    """Fresh scenario context for each test."""
    return ScrapeScenarioContext()


# === Given ===
@given("a printer serving a snapshot whose gauges equal their column index")
def given_indexed_gauges(ctx: ScrapeScenarioContext) -> None:
    ctx.gauges = [str(GAUGE_START + i) for i in range(len(BROTHER_SCHEMA.gauges))]


@given(
    parsers.parse(
        'the error slots alternate "{first}" with count {first_count:d} '
        'and "{second}" with count {second_count:d}'
    )
)
def given_alternating_errors(
    ctx: ScrapeScenarioContext, first: str, first_count: int, second: str, second_count: int
) -> None:
    pairs = [(first, first_count), (second, second_count)] * (ERROR_SLOTS // 2)
    ctx.codes = [code for code, _ in pairs]
    ctx.counts = [str(count) for _, count in pairs]


@given(parsers.parse('error slot {slot:d} holds "{code}" with count {count:d}'))
def given_error_slot(ctx: ScrapeScenarioContext, slot: int, code: str, count: int) -> None:
    ctx.codes[slot - 1] = code
    ctx.counts[slot - 1] = str(count)


@given(parsers.parse("only error slot {slot:d} is used"))
def given_single_error_slot(ctx: ScrapeScenarioContext, slot: int) -> None:
    ctx.codes = ctx.codes[slot - 1 : slot]
    ctx.counts = ctx.counts[slot - 1 : slot]


@given(parsers.parse('the gauge at column {column:d} holds "{value}"'))
def given_gauge_cell(ctx: ScrapeScenarioContext, column: int, value: str) -> None:
    ctx.gauges[column - GAUGE_START] = value


@given("the printer serves only the CSV header")
def given_header_only(ctx: ScrapeScenarioContext) -> None:
    ctx.header_only = True


# === When ===
@when("/metrics is requested")
def when_metrics_requested(ctx: ScrapeScenarioContext) -> None:
    ctx.samples = _parse_exposition(asyncio.run(_scrape(ctx.body())))


# === Then ===
def _gauges(ctx: ScrapeScenarioContext) -> list[ExposedSample]:
    return [s for s in ctx.samples if s.name in _GAUGE_NAMES]


def _errors(ctx: ScrapeScenarioContext) -> list[ExposedSample]:
    return [s for s in ctx.samples if s.name == BROTHER_SCHEMA.error_metric_name]


@then(parsers.parse("the response has {n:d} gauge lines"))
def then_gauge_line_count(ctx: ScrapeScenarioContext, n: int) -> None:
    assert len(_gauges(ctx)) == n


@then("every gauge line carries the identity labels")
def then_identity_labels(ctx: ScrapeScenarioContext) -> None:
    expected = dict(zip(BROTHER_SCHEMA.label_names, LABEL_VALUES))
    for sample in _gauges(ctx):
        assert sample.labels == expected


@then(parsers.parse('the gauge "{name}" has value {value:g}'))
def then_gauge_value(ctx: ScrapeScenarioContext, name: str, value: float) -> None:
    (sample,) = [s for s in _gauges(ctx) if s.name == name]
    assert sample.value == value


@then(parsers.parse("the response has {n:d} error lines"))
def then_error_line_count(ctx: ScrapeScenarioContext, n: int) -> None:
    assert len(_errors(ctx)) == n


# parsers.re so that the empty code "" matches
@then(
    parsers.re(r'the error "(?P<code>[^"]*)" has count (?P<count>[0-9.]+)'),
    converters={"count": float},
)
def then_error_count(ctx: ScrapeScenarioContext, code: str, count: float) -> None:
    matching = [s for s in _errors(ctx) if s.labels["error_message"] == code]
    assert len(matching) == 1
    assert matching[0].value == count
    assert matching[0].labels["nodeName"] == LABEL_VALUES[0]


@then(parsers.parse("the scrape success indicator is {value:d}"))
def then_scrape_success(ctx: ScrapeScenarioContext, value: int) -> None:
    (sample,) = [s for s in ctx.samples if s.name == "brother_scrape_success"]
    assert sample.value == value
