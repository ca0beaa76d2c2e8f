"""BDD step definitions for registry reporting features."""

import time
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from carbonpy.adapters.registry.in_memory import InMemoryMetricRegistry
from carbonpy.adapters.senders.in_memory import InMemoryGraphiteSender
from carbonpy.core.attributes import MetricAttribute
from carbonpy.core.config import ReporterConfig
from carbonpy.core.models import Counter, Gauge, Meter, Snapshot, Timer
from carbonpy.core.reporter import GraphiteReporter
from carbonpy.core.units import TimeUnit


@dataclass
class ReportingScenarioContext:
    """Shared state between steps in a reporting scenario."""

    sender: InMemoryGraphiteSender = field(default_factory=InMemoryGraphiteSender)
    registry: InMemoryMetricRegistry = field(default_factory=InMemoryMetricRegistry)
    prefix: str = ""
    disabled: set[MetricAttribute] = field(default_factory=set)
    duration_unit: TimeUnit = TimeUnit.MILLISECONDS
    rate_unit: TimeUnit = TimeUnit.SECONDS
    sent: int | None = None
    exception_raised: Exception | None = None

    def build_reporter(self) -> GraphiteReporter:
        return GraphiteReporter(
            self.sender,
            ReporterConfig(
                prefix=self.prefix,
                disabled_attributes=frozenset(self.disabled),
                duration_unit=self.duration_unit,
                rate_unit=self.rate_unit,
            ),
        )


@pytest.fixture
def ctx() -> ReportingScenarioContext:
    """Fresh scenario context for each test."""
    return ReportingScenarioContext()


# === Background Steps ===
@given("a recording Graphite sender")
def step_recording_sender(ctx: ReportingScenarioContext) -> None:
    ctx.sender = InMemoryGraphiteSender()


@given(parsers.parse('the prefix "{prefix}"'))
def step_prefix(ctx: ReportingScenarioContext, prefix: str) -> None:
    ctx.prefix = prefix


# === Configuration Steps ===
@given(parsers.parse('the attribute "{code}" is disabled'))
def step_disable_attribute(ctx: ReportingScenarioContext, code: str) -> None:
    ctx.disabled.add(MetricAttribute.from_code(code))


@given(
    parsers.parse(
        'durations are reported in "{duration_unit}" and rates per "{rate_unit}"'
    )
)
def step_units(
    ctx: ReportingScenarioContext, duration_unit: str, rate_unit: str
) -> None:
    ctx.duration_unit = TimeUnit.parse(duration_unit)
    ctx.rate_unit = TimeUnit.parse(rate_unit)


@given("the Graphite sender refuses connections")
def step_refusing_sender(
    ctx: ReportingScenarioContext, failing_sender
) -> None:
    ctx.sender = failing_sender(connect_error=ConnectionRefusedError("refused"))


@given(parsers.parse("the Graphite sender fails after {n:d} sample"))
def step_sender_fails_after(
    ctx: ReportingScenarioContext, failing_sender, n: int
) -> None:
    ctx.sender = failing_sender(send_error=BrokenPipeError("gone"), fail_after=n)


# === Measurement Steps ===
@given(parsers.parse('a counter "{metric}" with count {count:d}'))
def step_counter(ctx: ReportingScenarioContext, metric: str, count: int) -> None:
    ctx.registry.register(metric, Counter(count))


@given(parsers.parse('a gauge "{metric}" holding true'))
def step_gauge_true(ctx: ReportingScenarioContext, metric: str) -> None:
    ctx.registry.register(metric, Gauge(True))


@given(parsers.parse('a gauge "{metric}" holding the text "{text}"'))
def step_gauge_text(ctx: ReportingScenarioContext, metric: str, text: str) -> None:
    ctx.registry.register(metric, Gauge(text))


@given(
    parsers.parse(
        'a timer "{metric}" with mean duration {mean:d} ns '
        "and mean rate {rate:g} per second"
    )
)
def step_timer(
    ctx: ReportingScenarioContext, metric: str, mean: int, rate: float
) -> None:
    ctx.registry.register(
        metric,
        Timer(count=10, mean_rate=rate, snapshot=Snapshot(mean=mean, stddev=1_000)),
    )


@given(
    parsers.parse(
        'a meter "{metric}" with count {count:d} and mean rate {rate:g} per second'
    )
)
def step_meter(
    ctx: ReportingScenarioContext, metric: str, count: int, rate: float
) -> None:
    ctx.registry.register(metric, Meter(count, mean_rate=rate))


# === Action Steps ===
@when(parsers.parse('the "{scope}" registry is reported at {timestamp:d}'))
def when_registry_reported(
    ctx: ReportingScenarioContext,
    monkeypatch: pytest.MonkeyPatch,
    scope: str,
    timestamp: int,
) -> None:
    monkeypatch.setattr(time, "time", lambda: float(timestamp))
    reporter = ctx.build_reporter()
    try:
        ctx.sent = reporter.report_registry(scope, ctx.registry)
    except Exception as e:
        ctx.exception_raised = e


# === Assertion Steps ===
@then(parsers.parse('the sender receives the line "{line}"'))
def then_line_received(ctx: ReportingScenarioContext, line: str) -> None:
    assert line + "\n" in [s.to_line() for s in ctx.sender.samples]


@then(parsers.re(r"(?P<n>\d+) samples? (is|are) sent"), converters={"n": int})
def then_samples_sent(ctx: ReportingScenarioContext, n: int) -> None:
    assert ctx.sent == n
    assert len(ctx.sender.samples) == n


@then("send is never called")
def then_send_never_called(ctx: ReportingScenarioContext) -> None:
    assert "send" not in ctx.sender.calls


@then(parsers.parse('the sample "{key}" has value "{value}"'))
def then_sample_value(ctx: ReportingScenarioContext, key: str, value: str) -> None:
    values = {s.key: s.value for s in ctx.sender.samples}
    assert values.get(key) == value, f"{key}: {values.get(key)!r} != {value!r}"


@then(parsers.parse('no sample key ends with "{suffix}"'))
def then_no_key_suffix(ctx: ReportingScenarioContext, suffix: str) -> None:
    assert not [s.key for s in ctx.sender.samples if s.key.endswith(suffix)]


@then(parsers.parse('exactly {n:d} sample key ends with "{suffix}"'))
def then_keys_with_suffix(ctx: ReportingScenarioContext, n: int, suffix: str) -> None:
    assert len([s for s in ctx.sender.samples if s.key.endswith(suffix)]) == n


@then(parsers.parse("{method} is called {n:d} time"))
def then_method_called(ctx: ReportingScenarioContext, method: str, n: int) -> None:
    assert ctx.sender.calls.count(method) == n


@then("the report completes without raising")
def then_no_exception(ctx: ReportingScenarioContext) -> None:
    assert ctx.exception_raised is None
