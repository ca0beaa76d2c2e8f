"""Reporting of metric registries to Graphite.

A report cycle connects the sender, sends every field of every
measurement of one registry, then flushes and closes the sender. Cycles
never raise: I/O failures end the cycle early and are logged, so the
caller only ever sees fewer samples delivered.
"""

import threading
import time
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from carbonpy.core.config import ReporterConfig
from carbonpy.core.expansion import (
    Field,
    expand_counter,
    expand_gauge,
    expand_histogram,
    expand_meter,
    expand_timer,
)
from carbonpy.core.logs import get_logger
from carbonpy.core.models import (
    Counter,
    Gauge,
    GraphiteSample,
    Histogram,
    Meter,
    RegistryScope,
    RegistrySnapshot,
    Timer,
    metric_name,
)
from carbonpy.core.ports import GraphiteSenderPort, MetricRegistryPort

logger = get_logger(__name__)

Expander = Callable[[Any, ReporterConfig], list[Field]]


def _scope_name(scope: RegistryScope | str) -> str:
    return scope.value if isinstance(scope, RegistryScope) else scope


class GraphiteReporter:
    """Reports registries to a Graphite sender.

    Example:
        ```python
        from carbonpy import GraphiteReporter, GraphiteTCPSender, ReporterConfig

        sender = GraphiteTCPSender("graphite.local", 2003)
        reporter = GraphiteReporter(sender, ReporterConfig(prefix="app"))
        reporter.report_registry("base", registry)
        ```
    """

    def __init__(
        self,
        sender: GraphiteSenderPort,
        config: ReporterConfig | None = None,
    ) -> None:
        """Initialize the reporter.

        Args:
            sender: Connection the samples are written to. The reporter
                opens and closes it once per cycle.
            config: Reporter settings. Defaults to ReporterConfig().
        """
        self._sender = sender
        self._config = config or ReporterConfig()
        # One cycle at a time per reporter: a cycle owns the connection
        self._lock = threading.Lock()
        logger.debug(
            "Graphite reporter configured: prefix=%r, rates per %s, "
            "durations in %s, disabled=%s",
            self._config.prefix,
            self._config.rate_unit_label,
            self._config.duration_unit_label,
            sorted(a.code for a in self._config.disabled_attributes),
        )

    @property
    def config(self) -> ReporterConfig:
        """The reporter's immutable configuration."""
        return self._config

    def report(
        self, registries: Mapping[RegistryScope | str, MetricRegistryPort]
    ) -> int:
        """Report several registries, one cycle per scope.

        Returns:
            Total number of samples sent across all cycles.
        """
        return sum(
            self.report_registry(scope, registry)
            for scope, registry in registries.items()
        )

    def report_registry(
        self, scope: RegistryScope | str, registry: MetricRegistryPort
    ) -> int:
        """Report every measurement of one registry accepted by the filter.

        Args:
            scope: Registry scope, used as the second key component.
            registry: Source of the measurements.

        Returns:
            Number of samples sent. Zero when the registry or the metric
            filter raises; the error is logged and nothing is sent.
        """
        scope_name = _scope_name(scope)
        logger.debug("Report '%s' registry", scope_name)
        metric_filter = self._config.metric_filter
        try:
            snapshot = RegistrySnapshot(
                registry.get_gauges(metric_filter),
                registry.get_counters(metric_filter),
                registry.get_histograms(metric_filter),
                registry.get_meters(metric_filter),
                registry.get_timers(metric_filter),
            )
        except Exception:
            logger.exception(
                "Unable to read '%s' registry, skipping report", scope_name
            )
            return 0
        return self.report_snapshot(scope, snapshot)

    def report_snapshot(
        self, scope: RegistryScope | str, snapshot: RegistrySnapshot
    ) -> int:
        """Report a registry snapshot as-is (no metric filter applied)."""
        return self.report_metrics(
            scope,
            snapshot.gauges,
            snapshot.counters,
            snapshot.histograms,
            snapshot.meters,
            snapshot.timers,
        )

    def report_metrics(
        self,
        scope: RegistryScope | str,
        gauges: Mapping[str, Gauge],
        counters: Mapping[str, Counter],
        histograms: Mapping[str, Histogram],
        meters: Mapping[str, Meter],
        timers: Mapping[str, Timer],
    ) -> int:
        """Run one report cycle.

        Collections are sent in the order gauges, counters, histograms,
        meters, timers; entries within each collection in name order.
        The sender is always flushed and closed afterwards.

        Returns:
            Number of samples sent before the cycle ended.
        """
        scope_name = _scope_name(scope)
        snapshot = RegistrySnapshot(gauges, counters, histograms, meters, timers)
        with self._lock:
            timestamp = int(time.time())
            sent = 0
            try:
                self._sender.connect()
            except OSError:
                logger.warning(
                    "Unable to connect to Graphite, skipping '%s' registry",
                    scope_name,
                    exc_info=True,
                )
            except Exception:
                logger.exception(
                    "Unexpected error connecting to Graphite for '%s' registry",
                    scope_name,
                )
            else:
                sent = self._send_all(scope_name, snapshot, timestamp)
            finally:
                self._cleanup()
            self._log_failures()
            return sent

    def _send_all(
        self, scope_name: str, snapshot: RegistrySnapshot, timestamp: int
    ) -> int:
        sent = 0
        try:
            samples = iter_samples(scope_name, snapshot, self._config, timestamp)
            for sample in samples:
                self._sender.send(sample.key, sample.value, sample.timestamp)
                sent += 1
        except OSError:
            logger.warning(
                "Unable to report to Graphite, '%s' registry cut short after "
                "%d samples",
                scope_name,
                sent,
                exc_info=True,
            )
        except Exception:
            logger.exception(
                "Unexpected error reporting '%s' registry to Graphite", scope_name
            )
        return sent

    def _cleanup(self) -> None:
        try:
            self._sender.flush()
        except Exception:
            logger.warning("Error flushing Graphite", exc_info=True)
        try:
            self._sender.close()
        except Exception:
            logger.warning("Error closing Graphite", exc_info=True)

    def _log_failures(self) -> None:
        failures = self._sender.failures
        if failures > 0:
            logger.warning("Graphite sender has %d failed deliveries", failures)


def iter_samples(
    scope: RegistryScope | str,
    snapshot: RegistrySnapshot,
    config: ReporterConfig,
    timestamp: int,
) -> Iterator[GraphiteSample]:
    """Yield the samples of one registry in reporting order.

    Samples are produced lazily, so a consumer that stops early never
    formats the remaining measurements.

    Args:
        scope: Registry scope, used as the second key component.
        snapshot: The registry's measurements.
        config: Prefix, disabled attributes and units to apply.
        timestamp: Unix seconds stamped on every sample.
    """
    scope_name = _scope_name(scope)
    kinds: tuple[tuple[str, Mapping[str, Any], Expander], ...] = (
        ("gauge", snapshot.gauges, expand_gauge),
        ("counter", snapshot.counters, expand_counter),
        ("histogram", snapshot.histograms, expand_histogram),
        ("meter", snapshot.meters, expand_meter),
        ("timer", snapshot.timers, expand_timer),
    )
    for kind, collection, expander in kinds:
        for name in sorted(collection):
            key = metric_name(config.prefix, scope_name, name)
            logger.debug("report %s: %s", kind, key)
            for field in expander(collection[name], config):
                yield GraphiteSample(
                    key=metric_name(key, field.suffix),
                    value=field.value,
                    timestamp=timestamp,
                )
