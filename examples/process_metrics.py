"""Report process statistics to Graphite every few seconds.

Run with:
    python examples/process_metrics.py --host graphite.local --interval 10

Metrics (under the "vendor" scope, prefixed with "example"):
    process.cpu_percent        - gauge
    process.memory_rss_bytes   - gauge
    process.threads            - gauge
    process.ctx_switches       - counter
    report.duration            - timer (how long each report cycle took)
"""

import argparse
import asyncio
import logging
import time

import psutil

from carbonpy import (
    Counter,
    Gauge,
    GraphiteReporter,
    GraphiteTCPSender,
    InMemoryMetricRegistry,
    RegistryScope,
    ReporterConfig,
    Snapshot,
    Timer,
    get_logger,
)

logger = get_logger(__name__)


def collect_process_metrics(
    process: psutil.Process, registry: InMemoryMetricRegistry
) -> None:
    """Store the current process statistics in the registry."""
    with process.oneshot():
        registry.register("process.cpu_percent", Gauge(process.cpu_percent()))
        registry.register("process.memory_rss_bytes", Gauge(process.memory_info().rss))
        registry.register("process.threads", Gauge(process.num_threads()))
        switches = process.num_ctx_switches()
        registry.register(
            "process.ctx_switches", Counter(switches.voluntary + switches.involuntary)
        )


async def report_forever(
    reporter: GraphiteReporter, registry: InMemoryMetricRegistry, interval: float
) -> None:
    """Collect and report on a fixed interval until cancelled."""
    process = psutil.Process()
    started = time.monotonic()
    cycles = 0
    last_duration_ns = 0
    while True:
        collect_process_metrics(process, registry)
        cycles += 1
        registry.register(
            "report.duration",
            Timer(
                count=cycles,
                mean_rate=cycles / max(time.monotonic() - started, 1.0),
                snapshot=Snapshot(
                    max=last_duration_ns, mean=last_duration_ns, min=last_duration_ns
                ),
            ),
        )
        start = time.perf_counter_ns()
        # The reporter blocks on socket I/O, keep it off the event loop
        sent = await asyncio.to_thread(
            reporter.report_registry, RegistryScope.VENDOR, registry
        )
        last_duration_ns = time.perf_counter_ns() - start
        logger.info("Reported %d samples", sent)
        await asyncio.sleep(interval)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=2003)
    parser.add_argument("--interval", type=float, default=10.0)
    parser.add_argument("--prefix", default="example")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    reporter = GraphiteReporter(
        GraphiteTCPSender(args.host, args.port),
        ReporterConfig.from_mapping(
            {"prefix": args.prefix, "disabled_attributes": "p98, p999"}
        ),
    )
    try:
        asyncio.run(report_forever(reporter, InMemoryMetricRegistry(), args.interval))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
