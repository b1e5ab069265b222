"""Runtime samples describing the exporter process itself."""

import psutil

from brother_exporter.core.logs import get_logger
from brother_exporter.core.models import MetricSample

logger = get_logger(__name__)


def collect_process_samples(process: psutil.Process | None = None) -> list[MetricSample]:
    """Collect memory, CPU and file descriptor samples for a process.

    Args:
        process: Process to inspect; defaults to the current process.

    Returns:
        List of MetricSample objects named ``process_*``. Samples whose
        source is unavailable on this platform are left out.
    """
    proc = process or psutil.Process()
    samples: list[MetricSample] = []

    with proc.oneshot():
        mem = proc.memory_info()
        samples.append(
            MetricSample(
                name="process_resident_memory_bytes",
                value=float(mem.rss),
                documentation="Resident memory size in bytes.",
            )
        )
        samples.append(
            MetricSample(
                name="process_virtual_memory_bytes",
                value=float(mem.vms),
                documentation="Virtual memory size in bytes.",
            )
        )

        cpu = proc.cpu_times()
        samples.append(
            MetricSample(
                name="process_cpu_seconds_total",
                value=cpu.user + cpu.system,
                documentation="Total user and system CPU time spent in seconds.",
                metric_type="counter",
            )
        )

        samples.append(
            MetricSample(
                name="process_start_time_seconds",
                value=proc.create_time(),
                documentation="Start time of the process since unix epoch in seconds.",
            )
        )

        # num_fds() only exists on POSIX platforms
        num_fds = getattr(proc, "num_fds", None)
        if num_fds is not None:
            try:
                samples.append(
                    MetricSample(
                        name="process_open_fds",
                        value=float(num_fds()),
                        documentation="Number of open file descriptors.",
                    )
                )
            except psutil.AccessDenied as e:
                logger.debug("open file descriptor count unavailable", extra={"error": str(e)})

    return samples
