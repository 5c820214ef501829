"""Host usage sampling built on psutil."""

import asyncio
from collections.abc import Sequence

import psutil

from healthprobe.core.errors import SamplingError
from healthprobe.core.models import ResourceSample
from healthprobe.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SAMPLE_COUNT = 10
DEFAULT_SAMPLE_INTERVAL = 0.5


class PsutilSampler:
    """MetricSamplerPort implementation reading processor and disk usage.

    CPU usage is the mean of ``sample_count`` reads taken ``interval`` seconds
    apart, after one priming read (psutil's first non-blocking read has no
    reference point). Disk usage is the used fraction of the combined
    capacity of all readable volumes.

    Args:
        sample_count: Number of CPU reads to average.
        interval: Delay between CPU reads in seconds.
        mountpoints: Volumes to measure. Defaults to every mounted partition.
    """

    def __init__(
        self,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        interval: float = DEFAULT_SAMPLE_INTERVAL,
        mountpoints: Sequence[str] | None = None,
    ) -> None:
        if sample_count < 1:
            raise ValueError("sample_count must be at least 1")
        self._sample_count = sample_count
        self._interval = interval
        self._mountpoints = list(mountpoints) if mountpoints is not None else None

    async def sample(self) -> ResourceSample:
        """Sample processor and storage usage.

        Raises:
            SamplingError: If psutil cannot read a counter or no volume is readable.
        """
        cpu = await self.sample_cpu()
        disk = self.sample_disk()
        return ResourceSample(cpu=cpu, disk=disk)

    async def sample_cpu(self) -> float:
        """Return the averaged processor utilisation ratio."""
        try:
            psutil.cpu_percent(interval=None)
            total = 0.0
            for _ in range(self._sample_count):
                await asyncio.sleep(self._interval)
                total += psutil.cpu_percent(interval=None)
        except (psutil.Error, OSError) as exc:
            raise SamplingError(f"processor usage unavailable: {exc}") from exc
        return total / self._sample_count / 100

    def _mountpoints_to_read(self) -> list[str]:
        if self._mountpoints is not None:
            return self._mountpoints
        try:
            partitions = psutil.disk_partitions(all=False)
        except (psutil.Error, OSError) as exc:
            raise SamplingError(f"cannot list disk partitions: {exc}") from exc
        seen: set[str] = set()
        mountpoints = []
        for part in partitions:
            if part.device in seen:
                continue
            seen.add(part.device)
            mountpoints.append(part.mountpoint)
        return mountpoints

    def sample_disk(self) -> float:
        """Return the used fraction of all readable volumes."""
        total = 0
        free = 0
        for mountpoint in self._mountpoints_to_read():
            try:
                usage = psutil.disk_usage(mountpoint)
            except OSError as exc:
                # Removable drives without media raise here
                logger.debug(
                    "Skipping unreadable volume %s: %s",
                    mountpoint,
                    exc,
                    extra={"mountpoint": mountpoint},
                )
                continue
            total += usage.total
            free += usage.free
        if total == 0:
            raise SamplingError("no readable storage volume")
        return (total - free) / total
