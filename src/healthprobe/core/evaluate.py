"""Threshold evaluation."""

from healthprobe.core.models import ResourceSample, Thresholds, WarningSet


def evaluate(sample: ResourceSample, thresholds: Thresholds) -> WarningSet:
    """Compare sampled usage against configured thresholds.

    A flag is set when the sampled ratio is greater than or equal to its
    threshold.

    Args:
        sample: Sampled usage ratios.
        thresholds: Validated thresholds.

    Returns:
        WarningSet with one flag per resource.
    """
    return WarningSet(
        processor=sample.cpu >= thresholds.cpu,
        storage=sample.disk >= thresholds.disk,
    )
