"""Sampler adapters implementing MetricSamplerPort."""

from healthprobe.adapters.sampling.psutil_sampler import PsutilSampler

__all__ = ["PsutilSampler"]
