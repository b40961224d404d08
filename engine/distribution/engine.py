"""
Bucket distribution engine: per-bucket statistics and per-bucket frequency distributions over a shared set of value bins. Covers both the 7-bucket weekday view and the 24-bucket hourly view.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from engine.distribution.binning import (
    Bin,
    adaptive_bin_size,
    count_frequencies,
    create_bins,
    normalize_frequencies,
    uniform_bin_size,
)
from engine.distribution.buckets import BucketIndexFn, bucket_labels, compute_bucket_stats, index_function
from engine.enums import BucketKind
from engine.exceptions import StrategyConfigurationError
from engine.series import SampleSource, TimeRange, filter_and_order
from engine.units import unit_resolver

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketDistributionResult:
    kind: BucketKind
    labels: Tuple[str, ...]
    mins: Tuple[float, ...]
    maxs: Tuple[float, ...]
    ranges: Tuple[float, ...]
    counts: Tuple[int, ...]
    bucket_values: Dict[int, Tuple[float, ...]]
    global_min: float
    global_max: float
    bins: Tuple[Bin, ...]
    bin_size: float
    frequencies_per_bucket: Dict[int, Dict[int, int]]
    normalized_frequencies_per_bucket: Dict[int, Dict[int, float]]
    unit: Optional[str] = None

    @property
    def bucket_count(self) -> int:
        return len(self.counts)

    @property
    def has_bins(self) -> bool:
        return bool(self.bins)


def compute_distribution(
    series: SampleSource,
    time_range: TimeRange,
    kind: BucketKind,
    interval_count: Optional[int] = None,
    index_fn: Optional[BucketIndexFn] = None,
) -> Optional[BucketDistributionResult]:
    """Bucket statistics and frequency distributions for ``series``.

    Returns ``None`` for an inverted range or when no sample falls inside it.
    When every value is equal, or the value range overflows a float, there is
    nothing to bin; statistics are still returned with empty bins and
    frequencies. With ``interval_count`` the value range is split into that
    many equal bins, otherwise the bin size is chosen adaptively.
    """
    kind = BucketKind(kind)
    if not time_range.is_valid:
        return None
    samples = filter_and_order(series, time_range)
    if not samples:
        log.debug("%s distribution: no samples in range", kind.value)
        return None

    bucket_count = kind.bucket_count()
    stats = compute_bucket_stats(samples, bucket_count, index_fn or index_function(kind))
    gmin, gmax = stats.global_min, stats.global_max

    bins: Tuple[Bin, ...] = ()
    bin_size = 0.0
    if gmax > gmin and not math.isfinite(gmax - gmin):
        log.debug("%s distribution: value range [%g, %g] overflows, binning skipped", kind.value, gmin, gmax)
    elif gmax > gmin:
        if interval_count is not None:
            bin_size, count = uniform_bin_size(gmin, gmax, interval_count)
        else:
            bin_size, count = adaptive_bin_size(gmin, gmax)
        bins = tuple(create_bins(gmin, gmax, bin_size, count))
        log.debug("%s distribution: %d bins of %.6g over [%g, %g]", kind.value, count, bin_size, gmin, gmax)

    frequencies = count_frequencies(stats.bucket_values, bins)
    return BucketDistributionResult(
        kind=kind,
        labels=tuple(bucket_labels(kind)),
        mins=stats.mins,
        maxs=stats.maxs,
        ranges=stats.ranges,
        counts=stats.counts,
        bucket_values=stats.bucket_values,
        global_min=gmin,
        global_max=gmax,
        bins=bins,
        bin_size=bin_size,
        frequencies_per_bucket=frequencies,
        normalized_frequencies_per_bucket=normalize_frequencies(frequencies),
        unit=unit_resolver.resolve(samples, series),
    )


class BucketDistributionStrategy:
    """Factory-facing wrapper exposing the distribution through ``compute()``."""

    def __init__(
        self,
        series: SampleSource,
        time_range: TimeRange,
        kind: BucketKind,
        interval_count: Optional[int] = None,
        label: Optional[str] = None,
    ) -> None:
        if series is None:
            raise StrategyConfigurationError("series is required")
        if time_range is None:
            raise StrategyConfigurationError("time_range is required")
        if kind is None:
            raise StrategyConfigurationError("bucket kind is required")
        self.series = series
        self.time_range = time_range
        self.kind = BucketKind(kind)
        self.interval_count = interval_count
        self.label = label

    @property
    def primary_label(self) -> Optional[str]:
        return self.label

    def compute(self) -> Optional[BucketDistributionResult]:
        return compute_distribution(self.series, self.time_range, self.kind, self.interval_count)
