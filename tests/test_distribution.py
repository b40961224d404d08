"""
Test cases for the weekday/hourly bucket distribution engine and its shading contract.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
from datetime import datetime, timedelta

import numpy as np
import pytest

from engine.distribution import (
    BucketDistributionStrategy,
    adaptive_bin_size,
    compute_distribution,
    create_bins,
    intensity,
    nice_step,
    normalize_frequencies,
    shading_cells,
)
from engine.distribution.binning import find_bin_indices, uniform_bin_size
from engine.enums import BucketKind
from engine.exceptions import StrategyConfigurationError
from engine.series import MetricSeries, Sample, TimeRange

T = datetime(2026, 3, 2)  # Monday
WEEK = TimeRange(T, T + timedelta(days=7))


def _weekly_series():
    return MetricSeries((
        Sample(T, 0.0, "ms"),
        Sample(T + timedelta(hours=1), 5.0, "ms"),
        Sample(T + timedelta(hours=2), 10.0, "ms"),
        Sample(T + timedelta(days=1), 10.0, "ms"),
    ))


@pytest.mark.parametrize("raw,expected", [
    (0.3, 0.5),
    (1.0, 1.0),
    (1.5, 2.0),
    (7.0, 10.0),
    (66.7, 100.0),
    (0.0, 1.0),
])
def test_nice_step(raw, expected):
    assert nice_step(raw) == pytest.approx(expected)


def test_adaptive_bin_size_targets_nice_steps():
    size, count = adaptive_bin_size(0.0, 100.0)
    assert (size, count) == (10.0, 10)


def test_adaptive_bin_size_clamps_bin_count():
    size, count = adaptive_bin_size(0.0, 10.0, target_bins=2, min_bins=5, max_bins=50)
    assert (size, count) == (2.0, 5)
    size, count = adaptive_bin_size(0.0, 100.0, target_bins=100, min_bins=5, max_bins=50)
    assert (size, count) == (2.0, 50)


def test_uniform_bin_size_clamps_interval_count():
    assert uniform_bin_size(0.0, 60.0, 100) == (2.0, 30)
    assert uniform_bin_size(0.0, 60.0, 0) == (60.0, 1)


def test_bins_are_contiguous_and_end_at_global_max():
    bins = create_bins(1.0, 8.3, 2.0, 4)
    assert bins[0][0] == 1.0
    assert bins[-1][1] == 8.3
    for (_, upper), (lower, _) in zip(bins, bins[1:]):
        assert upper == lower


def test_find_bin_indices_half_open_with_closed_last_bin():
    bins = create_bins(0.0, 10.0, 2.5, 4)
    idx = find_bin_indices([0.0, 2.5, 9.99, 10.0, -1.0, 11.0, float("nan")], bins)
    assert idx.tolist() == [0, 1, 3, 3, -1, -1, -1]


def test_normalize_frequencies_per_bucket():
    out = normalize_frequencies({0: {0: 2, 1: 4}, 1: {0: 1, 1: 0}, 2: {0: 0, 1: 0}})
    assert out == {0: {0: 0.5, 1: 1.0}, 1: {0: 1.0, 1: 0.0}, 2: {0: 0.0, 1: 0.0}}


def test_weekly_distribution_statistics():
    result = compute_distribution(_weekly_series(), WEEK, BucketKind.weekday, interval_count=2)
    assert result.bucket_count == 7
    assert result.labels[0] == "Mon" and result.labels[6] == "Sun"
    assert result.counts == (3, 1, 0, 0, 0, 0, 0)
    assert result.mins[0] == 0.0 and result.maxs[0] == 10.0 and result.ranges[0] == 10.0
    assert result.ranges[1] == 0.0
    assert math.isnan(result.mins[2]) and math.isnan(result.ranges[2])
    assert (result.global_min, result.global_max) == (0.0, 10.0)
    assert result.unit == "ms"


def test_weekly_distribution_frequencies():
    result = compute_distribution(_weekly_series(), WEEK, BucketKind.weekday, interval_count=2)
    assert result.bins == ((0.0, 5.0), (5.0, 10.0))
    assert result.bin_size == 5.0
    assert result.frequencies_per_bucket[0] == {0: 1, 1: 2}
    assert result.frequencies_per_bucket[1] == {0: 0, 1: 1}
    assert result.normalized_frequencies_per_bucket[0] == {0: 0.5, 1: 1.0}
    assert result.normalized_frequencies_per_bucket[3] == {0: 0.0, 1: 0.0}


def test_hourly_distribution_buckets_by_hour():
    series = [
        Sample(T, 1.0),
        Sample(T + timedelta(minutes=30), 2.0),
        Sample(T + timedelta(hours=13), 3.0),
        Sample(T + timedelta(days=1, hours=13), 4.0),
    ]
    result = compute_distribution(series, WEEK, "hour")
    assert result.kind is BucketKind.hour
    assert result.bucket_count == 24
    assert result.counts[0] == 2 and result.counts[13] == 2
    assert result.labels[0] == "12AM" and result.labels[13] == "1PM"


def test_every_value_lands_in_exactly_one_bin():
    rng = np.random.default_rng(7)
    series = [
        Sample(T + timedelta(minutes=37 * i), float(v))
        for i, v in enumerate(rng.normal(50.0, 12.0, 400))
    ]
    result = compute_distribution(series, WEEK, BucketKind.hour)
    assert result.has_bins
    for bucket, freqs in result.frequencies_per_bucket.items():
        assert sum(freqs.values()) == result.counts[bucket]
    for bucket, normalized in result.normalized_frequencies_per_bucket.items():
        if result.counts[bucket]:
            assert max(normalized.values()) == 1.0
        assert all(0.0 <= v <= 1.0 for v in normalized.values())


def test_degenerate_value_range_has_no_bins():
    series = [Sample(T + timedelta(hours=h), 5.0) for h in range(5)]
    result = compute_distribution(series, WEEK, BucketKind.weekday)
    assert result.bins == ()
    assert result.bin_size == 0.0
    assert result.counts[0] == 5
    assert result.frequencies_per_bucket[0] == {}
    assert shading_cells(result) == []


def test_no_data_or_invalid_range_gives_none():
    assert compute_distribution([], WEEK, BucketKind.weekday) is None
    outside = [Sample(T - timedelta(days=3), 1.0)]
    assert compute_distribution(outside, WEEK, BucketKind.weekday) is None
    assert compute_distribution(_weekly_series(), TimeRange(WEEK.end, WEEK.start), BucketKind.weekday) is None


def test_out_of_range_bucket_index_is_skipped():
    result = compute_distribution(_weekly_series(), WEEK, BucketKind.weekday, index_fn=lambda ts: 99)
    assert sum(result.counts) == 0
    assert not result.has_bins


def test_strategy_wrapper():
    strategy = BucketDistributionStrategy(_weekly_series(), WEEK, "weekday", interval_count=2, label="latency")
    assert strategy.primary_label == "latency"
    assert strategy.compute().counts[0] == 3
    with pytest.raises(StrategyConfigurationError):
        BucketDistributionStrategy(None, WEEK, BucketKind.weekday)
    with pytest.raises(StrategyConfigurationError):
        BucketDistributionStrategy(_weekly_series(), WEEK, None)


def test_shading_cells_follow_normalized_frequencies():
    result = compute_distribution(_weekly_series(), WEEK, BucketKind.weekday, interval_count=2)
    cells = {(c.bucket, c.bin_index): c.intensity for c in shading_cells(result)}
    assert cells == {(0, 0): 0.5, (0, 1): 1.0, (1, 1): 1.0}


def test_intensity_is_clamped():
    assert intensity(1.5) == 1.0
    assert intensity(-0.2) == 0.0
    assert intensity(float("nan")) == 0.0
    assert intensity(0.3) == 0.3


@pytest.mark.parametrize("interval_count", [None, 4])
def test_value_range_overflowing_float_skips_binning(interval_count):
    series = [Sample(T, -1e308), Sample(T + timedelta(days=1), 1e308)]
    result = compute_distribution(series, WEEK, BucketKind.weekday, interval_count=interval_count)
    assert (result.global_min, result.global_max) == (-1e308, 1e308)
    assert result.bins == ()
    assert result.bin_size == 0.0
    assert result.counts[:2] == (1, 1)
    assert result.frequencies_per_bucket[0] == {}
    assert shading_cells(result) == []


def test_unit_comes_from_samples_in_range():
    series = MetricSeries(
        (Sample(T - timedelta(days=1), 1.0, "s"), Sample(T, 2.0, "ms"), Sample(T + timedelta(hours=1), 3.0)),
        unit="us",
    )
    assert compute_distribution(series, WEEK, BucketKind.hour).unit == "ms"
    no_sample_unit = MetricSeries((Sample(T - timedelta(days=1), 1.0, "s"), Sample(T, 2.0)), unit="us")
    assert compute_distribution(no_sample_unit, WEEK, BucketKind.hour).unit == "us"
