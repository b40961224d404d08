"""
Test cases for the chart computation strategies: single, combined, difference, ratio, normalized, multi-metric, transform result and weekday trend.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math
from datetime import date, datetime, timedelta

import numpy as np
import pytest

from engine.enums import NormalizationMode, TickInterval
from engine.exceptions import StrategyConfigurationError
from engine.series import MetricSeries, Sample, TimeRange
from engine.strategies import (
    CombinedMetricStrategy,
    DifferenceStrategy,
    MultiMetricStrategy,
    NormalizedStrategy,
    RatioStrategy,
    SingleMetricStrategy,
    TransformResultStrategy,
    WeekdayTrendStrategy,
)
from engine.timeline import TimelineService

T = datetime(2026, 3, 2)  # Monday
RANGE = TimeRange(T, T + timedelta(hours=10))


def _series(values, unit=None, label=None, step=timedelta(hours=1), start=T):
    return MetricSeries(
        tuple(Sample(start + i * step, v, unit) for i, v in enumerate(values)),
        label=label,
        unit=unit,
    )


def _assert_lengths(result):
    n = len(result.timestamps)
    assert len(result.primary_raw) == n
    assert len(result.primary_smoothed) == n
    assert len(result.interval_indices) == n
    if result.secondary_raw is not None:
        assert len(result.secondary_raw) == n
        assert len(result.secondary_smoothed) == n


def test_single_metric_basic():
    result = SingleMetricStrategy(_series([1, 2, 3], unit="ms", label="latency"), RANGE).compute()
    assert result.primary_raw == (1.0, 2.0, 3.0)
    assert result.unit == "ms"
    assert result.primary_label == "latency"
    assert result.tick_interval is TickInterval.hour
    assert result.interval_indices == (0, 1, 2)
    assert result.date_range == timedelta(hours=10)
    _assert_lengths(result)


def test_single_metric_filters_range_and_absent_values():
    series = MetricSeries((
        Sample(T - timedelta(hours=1), 100.0),
        Sample(T + timedelta(hours=2), 2.0),
        Sample(T + timedelta(hours=1), None),
        Sample(T, 1.0),
        Sample(T + timedelta(hours=11), 100.0),
    ))
    result = SingleMetricStrategy(series, RANGE).compute()
    assert result.timestamps == (T, T + timedelta(hours=2))
    assert result.primary_raw == (1.0, 2.0)


def test_single_metric_empty_and_inverted_range_give_no_result():
    assert SingleMetricStrategy(_series([]), RANGE).compute() is None
    inverted = TimeRange(RANGE.end, RANGE.start)
    assert SingleMetricStrategy(_series([1, 2]), inverted).compute() is None


def test_single_metric_requires_series():
    with pytest.raises(StrategyConfigurationError):
        SingleMetricStrategy(None, RANGE)


def test_compute_is_idempotent():
    strategy = SingleMetricStrategy(_series([1, 5, 2, 8, 3]), RANGE)
    a, b = strategy.compute(), strategy.compute()
    assert a.timestamps == b.timestamps
    assert np.array_equal(a.primary_smoothed, b.primary_smoothed, equal_nan=True)


def test_strategy_uses_injected_timeline_service():
    svc = TimelineService(cache_enabled=True)
    SingleMetricStrategy(_series([1, 2]), RANGE, timeline=svc).compute()
    assert svc.cache_size() == 1


def test_combined_metric_index_alignment():
    left = _series([1, 2, 3], unit="ms", label="a")
    right = _series([10, 20], step=timedelta(minutes=30), unit="s", label="b")
    result = CombinedMetricStrategy(left, right, RANGE).compute()
    assert result.timestamps == (T, T + timedelta(hours=1))
    assert result.primary_raw == (1.0, 2.0)
    assert result.secondary_raw == (10.0, 20.0)
    assert result.unit == "ms"
    assert (result.primary_label, result.secondary_label) == ("a", "b")
    _assert_lengths(result)


def test_combined_metric_one_side_empty():
    assert CombinedMetricStrategy(_series([1, 2]), _series([]), RANGE).compute() is None


def test_difference():
    result = DifferenceStrategy(_series([10, 5], unit="ms"), _series([3, 7]), RANGE, "A", "B").compute()
    assert result.primary_raw == (7.0, -2.0)
    assert result.unit == "ms"
    assert result.primary_label == "A - B"
    assert result.secondary_raw is None
    _assert_lengths(result)


def test_ratio_zero_divisor_and_units():
    result = RatioStrategy(_series([10, 5, 4], unit="MB"), _series([2, 0, 4], unit="s"), RANGE).compute()
    assert result.primary_raw[0] == 5.0
    assert math.isnan(result.primary_raw[1])
    assert result.primary_raw[2] == 1.0
    assert result.unit == "MB/s"
    assert not any(math.isnan(v) for v in result.primary_smoothed)


def test_ratio_unit_absent_when_one_side_has_none():
    result = RatioStrategy(_series([1], unit="MB"), _series([1]), RANGE).compute()
    assert result.unit is None


def test_ratio_label():
    assert RatioStrategy(_series([1]), _series([1]), RANGE, "x", "y").primary_label == "x / y"


def test_normalized_zero_to_one_on_union():
    left = MetricSeries((Sample(T, 1.0), Sample(T + timedelta(hours=2), 3.0), Sample(T + timedelta(hours=4), 2.0)))
    right = MetricSeries((Sample(T + timedelta(hours=1), 10.0), Sample(T + timedelta(hours=2), 30.0)))
    result = NormalizedStrategy(left, right, RANGE, NormalizationMode.zero_to_one, "L", "R").compute()
    assert len(result.timestamps) == 4
    assert result.primary_raw[0] == 0.0
    assert result.primary_raw[1] != result.primary_raw[1]
    assert result.primary_raw[2] == 1.0
    assert result.primary_raw[3] == 0.5
    assert result.secondary_raw[1] == 0.0 and result.secondary_raw[2] == 1.0
    assert result.primary_label == "L ~ R"
    assert result.secondary_label == "R"
    _assert_lengths(result)


def test_normalized_smoothed_values_within_unit_interval():
    left = _series([float(v) for v in np.random.default_rng(1).uniform(0, 100, 11)])
    right = _series([float(v) for v in np.random.default_rng(2).uniform(0, 5, 11)])
    for mode in (NormalizationMode.zero_to_one, NormalizationMode.percentage_of_max):
        result = NormalizedStrategy(left, right, RANGE, mode).compute()
        for arr in (result.primary_raw, result.primary_smoothed, result.secondary_raw, result.secondary_smoothed):
            finite = [v for v in arr if not math.isnan(v)]
            assert all(-1e-12 <= v <= 1 + 1e-12 for v in finite)


def test_normalized_relative_to_max():
    left = _series([5, 10])
    right = _series([10, 20])
    strategy = NormalizedStrategy(left, right, RANGE, NormalizationMode.relative_to_max, "L", "R")
    result = strategy.compute()
    assert result.primary_raw == (0.25, 0.5)
    assert result.secondary_raw == (0.5, 1.0)
    assert result.secondary_label == "R (baseline)"


def test_normalized_no_data():
    assert NormalizedStrategy(_series([]), _series([]), RANGE).compute() is None


def test_normalized_uses_default_mode():
    strategy = NormalizedStrategy(_series([1]), _series([1]), RANGE)
    assert strategy.mode is NormalizationMode.zero_to_one


def test_multi_metric():
    a = _series([1, 2, 3], unit=None)
    b = _series([5, 6], step=timedelta(minutes=30), unit="rpm")
    c = _series([])
    result = MultiMetricStrategy([a, b, c], RANGE, labels=["a", "b", "c"]).compute()
    assert [s.series_id for s in result.series] == ["series_0", "series_1"]
    assert [s.display_name for s in result.series] == ["a", "b"]
    assert result.series[1].raw_values == (5.0, 6.0)
    assert result.timestamps == (T, T + timedelta(minutes=30), T + timedelta(hours=1), T + timedelta(hours=2))
    assert result.primary_raw[0] == 1.0
    assert math.isnan(result.primary_raw[1])
    assert result.unit == "rpm"
    _assert_lengths(result)


def test_multi_metric_construction_contract():
    with pytest.raises(StrategyConfigurationError):
        MultiMetricStrategy([], RANGE)
    with pytest.raises(StrategyConfigurationError):
        MultiMetricStrategy([_series([1]), _series([2])], RANGE, labels=["only one"])


def test_multi_metric_all_empty_and_explicit_unit():
    assert MultiMetricStrategy([_series([]), _series([])], RANGE).compute() is None
    result = MultiMetricStrategy([_series([1])], RANGE, unit="req").compute()
    assert result.unit == "req"


def test_transform_result_pairs_positionally():
    series = _series([0, 0, 0, 0], unit="ms")
    result = TransformResultStrategy(series, [1.0, float("inf"), 3.0], RANGE).compute()
    assert result.timestamps == (T, T + timedelta(hours=1), T + timedelta(hours=2))
    assert result.primary_raw[0] == 1.0
    assert math.isnan(result.primary_raw[1])
    assert result.unit == "ms"
    assert result.primary_label == "Transform Result"


def test_transform_result_contract():
    with pytest.raises(StrategyConfigurationError):
        TransformResultStrategy(_series([1]), None, RANGE)
    with pytest.raises(StrategyConfigurationError):
        TransformResultStrategy(None, [1.0], RANGE)
    assert TransformResultStrategy(_series([1]), [], RANGE).compute() is None


def test_weekday_trend_groups_by_weekday_and_date():
    samples = (
        Sample(T + timedelta(hours=1), 2.0),       # Monday
        Sample(T + timedelta(hours=5), 4.0),       # Monday
        Sample(T + timedelta(days=1), 10.0),       # Tuesday
        Sample(T + timedelta(days=7, hours=3), 6.0),  # next Monday
    )
    tr = TimeRange(T, T + timedelta(days=8))
    result = WeekdayTrendStrategy(MetricSeries(samples, unit="°C"), tr).compute()
    trend = result.weekday_trend
    monday = trend.points_by_weekday[0]
    assert [(p.date, p.value, p.sample_count) for p in monday] == [
        (date(2026, 3, 2), 3.0, 2),
        (date(2026, 3, 9), 6.0, 1),
    ]
    assert trend.points_by_weekday[1][0].value == 10.0
    assert trend.points_by_weekday[6] == ()
    assert (trend.global_min, trend.global_max) == (3.0, 10.0)
    assert result.primary_raw == (3.0, 10.0, 6.0)
    assert result.tick_interval is TickInterval.hour
    assert result.unit == "°C"
    _assert_lengths(result)


def test_weekday_trend_flat_and_empty():
    flat = WeekdayTrendStrategy(_series([4.0, 4.0]), RANGE).compute()
    assert (flat.weekday_trend.global_min, flat.weekday_trend.global_max) == (4.0, 5.0)
    assert WeekdayTrendStrategy(_series([]), RANGE).compute() is None


def test_units_come_from_charted_samples_not_out_of_range_ones():
    early = Sample(T - timedelta(hours=5), 1.0, "s")
    single = MetricSeries((early, Sample(T, 2.0)), unit="ms")
    assert SingleMetricStrategy(single, RANGE).compute().unit == "ms"
    bare = MetricSeries((early, Sample(T, 2.0)))
    assert SingleMetricStrategy(bare, RANGE).compute().unit is None

    left = MetricSeries((Sample(T - timedelta(hours=5), 1.0, "GB"), Sample(T, 8.0, "MB")))
    right = MetricSeries((Sample(T, 2.0),), unit="s")
    assert RatioStrategy(left, right, RANGE).compute().unit == "MB/s"
