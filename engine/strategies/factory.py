"""
Strategy selection and construction from a single parameter bundle.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from engine.distribution.engine import BucketDistributionStrategy
from engine.enums import BucketKind, NormalizationMode, StrategyType
from engine.exceptions import StrategyConfigurationError
from engine.series import SampleSource, TimeRange
from engine.strategies.multi import MultiMetricStrategy
from engine.strategies.normalized import NormalizedStrategy
from engine.strategies.pairwise import CombinedMetricStrategy, DifferenceStrategy, RatioStrategy
from engine.strategies.single import SingleMetricStrategy
from engine.strategies.transform_result import TransformResultStrategy
from engine.strategies.weekday_trend import WeekdayTrendStrategy

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyParameters:
    time_range: TimeRange
    left: Optional[SampleSource] = None
    right: Optional[SampleSource] = None
    series: Sequence[SampleSource] = field(default_factory=tuple)
    left_label: Optional[str] = None
    right_label: Optional[str] = None
    labels: Optional[Sequence[str]] = None
    unit: Optional[str] = None
    normalization_mode: Optional[NormalizationMode] = None
    values: Optional[Sequence[float]] = None
    interval_count: Optional[int] = None


def select_strategy_type(series_count: int) -> StrategyType:
    if series_count <= 0:
        raise StrategyConfigurationError("at least one series is required")
    if series_count == 1:
        return StrategyType.single_metric
    if series_count == 2:
        return StrategyType.combined_metric
    return StrategyType.multi_metric


def _first(params: StrategyParameters) -> Optional[SampleSource]:
    if params.left is not None:
        return params.left
    return params.series[0] if params.series else None


def _second(params: StrategyParameters) -> Optional[SampleSource]:
    if params.right is not None:
        return params.right
    return params.series[1] if len(params.series) > 1 else None


def _label(params: StrategyParameters, index: int, explicit: Optional[str]) -> Optional[str]:
    if explicit:
        return explicit
    if params.labels and index < len(params.labels):
        return params.labels[index]
    return None


def create_strategy(strategy_type: StrategyType, params: StrategyParameters, **collaborators: Any) -> Any:
    strategy_type = StrategyType(strategy_type)
    tr = params.time_range
    left, right = _first(params), _second(params)
    left_label = _label(params, 0, params.left_label)
    right_label = _label(params, 1, params.right_label)

    if strategy_type is StrategyType.single_metric:
        return SingleMetricStrategy(left, tr, left_label, **collaborators)
    if strategy_type is StrategyType.combined_metric:
        return CombinedMetricStrategy(left, right, tr, left_label, right_label, **collaborators)
    if strategy_type is StrategyType.difference:
        return DifferenceStrategy(left, right, tr, left_label, right_label, **collaborators)
    if strategy_type is StrategyType.ratio:
        return RatioStrategy(left, right, tr, left_label, right_label, **collaborators)
    if strategy_type is StrategyType.normalized:
        return NormalizedStrategy(
            left, right, tr, params.normalization_mode, left_label, right_label, **collaborators
        )
    if strategy_type is StrategyType.multi_metric:
        series = list(params.series) or [s for s in (params.left, params.right) if s is not None]
        return MultiMetricStrategy(series, tr, params.labels, params.unit, **collaborators)
    if strategy_type is StrategyType.transform_result:
        return TransformResultStrategy(left, params.values, tr, left_label, **collaborators)
    if strategy_type is StrategyType.weekday_trend:
        return WeekdayTrendStrategy(left, tr, left_label, **collaborators)
    if strategy_type is StrategyType.weekly_distribution:
        return BucketDistributionStrategy(left, tr, BucketKind.weekday, params.interval_count, left_label)
    return BucketDistributionStrategy(left, tr, BucketKind.hour, params.interval_count, left_label)


def create_for_series(params: StrategyParameters, **collaborators: Any) -> Any:
    """Pick single, combined or multi-metric mode from the number of series."""
    count = len(params.series) or sum(s is not None for s in (params.left, params.right))
    strategy_type = select_strategy_type(count)
    log.debug("selected %s for %d series", strategy_type.value, count)
    return create_strategy(strategy_type, params, **collaborators)
