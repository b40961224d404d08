"""
Multi-metric chart: N independent series on a shared timeline.

Each series is filtered, ordered and smoothed on its own timestamps and
returned as a :class:`SeriesResult`. The top-level timestamps are the union of
all series; the primary arrays carry the first non-empty series projected onto
that union (exact lookup for raw values, interpolation for the smoothed curve)
so that the top-level arrays stay length-consistent.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from config import DEFAULT_METRIC_LABEL
from engine.exceptions import StrategyConfigurationError
from engine.series import (
    Sample,
    SampleSource,
    TimeRange,
    distinct_sorted_timestamps,
    filter_and_order,
    first_value_by_timestamp,
    timestamps_of,
    values_of,
)
from engine.strategies.base import ChartStrategy, as_floats
from engine.strategies.result import ComputationResult, SeriesResult
from engine.strategies.single import label_of

log = logging.getLogger(__name__)


class MultiMetricStrategy(ChartStrategy):

    def __init__(
        self,
        series: Sequence[SampleSource],
        time_range: TimeRange,
        labels: Optional[Sequence[str]] = None,
        unit: Optional[str] = None,
        **collaborators: Any,
    ) -> None:
        super().__init__(time_range, **collaborators)
        if not series:
            raise StrategyConfigurationError("at least one series is required")
        if any(s is None for s in series):
            raise StrategyConfigurationError("series entries must not be None")
        if labels is not None and len(labels) != len(series):
            raise StrategyConfigurationError(
                f"label count ({len(labels)}) does not match series count ({len(series)})"
            )
        self.series = list(series)
        self.labels = [
            label_of(s, labels[i] if labels else None, f"{DEFAULT_METRIC_LABEL} {i + 1}")
            for i, s in enumerate(self.series)
        ]
        self.unit = unit

    @property
    def primary_label(self) -> str:
        return self.labels[0]

    def compute(self) -> Optional[ComputationResult]:
        if not self._range_is_valid():
            return None

        results: List[SeriesResult] = []
        prepared: List[List[Sample]] = []
        for i, source in enumerate(self.series):
            samples = filter_and_order(source, self.time_range)
            if not samples:
                log.debug("multi metric: series_%d (%s) empty in range, skipped", i, self.labels[i])
                continue
            timestamps = timestamps_of(samples)
            prepared.append(samples)
            results.append(SeriesResult(
                series_id=f"series_{i}",
                display_name=self.labels[i],
                timestamps=tuple(timestamps),
                raw_values=as_floats(values_of(samples)),
                smoothed=as_floats(self._smooth(samples, timestamps)),
                unit=self.units.resolve(samples, source),
            ))

        if not results:
            return None

        union = distinct_sorted_timestamps(*prepared)
        first = prepared[0]
        lookup = first_value_by_timestamp(first)
        nan = float("nan")
        return self._result(
            union,
            [lookup.get(ts, nan) for ts in union],
            self._smooth(first, union),
            next((r.unit for r in results if r.unit), None) or self.unit,
            primary_label=results[0].display_name,
            series=tuple(results),
        )
