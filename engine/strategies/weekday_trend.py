"""
Weekday trend: daily averages grouped by day of week.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import numpy as np

from config import DEFAULT_METRIC_LABEL, WEEKDAY_BUCKET_COUNT
from engine.series import SampleSource, TimeRange, filter_and_order, sample_value, samples_from_values
from engine.strategies.base import ChartStrategy, require
from engine.strategies.result import ComputationResult, WeekdayTrendPoint, WeekdayTrendResult
from engine.strategies.single import label_of

log = logging.getLogger(__name__)


class WeekdayTrendStrategy(ChartStrategy):

    def __init__(
        self,
        series: SampleSource,
        time_range: TimeRange,
        label: Optional[str] = None,
        **collaborators: Any,
    ) -> None:
        super().__init__(time_range, **collaborators)
        self.series = require(series, "series")
        self.label = label_of(series, label, DEFAULT_METRIC_LABEL)

    @property
    def primary_label(self) -> str:
        return self.label

    def compute(self) -> Optional[ComputationResult]:
        if not self._range_is_valid():
            return None
        samples = filter_and_order(self.series, self.time_range)
        if not samples:
            log.debug("weekday trend %r: no samples in range", self.label)
            return None

        by_day: Dict[date, List[float]] = defaultdict(list)
        for s in samples:
            by_day[s.timestamp.date()].append(sample_value(s))

        days = sorted(by_day)
        averages = [float(np.mean(by_day[d])) for d in days]

        per_weekday: List[List[WeekdayTrendPoint]] = [[] for _ in range(WEEKDAY_BUCKET_COUNT)]
        for d, avg in zip(days, averages):
            per_weekday[d.weekday()].append(WeekdayTrendPoint(date=d, value=avg, sample_count=len(by_day[d])))

        lo, hi = min(averages), max(averages)
        if hi == lo:
            hi = lo + 1.0

        unit = self.units.resolve(samples, self.series)
        trend = WeekdayTrendResult(
            points_by_weekday=tuple(tuple(points) for points in per_weekday),
            global_min=lo,
            global_max=hi,
            unit=unit,
        )

        timestamps = [datetime(d.year, d.month, d.day) for d in days]
        smoothed = self._smooth(samples_from_values(timestamps, averages), timestamps)
        return self._result(timestamps, averages, smoothed, unit, weekday_trend=trend)
