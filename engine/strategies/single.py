"""
Single metric chart: one series filtered to the range, ordered and smoothed.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from config import DEFAULT_METRIC_LABEL
from engine.series import SampleSource, TimeRange, filter_and_order, timestamps_of, values_of
from engine.strategies.base import ChartStrategy, require
from engine.strategies.result import ComputationResult

log = logging.getLogger(__name__)


def label_of(source: Optional[SampleSource], label: Optional[str], fallback: str) -> str:
    return label or getattr(source, "label", None) or fallback


class SingleMetricStrategy(ChartStrategy):

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
            log.debug("single metric %r: no samples in range", self.label)
            return None
        timestamps = timestamps_of(samples)
        return self._result(
            timestamps,
            values_of(samples),
            self._smooth(samples, timestamps),
            self.units.resolve(samples, self.series),
        )
