"""
Chart for precomputed transform values paired with the samples they came from.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from config import DEFAULT_TRANSFORM_LABEL
from engine.series import MetricSeries, SampleSource, TimeRange, samples_from_values
from engine.strategies.base import ChartStrategy, require
from engine.strategies.result import ComputationResult

log = logging.getLogger(__name__)


class TransformResultStrategy(ChartStrategy):
    """Pairs samples with values positionally, in the order supplied."""

    def __init__(
        self,
        series: SampleSource,
        values: Sequence[float],
        time_range: TimeRange,
        label: Optional[str] = None,
        **collaborators: Any,
    ) -> None:
        super().__init__(time_range, **collaborators)
        self.series = require(series, "series")
        self.values = require(values, "values")
        self.label = label or DEFAULT_TRANSFORM_LABEL

    @property
    def primary_label(self) -> str:
        return self.label

    def compute(self) -> Optional[ComputationResult]:
        if not self._range_is_valid():
            return None
        samples = list(self.series.samples if isinstance(self.series, MetricSeries) else self.series)
        count = min(len(samples), len(self.values))
        if count == 0:
            log.debug("transform result %r: nothing to chart", self.label)
            return None

        timestamps = [s.timestamp for s in samples[:count]]
        values = np.array([float(v) if v is not None else np.nan for v in self.values[:count]], dtype=float)
        values[~np.isfinite(values)] = np.nan
        smoothed = self._smooth(samples_from_values(timestamps, values), timestamps)
        return self._result(timestamps, values, smoothed, self.units.resolve(self.series))
