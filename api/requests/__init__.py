"""
Request models for the chart computation API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from engine.enums import NormalizationMode, StrategyType
from engine.series import MetricSeries, Sample, TimeRange


class SamplePayload(BaseModel):
    timestamp: datetime
    value: Optional[float] = None
    unit: Optional[str] = None


class SeriesPayload(BaseModel):
    label: Optional[str] = None
    unit: Optional[str] = None
    samples: List[SamplePayload] = Field(default_factory=list)

    def to_series(self) -> MetricSeries:
        return MetricSeries(
            tuple(Sample(s.timestamp, s.value, s.unit or self.unit) for s in self.samples),
            label=self.label,
            unit=self.unit,
        )


class RangedRequest(BaseModel):
    start: datetime
    end: datetime

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(self.start, self.end)


class ChartRequest(RangedRequest):
    strategy: Optional[StrategyType] = None
    series: List[SeriesPayload] = Field(min_length=1)
    normalization_mode: Optional[NormalizationMode] = None
    unit: Optional[str] = None


class WeekdayTrendRequest(RangedRequest):
    series: SeriesPayload


class DistributionRequest(RangedRequest):
    series: SeriesPayload
    interval_count: Optional[int] = Field(default=None, ge=1, le=30)


class TransformRequest(RangedRequest):
    operation: str
    series: List[SeriesPayload] = Field(min_length=1, max_length=2)
