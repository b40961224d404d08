"""
Immutable result types produced by the computation strategies.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from engine.enums import TickInterval


@dataclass(frozen=True)
class SeriesResult:
    series_id: str
    display_name: str
    timestamps: Tuple[datetime, ...]
    raw_values: Tuple[float, ...]
    smoothed: Tuple[float, ...]
    unit: Optional[str] = None


@dataclass(frozen=True)
class WeekdayTrendPoint:
    date: date
    value: float
    sample_count: int


@dataclass(frozen=True)
class WeekdayTrendResult:
    # index 0 is Monday
    points_by_weekday: Tuple[Tuple[WeekdayTrendPoint, ...], ...]
    global_min: float
    global_max: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class ComputationResult:
    timestamps: Tuple[datetime, ...]
    primary_raw: Tuple[float, ...]
    primary_smoothed: Tuple[float, ...]
    interval_indices: Tuple[int, ...]
    normalized_intervals: Tuple[datetime, ...]
    tick_interval: TickInterval
    date_range: timedelta
    unit: Optional[str] = None
    secondary_raw: Optional[Tuple[float, ...]] = None
    secondary_smoothed: Optional[Tuple[float, ...]] = None
    primary_label: Optional[str] = None
    secondary_label: Optional[str] = None
    series: Optional[Tuple[SeriesResult, ...]] = None
    weekday_trend: Optional[WeekdayTrendResult] = None

    def __post_init__(self) -> None:
        n = len(self.timestamps)
        if len(self.primary_raw) != n or len(self.primary_smoothed) != n:
            raise ValueError("primary arrays must match the timestamp count")
        for arr in (self.secondary_raw, self.secondary_smoothed):
            if arr is not None and len(arr) != n:
                raise ValueError("secondary arrays must match the timestamp count")
        if len(self.interval_indices) != n:
            raise ValueError("interval indices must match the timestamp count")

    @property
    def has_secondary(self) -> bool:
        return self.secondary_raw is not None
