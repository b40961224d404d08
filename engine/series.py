"""
Core data model for metric samples, series and time ranges, plus the shared
filter, order and conversion helpers every computation starts from.

Timestamps are plain ``datetime`` values. Timezone-aware inputs are converted
to naive UTC when a :class:`Sample` or :class:`TimeRange` is built so that all
timestamps inside the engine are mutually comparable. A missing value is
``None`` on a sample and becomes ``NaN`` only once values are pulled into a
numeric array through :func:`sample_value`.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

EPOCH = datetime(1970, 1, 1)

Number = Union[float, int, Decimal]


def to_naive_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def to_seconds(ts: datetime) -> float:
    return (ts - EPOCH).total_seconds()


def from_seconds(seconds: float) -> datetime:
    return EPOCH + timedelta(seconds=float(seconds))


@dataclass(frozen=True)
class Sample:
    timestamp: datetime
    value: Optional[Number] = None
    unit: Optional[str] = None

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is not None:
            object.__setattr__(self, "timestamp", to_naive_utc(self.timestamp))

    @property
    def has_value(self) -> bool:
        if self.value is None:
            return False
        return math.isfinite(float(self.value))


@dataclass(frozen=True)
class MetricSeries:
    samples: Tuple[Sample, ...] = ()
    label: Optional[str] = None
    unit: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.samples, tuple):
            object.__setattr__(self, "samples", tuple(self.samples))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @classmethod
    def from_points(
        cls,
        points: Iterable[Tuple[datetime, Optional[Number]]],
        label: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> MetricSeries:
        return cls(tuple(Sample(ts, v, unit) for ts, v in points), label=label, unit=unit)


@dataclass(frozen=True)
class TimeRange:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", to_naive_utc(self.start))
        object.__setattr__(self, "end", to_naive_utc(self.end))

    @property
    def is_valid(self) -> bool:
        return self.start <= self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


SampleSource = Union[MetricSeries, Sequence[Sample]]


def _samples_of(source: Optional[SampleSource]) -> Sequence[Sample]:
    if source is None:
        return ()
    if isinstance(source, MetricSeries):
        return source.samples
    return source


def sample_value(sample: Sample) -> float:
    """Numeric value of a sample, ``NaN`` when absent or non-finite."""
    if not sample.has_value:
        return float("nan")
    return float(sample.value)


def order_samples(source: Optional[SampleSource]) -> List[Sample]:
    """Value-present samples sorted by timestamp; ties keep insertion order."""
    return sorted((s for s in _samples_of(source) if s.has_value), key=lambda s: s.timestamp)


def filter_and_order(source: Optional[SampleSource], time_range: TimeRange) -> List[Sample]:
    """Value-present samples inside the inclusive range, sorted by timestamp."""
    return [s for s in order_samples(source) if time_range.contains(s.timestamp)]


def timestamps_of(samples: Sequence[Sample]) -> List[datetime]:
    return [s.timestamp for s in samples]


def values_of(samples: Sequence[Sample]) -> np.ndarray:
    return np.array([sample_value(s) for s in samples], dtype=float)


def first_value_by_timestamp(samples: Sequence[Sample]) -> Dict[datetime, float]:
    # the first sample seen for a timestamp wins
    out: Dict[datetime, float] = {}
    for s in samples:
        if s.timestamp not in out:
            out[s.timestamp] = sample_value(s)
    return out


def distinct_sorted_timestamps(*sample_lists: Sequence[Sample]) -> List[datetime]:
    seen = {s.timestamp for samples in sample_lists for s in samples}
    return sorted(seen)


def samples_from_values(timestamps: Sequence[datetime], values: Iterable[float]) -> List[Sample]:
    """Synthetic samples for computed values; non-finite values become absent."""
    return [
        Sample(ts, float(v) if math.isfinite(v) else None)
        for ts, v in zip(timestamps, values)
    ]
