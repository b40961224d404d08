"""
Base class shared by every chart computation strategy.

A strategy is configured once with its input series, time range and
collaborators, then asked to ``compute()``. Missing inputs are rejected at
construction with :class:`StrategyConfigurationError`; anything about the
data itself (empty series, inverted range, zero divisors) makes ``compute()``
return ``None`` or NaN values instead of raising.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional, Sequence

import numpy as np

from engine.exceptions import StrategyConfigurationError
from engine.series import TimeRange
from engine.smoothing import SmoothingService, smoothing_service
from engine.strategies.result import ComputationResult
from engine.timeline import TimelineService, timeline_service
from engine.units import UnitResolver, unit_resolver

log = logging.getLogger(__name__)


def as_floats(values: Sequence[float]) -> tuple:
    return tuple(float(v) for v in np.asarray(values, dtype=float))


def require(value: Any, name: str) -> Any:
    if value is None:
        raise StrategyConfigurationError(f"{name} is required")
    return value


class ChartStrategy(ABC):

    def __init__(
        self,
        time_range: TimeRange,
        timeline: Optional[TimelineService] = None,
        smoothing: Optional[SmoothingService] = None,
        units: Optional[UnitResolver] = None,
    ) -> None:
        self.time_range = require(time_range, "time_range")
        self.timeline = timeline or timeline_service
        self.smoothing = smoothing or smoothing_service
        self.units = units or unit_resolver

    @property
    def primary_label(self) -> Optional[str]:
        return None

    @property
    def secondary_label(self) -> Optional[str]:
        return None

    @abstractmethod
    def compute(self) -> Optional[ComputationResult]:
        ...

    def _range_is_valid(self) -> bool:
        if not self.time_range.is_valid:
            log.debug("%s: inverted range %s > %s", type(self).__name__, self.time_range.start, self.time_range.end)
            return False
        return True

    def _smooth(self, samples, targets: Sequence[datetime]) -> np.ndarray:
        return self.smoothing.smooth(samples, targets, self.time_range)

    def _result(
        self,
        timestamps: Sequence[datetime],
        raw: Sequence[float],
        smoothed: Sequence[float],
        unit: Optional[str],
        **extra: Any,
    ) -> ComputationResult:
        timeline = self.timeline.generate(self.time_range)
        indices = self.timeline.map_to_intervals(timestamps, timeline)
        extra.setdefault("primary_label", self.primary_label)
        extra.setdefault("secondary_label", self.secondary_label)
        for key in ("secondary_raw", "secondary_smoothed"):
            if extra.get(key) is not None:
                extra[key] = as_floats(extra[key])
        return ComputationResult(
            timestamps=tuple(timestamps),
            primary_raw=as_floats(raw),
            primary_smoothed=as_floats(smoothed),
            interval_indices=tuple(indices),
            normalized_intervals=timeline.normalized_intervals,
            tick_interval=timeline.tick_interval,
            date_range=timeline.date_range,
            unit=unit,
            **extra,
        )
