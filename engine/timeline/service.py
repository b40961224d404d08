"""
Timeline construction with a bounded, thread-safe memo keyed by the exact
(start, end) pair of the requested range.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from config import settings
from engine.enums import TickInterval
from engine.series import TimeRange
from engine.timeline.intervals import (
    determine_tick_interval,
    generate_normalized_intervals,
    map_timestamp_to_interval_index,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Timeline:
    start: datetime
    end: datetime
    date_range: timedelta
    tick_interval: TickInterval
    normalized_intervals: Tuple[datetime, ...]


class TimelineService:

    def __init__(self, cache_enabled: Optional[bool] = None, max_entries: Optional[int] = None) -> None:
        self._cache_enabled = cache_enabled
        self._max_entries = max_entries
        self._cache: Dict[Tuple[Any, ...], Timeline] = {}
        self._lock = threading.Lock()

    @property
    def cache_enabled(self) -> bool:
        if self._cache_enabled is None:
            return settings.timeline_cache_enabled
        return self._cache_enabled

    @property
    def max_entries(self) -> int:
        if self._max_entries is None:
            return settings.timeline_cache_max_entries
        return self._max_entries

    def generate(self, time_range: TimeRange) -> Timeline:
        # _build reads the tick thresholds from settings
        key = (
            time_range.start,
            time_range.end,
            settings.tick_month_min_days,
            settings.tick_week_min_days,
            settings.tick_day_min_days,
        )
        if self.cache_enabled:
            with self._lock:
                cached = self._cache.get(key)
            if cached is not None:
                return cached

        timeline = self._build(time_range)

        if self.cache_enabled:
            with self._lock:
                if len(self._cache) < self.max_entries:
                    self._cache.setdefault(key, timeline)
                    timeline = self._cache[key]
                else:
                    log.debug("timeline cache full (%d entries), not caching %s", len(self._cache), key)
        return timeline

    def map_to_intervals(self, timestamps: Sequence[datetime], timeline: Timeline) -> List[int]:
        intervals = timeline.normalized_intervals
        return [map_timestamp_to_interval_index(ts, intervals, timeline.tick_interval) for ts in timestamps]

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    @staticmethod
    def _build(time_range: TimeRange) -> Timeline:
        duration = time_range.duration
        tick = determine_tick_interval(duration)
        intervals = generate_normalized_intervals(time_range.start, time_range.end, tick)
        return Timeline(
            start=time_range.start,
            end=time_range.end,
            date_range=duration,
            tick_interval=tick,
            normalized_intervals=tuple(intervals),
        )


timeline_service = TimelineService()
