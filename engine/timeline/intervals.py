"""
Tick interval selection and normalized interval boundaries for chart timelines. A range is mapped to the coarsest readable tick (hour, day, week or month), boundaries are aligned to that tick and any timestamp can be mapped back to the interval that contains it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from bisect import bisect_right
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from config import settings
from engine.enums import TickInterval

_DAY_SECONDS = 86400.0


def determine_tick_interval(duration: timedelta) -> TickInterval:
    days = duration.total_seconds() / _DAY_SECONDS
    if days >= settings.tick_month_min_days:
        return TickInterval.month
    if days >= settings.tick_week_min_days:
        return TickInterval.week
    if days >= settings.tick_day_min_days:
        return TickInterval.day
    return TickInterval.hour


def normalize(ts: datetime, tick: TickInterval) -> datetime:
    """Start of the tick unit containing ``ts``. Weeks start on Monday."""
    if tick is TickInterval.month:
        return datetime(ts.year, ts.month, 1)
    if tick is TickInterval.week:
        day = datetime(ts.year, ts.month, ts.day)
        return day - timedelta(days=ts.weekday())
    if tick is TickInterval.day:
        return datetime(ts.year, ts.month, ts.day)
    return ts.replace(minute=0, second=0, microsecond=0, tzinfo=None)


def increment(ts: datetime, tick: TickInterval) -> datetime:
    if tick is TickInterval.month:
        if ts.month == 12:
            return ts.replace(year=ts.year + 1, month=1)
        return ts.replace(month=ts.month + 1)
    if tick is TickInterval.week:
        return ts + timedelta(days=7)
    if tick is TickInterval.day:
        return ts + timedelta(days=1)
    return ts + timedelta(hours=1)


def generate_normalized_intervals(start: datetime, end: datetime, tick: TickInterval) -> List[datetime]:
    """Tick-aligned boundaries covering ``[start, end]``.

    The first boundary is the start of the unit containing ``start`` and the
    last is the first boundary at or after ``end``, so the list is strictly
    increasing and every timestamp in the range falls in exactly one interval.
    An inverted range yields an empty list.
    """
    if start > end:
        return []
    current = normalize(start, tick)
    intervals = [current]
    while current < end:
        current = increment(current, tick)
        intervals.append(current)
    return intervals


def map_timestamp_to_interval_index(
    ts: datetime,
    intervals: Sequence[datetime],
    tick: Optional[TickInterval] = None,
) -> int:
    """Index of the last boundary at or before ``ts``, clamped to the list.

    With ``tick`` the timestamp is normalized first; on tick-aligned
    boundaries this yields the same index.
    """
    if not intervals:
        return 0
    if tick is not None:
        ts = normalize(ts, tick)
    idx = bisect_right(intervals, ts) - 1
    return min(max(idx, 0), len(intervals) - 1)
