"""
Phase A of the bucket distribution: weekday and hour bucket assignment and per-bucket min, max, range and count statistics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Sequence, Tuple

from config import HOUR_LABELS, WEEKDAY_LABELS
from engine.enums import BucketKind
from engine.series import Sample, sample_value

log = logging.getLogger(__name__)

BucketIndexFn = Callable[[datetime], int]


def weekday_index(ts: datetime) -> int:
    """Monday is 0, Sunday is 6."""
    return ts.weekday()


def hour_index(ts: datetime) -> int:
    return ts.hour


def index_function(kind: BucketKind) -> BucketIndexFn:
    if kind is BucketKind.weekday:
        return weekday_index
    return hour_index


def bucket_labels(kind: BucketKind) -> List[str]:
    if kind is BucketKind.weekday:
        return list(WEEKDAY_LABELS)
    return list(HOUR_LABELS)


@dataclass(frozen=True)
class BucketStats:
    mins: Tuple[float, ...]
    maxs: Tuple[float, ...]
    ranges: Tuple[float, ...]
    counts: Tuple[int, ...]
    bucket_values: Dict[int, Tuple[float, ...]]
    global_min: float
    global_max: float


def compute_bucket_stats(
    samples: Sequence[Sample],
    bucket_count: int,
    index_fn: BucketIndexFn,
) -> BucketStats:
    values: Dict[int, List[float]] = {b: [] for b in range(bucket_count)}
    for s in samples:
        idx = index_fn(s.timestamp)
        if not 0 <= idx < bucket_count:
            log.debug("bucket index %d outside [0, %d), sample at %s skipped", idx, bucket_count, s.timestamp)
            continue
        values[idx].append(sample_value(s))

    nan = float("nan")
    mins: List[float] = []
    maxs: List[float] = []
    for b in range(bucket_count):
        vals = values[b]
        mins.append(min(vals) if vals else nan)
        maxs.append(max(vals) if vals else nan)

    present_mins = [v for v in mins if not math.isnan(v)]
    present_maxs = [v for v in maxs if not math.isnan(v)]
    return BucketStats(
        mins=tuple(mins),
        maxs=tuple(maxs),
        ranges=tuple(hi - lo for lo, hi in zip(mins, maxs)),
        counts=tuple(len(values[b]) for b in range(bucket_count)),
        bucket_values={b: tuple(v) for b, v in values.items()},
        global_min=min(present_mins) if present_mins else nan,
        global_max=max(present_maxs) if present_maxs else nan,
    )
