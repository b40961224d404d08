"""
Pairing of two metric series onto a common set of timestamps.

Index alignment pairs the i-th ordered sample of each side and is used when
the two series are known to be sampled together. Union alignment keeps every
timestamp seen on either side and leaves gaps as NaN. Intersection alignment
keeps only exact timestamp matches.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from engine.series import (
    SampleSource,
    distinct_sorted_timestamps,
    first_value_by_timestamp,
    order_samples,
    sample_value,
)


@dataclass(frozen=True)
class AlignedSeries:
    timestamps: Tuple[datetime, ...]
    left: np.ndarray
    right: np.ndarray

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def is_empty(self) -> bool:
        return not self.timestamps


def align_by_index(left: Optional[SampleSource], right: Optional[SampleSource]) -> AlignedSeries:
    """Pair ordered samples by position; timestamps come from the left side."""
    lhs = order_samples(left)
    rhs = order_samples(right)
    count = min(len(lhs), len(rhs))
    return AlignedSeries(
        timestamps=tuple(s.timestamp for s in lhs[:count]),
        left=np.array([sample_value(s) for s in lhs[:count]], dtype=float),
        right=np.array([sample_value(s) for s in rhs[:count]], dtype=float),
    )


def align_by_union(left: Optional[SampleSource], right: Optional[SampleSource]) -> AlignedSeries:
    """Sorted union of timestamps, exact lookup per side, NaN where missing."""
    lhs = order_samples(left)
    rhs = order_samples(right)
    timestamps = distinct_sorted_timestamps(lhs, rhs)
    left_map = first_value_by_timestamp(lhs)
    right_map = first_value_by_timestamp(rhs)
    nan = float("nan")
    return AlignedSeries(
        timestamps=tuple(timestamps),
        left=np.array([left_map.get(ts, nan) for ts in timestamps], dtype=float),
        right=np.array([right_map.get(ts, nan) for ts in timestamps], dtype=float),
    )


def align_by_intersection(left: Optional[SampleSource], right: Optional[SampleSource]) -> AlignedSeries:
    """Keep only timestamps present on both sides, in left order."""
    lhs = order_samples(left)
    right_map = first_value_by_timestamp(order_samples(right))
    timestamps = []
    lvals = []
    rvals = []
    seen = set()
    for s in lhs:
        if s.timestamp in seen or s.timestamp not in right_map:
            continue
        seen.add(s.timestamp)
        timestamps.append(s.timestamp)
        lvals.append(sample_value(s))
        rvals.append(right_map[s.timestamp])
    return AlignedSeries(
        timestamps=tuple(timestamps),
        left=np.array(lvals, dtype=float),
        right=np.array(rvals, dtype=float),
    )
