"""
Phase B of the bucket distribution: value-range binning and per-bucket
frequency counting.

Bins always start at the global minimum and end exactly at the global
maximum. Every bin is half-open ``[lower, upper)`` except the last, which is
closed so that the maximum value is counted.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from config import settings

Bin = Tuple[float, float]


def nice_step(raw: float) -> float:
    """Round ``raw`` up to 1, 2 or 5 times a power of ten."""
    if raw <= 0 or not math.isfinite(raw):
        return 1.0
    magnitude = 10 ** math.floor(math.log10(raw))
    residual = raw / magnitude
    if residual <= 1:
        step = 1
    elif residual <= 2:
        step = 2
    elif residual <= 5:
        step = 5
    else:
        step = 10
    return step * magnitude


def _bin_count(value_range: float, bin_size: float) -> int:
    # tolerate float noise when the range is an exact multiple of the size
    return max(1, math.ceil(value_range / bin_size - 1e-9))


def adaptive_bin_size(
    global_min: float,
    global_max: float,
    target_bins: Optional[int] = None,
    min_bins: Optional[int] = None,
    max_bins: Optional[int] = None,
) -> Tuple[float, int]:
    if target_bins is None:
        target_bins = settings.distribution_target_bins
    if min_bins is None:
        min_bins = settings.distribution_min_bins
    if max_bins is None:
        max_bins = settings.distribution_max_bins

    value_range = global_max - global_min
    bin_size = nice_step(value_range / max(1, target_bins))
    count = _bin_count(value_range, bin_size)
    if count < min_bins:
        count = min_bins
        bin_size = value_range / count
    elif count > max_bins:
        count = max_bins
        bin_size = value_range / count
    return bin_size, count


def uniform_bin_size(global_min: float, global_max: float, interval_count: int) -> Tuple[float, int]:
    lo = settings.distribution_min_interval_count
    hi = settings.distribution_max_interval_count
    count = min(max(int(interval_count), lo), hi)
    return (global_max - global_min) / count, count


def create_bins(global_min: float, global_max: float, bin_size: float, count: int) -> List[Bin]:
    bins: List[Bin] = []
    for i in range(count):
        lower = global_min + i * bin_size
        upper = global_max if i == count - 1 else global_min + (i + 1) * bin_size
        bins.append((lower, upper))
    return bins


def find_bin_indices(values: Sequence[float], bins: Sequence[Bin]) -> np.ndarray:
    """Bin index per value; values outside the bins get -1."""
    arr = np.asarray(values, dtype=float)
    if not bins:
        return np.full(arr.shape, -1, dtype=int)
    inner_edges = np.array([lower for lower, _ in bins[1:]], dtype=float)
    idx = np.searchsorted(inner_edges, arr, side="right")
    outside = (arr < bins[0][0]) | (arr > bins[-1][1]) | ~np.isfinite(arr)
    idx[outside] = -1
    return idx


def count_frequencies(
    bucket_values: Mapping[int, Sequence[float]],
    bins: Sequence[Bin],
) -> Dict[int, Dict[int, int]]:
    frequencies: Dict[int, Dict[int, int]] = {}
    for bucket, values in bucket_values.items():
        counts = {i: 0 for i in range(len(bins))}
        for idx in find_bin_indices(values, bins):
            if idx >= 0:
                counts[int(idx)] += 1
        frequencies[bucket] = counts
    return frequencies


def normalize_frequencies(frequencies: Mapping[int, Mapping[int, int]]) -> Dict[int, Dict[int, float]]:
    """Scale each bucket's counts by that bucket's own maximum count."""
    normalized: Dict[int, Dict[int, float]] = {}
    for bucket, counts in frequencies.items():
        peak = max(counts.values(), default=0)
        normalized[bucket] = {
            i: (c / peak if peak > 0 else 0.0) for i, c in counts.items()
        }
    return normalized
