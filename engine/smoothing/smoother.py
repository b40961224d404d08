"""
Smoothing engine: a time-binned moving average over the samples of a series, resampled onto arbitrary target timestamps by linear interpolation. Bins are fixed by the sample count and the time range only, so the smoothed curve does not depend on which timestamps it is later evaluated at.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional, Sequence, Tuple

import numpy as np

from config import settings
from engine.series import SampleSource, TimeRange, order_samples, to_seconds, values_of

log = logging.getLogger(__name__)


def _bin_means(idx: np.ndarray, x: np.ndarray, y: np.ndarray, bins: int) -> Tuple[np.ndarray, np.ndarray]:
    counts = np.bincount(idx, minlength=bins)
    sum_x = np.bincount(idx, weights=x, minlength=bins)
    sum_y = np.bincount(idx, weights=y, minlength=bins)
    keep = counts > 0
    mean_x = sum_x[keep] / counts[keep]
    mean_y = sum_y[keep] / counts[keep]
    order = np.argsort(mean_x, kind="stable")
    return mean_x[order], mean_y[order]


def smoothed_points(
    source: Optional[SampleSource],
    time_range: TimeRange,
    points_per_bin: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Smoothed (seconds, value) points, one per non-empty bin.

    Samples are split into ``ceil(n / points_per_bin)`` equal-width time bins
    over the range; samples outside the range fall into the edge bins. When
    the range has no width the split is by sample count instead.
    """
    if points_per_bin is None:
        points_per_bin = settings.smoothing_points_per_bin
    points_per_bin = max(1, int(points_per_bin))

    samples = order_samples(source)
    n = len(samples)
    if n == 0:
        return np.array([], dtype=float), np.array([], dtype=float)

    x = np.array([to_seconds(s.timestamp) for s in samples], dtype=float)
    y = values_of(samples)
    bins = max(1, math.ceil(n / points_per_bin))

    start_s = to_seconds(time_range.start)
    span = to_seconds(time_range.end) - start_s
    if span > 0:
        bin_width = span / bins
        idx = np.floor((x - start_s) / bin_width)
        idx = np.clip(idx, 0, bins - 1).astype(int)
    else:
        per_bin = max(1, n // bins)
        idx = np.minimum(np.arange(n) // per_bin, bins - 1)

    return _bin_means(idx, x, y, bins)


def interpolate(
    smooth_x: np.ndarray,
    smooth_y: np.ndarray,
    targets: Sequence[datetime],
) -> np.ndarray:
    """Linear interpolation between smoothed points, clamped to the end values."""
    if len(smooth_x) == 0:
        return np.full(len(targets), np.nan, dtype=float)
    if len(targets) == 0:
        return np.array([], dtype=float)
    tx = np.array([to_seconds(t) for t in targets], dtype=float)
    return np.interp(tx, smooth_x, smooth_y)


def smooth_series(
    source: Optional[SampleSource],
    targets: Sequence[datetime],
    time_range: TimeRange,
    points_per_bin: Optional[int] = None,
) -> np.ndarray:
    smooth_x, smooth_y = smoothed_points(source, time_range, points_per_bin)
    if len(smooth_x) == 0:
        log.debug("no smoothable samples, returning %d NaN values", len(targets))
    return interpolate(smooth_x, smooth_y, targets)


class SmoothingService:
    """Smoothing collaborator handed to the computation strategies."""

    def __init__(self, points_per_bin: Optional[int] = None) -> None:
        self.points_per_bin = points_per_bin

    def smooth(
        self,
        source: Optional[SampleSource],
        targets: Sequence[datetime],
        time_range: TimeRange,
    ) -> np.ndarray:
        return smooth_series(source, targets, time_range, self.points_per_bin)


smoothing_service = SmoothingService()
