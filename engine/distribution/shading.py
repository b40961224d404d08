"""
Frequency to intensity contract consumed by chart rendering. Rendering decides the colour ramp; this module only decides which cells are shaded and how strongly.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from engine.distribution.engine import BucketDistributionResult


@dataclass(frozen=True)
class ShadingCell:
    bucket: int
    bin_index: int
    lower: float
    upper: float
    intensity: float


def intensity(normalized_frequency: float) -> float:
    if normalized_frequency is None or not math.isfinite(normalized_frequency):
        return 0.0
    return min(1.0, max(0.0, float(normalized_frequency)))


def shading_cells(result: BucketDistributionResult) -> List[ShadingCell]:
    cells: List[ShadingCell] = []
    for bucket in range(result.bucket_count):
        normalized = result.normalized_frequencies_per_bucket.get(bucket, {})
        for bin_index, (lower, upper) in enumerate(result.bins):
            value = intensity(normalized.get(bin_index, 0.0))
            if value <= 0:
                continue
            cells.append(ShadingCell(bucket, bin_index, lower, upper, value))
    return cells
