"""
Bucket distribution engine for weekday and hourly frequency charts.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.distribution.binning import adaptive_bin_size, create_bins, nice_step, normalize_frequencies
from engine.distribution.buckets import hour_index, weekday_index
from engine.distribution.engine import BucketDistributionResult, BucketDistributionStrategy, compute_distribution
from engine.distribution.shading import ShadingCell, intensity, shading_cells

__all__ = [
    "adaptive_bin_size",
    "create_bins",
    "nice_step",
    "normalize_frequencies",
    "hour_index",
    "weekday_index",
    "BucketDistributionResult",
    "BucketDistributionStrategy",
    "compute_distribution",
    "ShadingCell",
    "intensity",
    "shading_cells",
]
