"""
Constants and configuration for Trendline.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List

from pydantic_settings import BaseSettings


TRENDLINE_API_HOST: str = os.getenv("TRENDLINE_API_HOST", "0.0.0.0")
TRENDLINE_API_PORT: int = int(os.getenv("TRENDLINE_API_PORT", "4330"))
TRENDLINE_LOG_LEVEL: str = os.getenv("TRENDLINE_LOG_LEVEL", "INFO").upper()

WEEKDAY_BUCKET_COUNT = 7
HOUR_BUCKET_COUNT = 24

# display labels for the weekday and hour buckets, index aligned with the
# bucket indices produced by engine.distribution.buckets
WEEKDAY_LABELS: List[str] = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
HOUR_LABELS: List[str] = (
    ["12AM"]
    + [f"{h}AM" for h in range(1, 12)]
    + ["12PM"]
    + [f"{h}PM" for h in range(1, 12)]
)

# labels used when the caller does not name its series
DEFAULT_LEFT_LABEL = "Left"
DEFAULT_RIGHT_LABEL = "Right"
DEFAULT_METRIC_LABEL = "Metric"
DEFAULT_TRANSFORM_LABEL = "Transform Result"


class Settings(BaseSettings):
    api_host: str = TRENDLINE_API_HOST
    api_port: int = TRENDLINE_API_PORT
    log_level: str = TRENDLINE_LOG_LEVEL

    # tick interval selection; a range at least this many days long gets the
    # coarser tick. thresholds must stay month >= week >= day.
    tick_month_min_days: float = 730.0
    tick_week_min_days: float = 120.0
    tick_day_min_days: float = 30.0

    # timeline memoization keyed by the exact (start, end) pair
    timeline_cache_enabled: bool = True
    timeline_cache_max_entries: int = 256

    # smoothing: one time bin per this many samples
    smoothing_points_per_bin: int = 10

    # frequency binning for the bucket distribution engine
    distribution_target_bins: int = 15
    distribution_min_bins: int = 5
    distribution_max_bins: int = 50
    distribution_min_interval_count: int = 1
    distribution_max_interval_count: int = 30

    default_normalization_mode: str = "zero_to_one"

    # computation service
    max_parallel_computations: int = 4

    model_config = {
        "env_prefix": "TRENDLINE_",
        "extra": "ignore",
    }


settings = Settings()
