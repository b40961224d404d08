"""
Enumerations for Tick Intervals, Normalization Modes, Strategy Types and Bucket Kinds

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import HOUR_BUCKET_COUNT, WEEKDAY_BUCKET_COUNT


class TickInterval(str, Enum):
    hour = "hour"
    day = "day"
    week = "week"
    month = "month"


class NormalizationMode(str, Enum):
    zero_to_one = "zero_to_one"
    percentage_of_max = "percentage_of_max"
    relative_to_max = "relative_to_max"

    @classmethod
    def default(cls) -> NormalizationMode:
        from config import settings

        return cls(settings.default_normalization_mode)


class StrategyType(str, Enum):
    single_metric = "single_metric"
    combined_metric = "combined_metric"
    multi_metric = "multi_metric"
    difference = "difference"
    ratio = "ratio"
    normalized = "normalized"
    transform_result = "transform_result"
    weekday_trend = "weekday_trend"
    weekly_distribution = "weekly_distribution"
    hourly_distribution = "hourly_distribution"

    @property
    def is_distribution(self) -> bool:
        return self in (StrategyType.weekly_distribution, StrategyType.hourly_distribution)


class BucketKind(str, Enum):
    weekday = "weekday"
    hour = "hour"

    def bucket_count(self) -> int:
        if self is BucketKind.weekday:
            return WEEKDAY_BUCKET_COUNT
        return HOUR_BUCKET_COUNT
