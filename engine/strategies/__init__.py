"""
Chart computation strategies and the factory that builds them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.strategies.result import ComputationResult, SeriesResult, WeekdayTrendPoint, WeekdayTrendResult
from engine.strategies.base import ChartStrategy
from engine.strategies.single import SingleMetricStrategy
from engine.strategies.pairwise import CombinedMetricStrategy, DifferenceStrategy, RatioStrategy
from engine.strategies.normalized import NormalizedStrategy
from engine.strategies.multi import MultiMetricStrategy
from engine.strategies.transform_result import TransformResultStrategy
from engine.strategies.weekday_trend import WeekdayTrendStrategy
from engine.strategies.factory import StrategyParameters, create_for_series, create_strategy, select_strategy_type

__all__ = [
    "ComputationResult",
    "SeriesResult",
    "WeekdayTrendPoint",
    "WeekdayTrendResult",
    "ChartStrategy",
    "SingleMetricStrategy",
    "CombinedMetricStrategy",
    "DifferenceStrategy",
    "RatioStrategy",
    "NormalizedStrategy",
    "MultiMetricStrategy",
    "TransformResultStrategy",
    "WeekdayTrendStrategy",
    "StrategyParameters",
    "create_for_series",
    "create_strategy",
    "select_strategy_type",
]
