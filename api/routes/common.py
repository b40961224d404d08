"""
Shared helpers used across the chart route modules: request to engine
parameter conversion and strategy type resolution.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import HTTPException

from api.requests import ChartRequest
from engine.enums import StrategyType
from engine.strategies import StrategyParameters, select_strategy_type


def chart_parameters(req: ChartRequest) -> StrategyParameters:
    series = [s.to_series() for s in req.series]
    return StrategyParameters(
        time_range=req.time_range,
        series=tuple(series),
        unit=req.unit,
        normalization_mode=req.normalization_mode,
    )


def resolve_strategy_type(req: ChartRequest) -> StrategyType:
    if req.strategy is None:
        return select_strategy_type(len(req.series))
    if req.strategy.is_distribution:
        raise HTTPException(status_code=400, detail="use /distributions for distribution charts")
    if req.strategy is StrategyType.transform_result:
        raise HTTPException(status_code=400, detail="use /transforms for transform charts")
    return req.strategy
