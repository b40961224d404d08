"""
Chart routes computing single, paired, normalized and multi-metric chart series.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.requests import ChartRequest, WeekdayTrendRequest
from api.responses import ChartResponse, ChartResultModel
from api.routes.common import chart_parameters, resolve_strategy_type
from api.routes.exception import handle_exceptions
from engine.strategies import WeekdayTrendStrategy
from services.computation_service import computation_service

router = APIRouter(tags=["Charts"])


@router.post("/charts/compute", summary="Compute a chart for one or more metric series")
@handle_exceptions
async def compute_chart(req: ChartRequest) -> ChartResponse:
    strategy_type = resolve_strategy_type(req)
    result = await computation_service.compute_chart(strategy_type, chart_parameters(req))
    return ChartResponse(result=ChartResultModel.from_result(result) if result is not None else None)


@router.post("/charts/weekday-trend", summary="Daily averages grouped by day of week")
@handle_exceptions
async def weekday_trend(req: WeekdayTrendRequest) -> ChartResponse:
    strategy = WeekdayTrendStrategy(req.series.to_series(), req.time_range)
    result = await computation_service.compute(strategy)
    return ChartResponse(result=ChartResultModel.from_result(result) if result is not None else None)
