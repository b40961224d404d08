"""
Distribution routes for weekday and hourly bucket frequency charts.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.requests import DistributionRequest
from api.responses import DistributionModel, DistributionResponse
from api.routes.exception import handle_exceptions
from engine.distribution import BucketDistributionStrategy
from engine.enums import BucketKind
from services.computation_service import computation_service

router = APIRouter(tags=["Distributions"])


async def _distribution(req: DistributionRequest, kind: BucketKind) -> DistributionResponse:
    strategy = BucketDistributionStrategy(
        req.series.to_series(),
        req.time_range,
        kind,
        interval_count=req.interval_count,
    )
    result = await computation_service.compute(strategy)
    return DistributionResponse(result=DistributionModel.from_result(result) if result is not None else None)


@router.post("/distributions/weekly", summary="Value distribution per day of week")
@handle_exceptions
async def weekly_distribution(req: DistributionRequest) -> DistributionResponse:
    return await _distribution(req, BucketKind.weekday)


@router.post("/distributions/hourly", summary="Value distribution per hour of day")
@handle_exceptions
async def hourly_distribution(req: DistributionRequest) -> DistributionResponse:
    return await _distribution(req, BucketKind.hour)
