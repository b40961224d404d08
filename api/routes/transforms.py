"""
Transform routes: list the registered operations and chart the result of applying one to one or two metric series.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
from typing import List

from fastapi import APIRouter, HTTPException

from api.requests import TransformRequest
from api.responses import TransformOperationModel, TransformResponse
from api.routes.exception import handle_exceptions
from engine.transforms import operations, transform_service
from services.computation_service import computation_service

router = APIRouter(tags=["Transforms"])


@router.get("/transforms/operations", summary="Registered transform operations")
@handle_exceptions
async def list_operations() -> List[TransformOperationModel]:
    return [TransformOperationModel.from_operation(op) for op in operations.operations()]


@router.post("/transforms", summary="Apply a transform operation and chart the result")
@handle_exceptions
async def apply_transform(req: TransformRequest) -> TransformResponse:
    op = operations.get(req.operation)
    if op.arity != len(req.series):
        raise HTTPException(
            status_code=400,
            detail=f"operation '{op.id}' takes {op.arity} series, got {len(req.series)}",
        )

    series = [s.to_series() for s in req.series]
    if op.arity == 1:
        computation = await asyncio.to_thread(
            transform_service.compute_unary, series[0], op.id, req.time_range
        )
    else:
        computation = await asyncio.to_thread(
            transform_service.compute_binary, series[0], series[1], op.id, req.time_range
        )

    result = None
    if computation is not None:
        result = await computation_service.compute(transform_service.to_strategy(computation, req.time_range))
    return TransformResponse.from_computation(op.id, computation, result)
