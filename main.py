"""
Entry point for the Trendline Chart Computation API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.routes import router
from config import settings
from engine.timeline import timeline_service
from engine.transforms import operations

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log.info(
        "Trendline starting: %d transform operations, timeline cache %s, %d parallel computations",
        len(operations.operations()),
        "enabled" if timeline_service.cache_enabled else "disabled",
        settings.max_parallel_computations,
    )
    try:
        yield
    finally:
        timeline_service.clear_cache()
        log.info("Trendline stopped")


app = FastAPI(
    title="Trendline Chart Computation Engine",
    description="Aligned, smoothed and bucketed chart series computed from irregular metric samples.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


@app.get("/api/v1/ready", tags=["health"], summary="Readiness probe")
async def ready() -> JSONResponse:
    return JSONResponse(status_code=200, content={"ready": True})


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
