"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import date as Date, datetime
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.distribution import BucketDistributionResult, shading_cells
from engine.enums import BucketKind, TickInterval
from engine.strategies import ComputationResult, SeriesResult, WeekdayTrendResult
from engine.transforms import TransformComputation, TransformOperation


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        obj = float(obj)
    if isinstance(obj, np.ndarray):
        return _coerce(obj.tolist())
    # JSON has no NaN; missing numbers go out as null
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class SeriesResultModel(NpModel):

    series_id: str
    display_name: str
    timestamps: List[datetime]
    raw_values: List[Optional[float]]
    smoothed: List[Optional[float]]
    unit: Optional[str] = None

    @classmethod
    def from_result(cls, result: SeriesResult) -> SeriesResultModel:
        return cls(
            series_id=result.series_id,
            display_name=result.display_name,
            timestamps=list(result.timestamps),
            raw_values=list(result.raw_values),
            smoothed=list(result.smoothed),
            unit=result.unit,
        )


class WeekdayTrendPointModel(NpModel):

    date: Date
    value: float
    sample_count: int


class WeekdayTrendModel(NpModel):

    points_by_weekday: List[List[WeekdayTrendPointModel]]
    global_min: float
    global_max: float
    unit: Optional[str] = None

    @classmethod
    def from_result(cls, result: WeekdayTrendResult) -> WeekdayTrendModel:
        return cls(
            points_by_weekday=[
                [WeekdayTrendPointModel(date=p.date, value=p.value, sample_count=p.sample_count) for p in points]
                for points in result.points_by_weekday
            ],
            global_min=result.global_min,
            global_max=result.global_max,
            unit=result.unit,
        )


class ChartResultModel(NpModel):

    timestamps: List[datetime]
    primary_raw: List[Optional[float]]
    primary_smoothed: List[Optional[float]]
    secondary_raw: Optional[List[Optional[float]]] = None
    secondary_smoothed: Optional[List[Optional[float]]] = None
    interval_indices: List[int]
    normalized_intervals: List[datetime]
    tick_interval: TickInterval
    date_range_seconds: float
    unit: Optional[str] = None
    primary_label: Optional[str] = None
    secondary_label: Optional[str] = None
    series: Optional[List[SeriesResultModel]] = None
    weekday_trend: Optional[WeekdayTrendModel] = None

    @classmethod
    def from_result(cls, result: ComputationResult) -> ChartResultModel:
        return cls(
            timestamps=list(result.timestamps),
            primary_raw=list(result.primary_raw),
            primary_smoothed=list(result.primary_smoothed),
            secondary_raw=list(result.secondary_raw) if result.secondary_raw is not None else None,
            secondary_smoothed=list(result.secondary_smoothed) if result.secondary_smoothed is not None else None,
            interval_indices=list(result.interval_indices),
            normalized_intervals=list(result.normalized_intervals),
            tick_interval=result.tick_interval,
            date_range_seconds=result.date_range.total_seconds(),
            unit=result.unit,
            primary_label=result.primary_label,
            secondary_label=result.secondary_label,
            series=[SeriesResultModel.from_result(s) for s in result.series] if result.series else None,
            weekday_trend=WeekdayTrendModel.from_result(result.weekday_trend) if result.weekday_trend else None,
        )


class ChartResponse(NpModel):

    result: Optional[ChartResultModel] = None


class ShadingCellModel(NpModel):

    bucket: int
    bin_index: int
    lower: float
    upper: float
    intensity: float


class DistributionModel(NpModel):

    kind: BucketKind
    labels: List[str]
    mins: List[Optional[float]]
    maxs: List[Optional[float]]
    ranges: List[Optional[float]]
    counts: List[int]
    global_min: Optional[float]
    global_max: Optional[float]
    bins: List[Tuple[float, float]]
    bin_size: float
    frequencies: Dict[int, Dict[int, int]]
    normalized_frequencies: Dict[int, Dict[int, float]]
    shading: List[ShadingCellModel] = Field(default_factory=list)
    unit: Optional[str] = None

    @classmethod
    def from_result(cls, result: BucketDistributionResult) -> DistributionModel:
        return cls(
            kind=result.kind,
            labels=list(result.labels),
            mins=list(result.mins),
            maxs=list(result.maxs),
            ranges=list(result.ranges),
            counts=list(result.counts),
            global_min=result.global_min,
            global_max=result.global_max,
            bins=list(result.bins),
            bin_size=result.bin_size,
            frequencies=result.frequencies_per_bucket,
            normalized_frequencies=result.normalized_frequencies_per_bucket,
            shading=[
                ShadingCellModel(
                    bucket=c.bucket, bin_index=c.bin_index, lower=c.lower, upper=c.upper, intensity=c.intensity
                )
                for c in shading_cells(result)
            ],
            unit=result.unit,
        )


class DistributionResponse(NpModel):

    result: Optional[DistributionModel] = None


class TransformOperationModel(NpModel):

    id: str
    display_name: str
    arity: int
    symbol: str

    @classmethod
    def from_operation(cls, op: TransformOperation) -> TransformOperationModel:
        return cls(id=op.id, display_name=op.display_name, arity=op.arity, symbol=op.symbol)


class TransformResponse(NpModel):

    operation: str
    label: Optional[str] = None
    timestamps: List[datetime] = Field(default_factory=list)
    values: List[Optional[float]] = Field(default_factory=list)
    result: Optional[ChartResultModel] = None

    @classmethod
    def from_computation(
        cls,
        operation: str,
        computation: Optional[TransformComputation],
        result: Optional[ComputationResult],
    ) -> TransformResponse:
        if computation is None:
            return cls(operation=operation)
        return cls(
            operation=operation,
            label=computation.label,
            timestamps=[s.timestamp for s in computation.samples],
            values=list(computation.values),
            result=ChartResultModel.from_result(result) if result is not None else None,
        )
