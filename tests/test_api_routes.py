"""
Test Suite for API Routes - charts, distributions, transforms and health

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from api.requests import (
    ChartRequest,
    DistributionRequest,
    SamplePayload,
    SeriesPayload,
    TransformRequest,
    WeekdayTrendRequest,
)
from api.routes import charts as charts_route
from api.routes import distributions as distributions_route
from api.routes import health as health_route
from api.routes import transforms as transforms_route

T = datetime(2026, 3, 2)
END = T + timedelta(days=2)


def _payload(values, label=None, unit=None, step=timedelta(hours=1)):
    return SeriesPayload(
        label=label,
        unit=unit,
        samples=[SamplePayload(timestamp=T + i * step, value=v) for i, v in enumerate(values)],
    )


@pytest.mark.asyncio
async def test_compute_chart_selects_single_metric():
    req = ChartRequest(start=T, end=END, series=[_payload([1.0, 2.0, None, 4.0], label="cpu", unit="%")])
    resp = await charts_route.compute_chart(req)
    assert resp.result.primary_label == "cpu"
    assert resp.result.unit == "%"
    assert resp.result.primary_raw == [1.0, 2.0, 4.0]
    assert resp.result.secondary_raw is None


@pytest.mark.asyncio
async def test_compute_chart_explicit_difference():
    req = ChartRequest(
        start=T,
        end=END,
        strategy="difference",
        series=[_payload([5.0, 6.0], label="a"), _payload([1.0, 1.0], label="b")],
    )
    resp = await charts_route.compute_chart(req)
    assert resp.result.primary_raw == [4.0, 5.0]
    assert resp.result.primary_label == "a - b"


@pytest.mark.asyncio
async def test_compute_chart_multi_metric_by_count():
    req = ChartRequest(start=T, end=END, series=[_payload([1.0]), _payload([2.0]), _payload([3.0])])
    resp = await charts_route.compute_chart(req)
    assert len(resp.result.series) == 3


@pytest.mark.asyncio
async def test_compute_chart_without_data_returns_empty_result():
    req = ChartRequest(start=T, end=END, series=[_payload([])])
    resp = await charts_route.compute_chart(req)
    assert resp.result is None


@pytest.mark.asyncio
async def test_compute_chart_rejects_distribution_strategy():
    req = ChartRequest(start=T, end=END, strategy="weekly_distribution", series=[_payload([1.0])])
    with pytest.raises(HTTPException) as exc:
        await charts_route.compute_chart(req)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_compute_chart_missing_series_is_client_error():
    req = ChartRequest(start=T, end=END, strategy="ratio", series=[_payload([1.0])])
    with pytest.raises(HTTPException) as exc:
        await charts_route.compute_chart(req)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_weekday_trend_route():
    req = WeekdayTrendRequest(start=T, end=END, series=_payload([2.0, 4.0, 9.0], step=timedelta(hours=12)))
    resp = await charts_route.weekday_trend(req)
    trend = resp.result.weekday_trend
    assert [p.value for p in trend.points_by_weekday[0]] == [3.0]
    assert [p.value for p in trend.points_by_weekday[1]] == [9.0]


@pytest.mark.asyncio
async def test_weekly_distribution_route():
    req = DistributionRequest(start=T, end=END, series=_payload([0.0, 10.0, 5.0], unit="ms"), interval_count=2)
    resp = await distributions_route.weekly_distribution(req)
    assert resp.result.counts[0] == 3
    assert resp.result.labels[0] == "Mon"
    assert resp.result.bins == [(0.0, 5.0), (5.0, 10.0)]
    assert resp.result.normalized_frequencies[0] == {0: 0.5, 1: 1.0}
    assert resp.result.unit == "ms"


@pytest.mark.asyncio
async def test_hourly_distribution_route_without_data():
    req = DistributionRequest(start=T, end=END, series=_payload([]))
    resp = await distributions_route.hourly_distribution(req)
    assert resp.result is None


@pytest.mark.asyncio
async def test_list_operations():
    ops = await transforms_route.list_operations()
    by_id = {op.id: op for op in ops}
    assert by_id["log"].arity == 1
    assert by_id["divide"].symbol == "/"


@pytest.mark.asyncio
async def test_apply_unary_transform():
    req = TransformRequest(start=T, end=END, operation="sqrt", series=[_payload([4.0, 9.0], label="v")])
    resp = await transforms_route.apply_transform(req)
    assert resp.values == [2.0, 3.0]
    assert resp.label == "[Transform] √(v)"
    assert resp.result.primary_raw == [2.0, 3.0]


@pytest.mark.asyncio
async def test_apply_binary_transform():
    req = TransformRequest(
        start=T,
        end=END,
        operation="divide",
        series=[_payload([4.0, 9.0], unit="MB"), _payload([2.0, 0.0], unit="s")],
    )
    resp = await transforms_route.apply_transform(req)
    assert resp.values[0] == 2.0
    assert resp.result.unit == "MB/s"


@pytest.mark.asyncio
async def test_unknown_transform_is_not_found():
    req = TransformRequest(start=T, end=END, operation="cube", series=[_payload([1.0])])
    with pytest.raises(HTTPException) as exc:
        await transforms_route.apply_transform(req)
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_transform_arity_mismatch():
    req = TransformRequest(start=T, end=END, operation="add", series=[_payload([1.0])])
    with pytest.raises(HTTPException) as exc:
        await transforms_route.apply_transform(req)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_health_reports_cache():
    payload = await health_route.health()
    assert payload["status"] == "ok"
    assert "entries" in payload["timeline_cache"]
