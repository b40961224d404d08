"""
Unit resolution for computed chart series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Iterable, Optional

from engine.series import MetricSeries, SampleSource


def _clean(unit: Optional[str]) -> Optional[str]:
    if unit is None:
        return None
    unit = unit.strip()
    return unit or None


def series_unit(source: Optional[SampleSource]) -> Optional[str]:
    if isinstance(source, MetricSeries):
        return _clean(source.unit)
    return None


def resolve(source: Optional[SampleSource], fallback: Optional[SampleSource] = None) -> Optional[str]:
    """First non-blank sample unit, falling back to the series unit.

    Strategies pass the filtered samples they chart as ``source`` and the
    original series as ``fallback``; the fallback only contributes its
    series-level unit.
    """
    if source is not None:
        for sample in source:
            unit = _clean(sample.unit)
            if unit is not None:
                return unit
    return series_unit(source) or series_unit(fallback)


def resolve_pair(
    left: Optional[SampleSource],
    right: Optional[SampleSource],
    left_fallback: Optional[SampleSource] = None,
    right_fallback: Optional[SampleSource] = None,
) -> Optional[str]:
    return resolve(left, left_fallback) or resolve(right, right_fallback)


def resolve_ratio(
    left: Optional[SampleSource],
    right: Optional[SampleSource],
    left_fallback: Optional[SampleSource] = None,
    right_fallback: Optional[SampleSource] = None,
) -> Optional[str]:
    lhs = resolve(left, left_fallback)
    rhs = resolve(right, right_fallback)
    if lhs is None or rhs is None:
        return None
    return f"{lhs}/{rhs}"


def resolve_many(sources: Iterable[Optional[SampleSource]]) -> Optional[str]:
    for source in sources:
        unit = resolve(source)
        if unit is not None:
            return unit
    return None


class UnitResolver:
    """Unit collaborator handed to the computation strategies."""

    series_unit = staticmethod(series_unit)
    resolve = staticmethod(resolve)
    resolve_pair = staticmethod(resolve_pair)
    resolve_ratio = staticmethod(resolve_ratio)
    resolve_many = staticmethod(resolve_many)


unit_resolver = UnitResolver()
