"""
Transform computation: applies a registered operation or an expression tree to one or more metric series and yields the transformed values together with the samples that position them on the timeline.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from config import DEFAULT_METRIC_LABEL
from engine.alignment import align_by_intersection
from engine.exceptions import StrategyConfigurationError
from engine.series import (
    MetricSeries,
    Sample,
    SampleSource,
    TimeRange,
    filter_and_order,
    first_value_by_timestamp,
    order_samples,
    values_of,
)
from engine.strategies.transform_result import TransformResultStrategy
from engine.transforms import operations
from engine.transforms.expression import TRANSFORM_LABEL_PREFIX, Expression, evaluate, transform_label
from engine.units import unit_resolver

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformComputation:
    samples: Tuple[Sample, ...]
    values: Tuple[float, ...]
    operation: str
    label: str
    unit: Optional[str] = None

    @property
    def series(self) -> MetricSeries:
        return MetricSeries(self.samples, label=self.label, unit=self.unit)


def _labels_of(sources: Sequence[SampleSource], labels: Optional[Sequence[str]]) -> List[str]:
    out = []
    for i, source in enumerate(sources):
        given = labels[i] if labels and i < len(labels) else None
        out.append(given or getattr(source, "label", None) or f"{DEFAULT_METRIC_LABEL} {i + 1}")
    return out


class TransformService:

    def _prepare(self, source: SampleSource, time_range: Optional[TimeRange]) -> List[Sample]:
        if time_range is None:
            return order_samples(source)
        return filter_and_order(source, time_range)

    def _build(
        self,
        timestamps: Sequence[datetime],
        values: np.ndarray,
        operation: str,
        label: str,
        unit: Optional[str],
    ) -> Optional[TransformComputation]:
        if len(timestamps) == 0:
            log.debug("transform %s: no input samples", operation)
            return None
        samples = tuple(
            Sample(ts, float(v) if np.isfinite(v) else None, unit)
            for ts, v in zip(timestamps, values)
        )
        return TransformComputation(
            samples=samples,
            values=tuple(float(v) for v in values),
            operation=operation,
            label=label,
            unit=unit,
        )

    def compute_unary(
        self,
        series: SampleSource,
        operation_id: str,
        time_range: Optional[TimeRange] = None,
        label: Optional[str] = None,
    ) -> Optional[TransformComputation]:
        op = operations.get(operation_id)
        if op.arity != 1:
            raise StrategyConfigurationError(f"operation '{operation_id}' is not unary")
        if time_range is not None and not time_range.is_valid:
            return None
        samples = self._prepare(series, time_range)
        values = op.execute(values_of(samples))
        name = _labels_of([series], [label] if label else None)[0]
        return self._build(
            [s.timestamp for s in samples],
            values,
            op.id,
            TRANSFORM_LABEL_PREFIX + op.label(name),
            unit_resolver.resolve(series),
        )

    def compute_binary(
        self,
        left: SampleSource,
        right: SampleSource,
        operation_id: str,
        time_range: Optional[TimeRange] = None,
        labels: Optional[Sequence[str]] = None,
    ) -> Optional[TransformComputation]:
        op = operations.get(operation_id)
        if op.arity != 2:
            raise StrategyConfigurationError(f"operation '{operation_id}' is not binary")
        if time_range is not None and not time_range.is_valid:
            return None
        aligned = align_by_intersection(self._prepare(left, time_range), self._prepare(right, time_range))
        values = op.execute(aligned.left, aligned.right)
        names = _labels_of([left, right], labels)
        unit = unit_resolver.resolve_ratio(left, right) if op.id == "divide" else unit_resolver.resolve_pair(left, right)
        return self._build(
            aligned.timestamps,
            values,
            op.id,
            TRANSFORM_LABEL_PREFIX + op.label(*names),
            unit,
        )

    def compute_expression(
        self,
        expression: Expression,
        series: Sequence[SampleSource],
        time_range: Optional[TimeRange] = None,
        labels: Optional[Sequence[str]] = None,
    ) -> Optional[TransformComputation]:
        """Evaluate ``expression`` on the timestamps shared by every referenced series."""
        if time_range is not None and not time_range.is_valid:
            return None
        prepared = [self._prepare(s, time_range) for s in series]
        indices = expression.metric_indices()
        for idx in indices:
            if idx is None or not 0 <= idx < len(prepared):
                raise StrategyConfigurationError(f"expression references missing series {idx}")

        lookups: Dict[int, Dict[datetime, float]] = {i: first_value_by_timestamp(prepared[i]) for i in indices}
        shared = sorted(set.intersection(*(set(lookups[i]) for i in indices))) if indices else []
        series_values = [
            [lookups[i][ts] for ts in shared] if i in lookups else [float("nan")] * len(shared)
            for i in range(len(prepared))
        ]
        values = evaluate(expression, series_values)
        operation = expression.operation or "identity"
        return self._build(
            shared,
            values,
            operation,
            transform_label(expression, _labels_of(series, labels)),
            unit_resolver.resolve_many(series[i] for i in indices),
        )

    def to_strategy(self, computation: TransformComputation, time_range: TimeRange, **collaborators: Any) -> TransformResultStrategy:
        return TransformResultStrategy(
            computation.series,
            computation.values,
            time_range,
            label=computation.label,
            **collaborators,
        )


transform_service = TransformService()
