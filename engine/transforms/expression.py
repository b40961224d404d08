"""
Transform expression trees over metric operands.

An expression is either a metric leaf referring to the i-th input series or
an operation applied to sub-expressions. Evaluation runs element-wise over
series that have already been aligned to the same timestamps.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import DEFAULT_METRIC_LABEL
from engine.transforms import operations

TRANSFORM_LABEL_PREFIX = "[Transform] "


@dataclass(frozen=True)
class Expression:
    metric_index: Optional[int] = None
    operation: Optional[str] = None
    operands: Tuple[Expression, ...] = ()

    @classmethod
    def metric(cls, index: int) -> Expression:
        return cls(metric_index=index)

    @classmethod
    def apply(cls, operation: str, *operands: Expression) -> Expression:
        return cls(operation=operation, operands=tuple(operands))

    @property
    def is_metric(self) -> bool:
        return self.operation is None

    def metric_indices(self) -> List[int]:
        if self.is_metric:
            return [self.metric_index]
        out: List[int] = []
        for operand in self.operands:
            for idx in operand.metric_indices():
                if idx not in out:
                    out.append(idx)
        return out


def evaluate(expression: Expression, series_values: Sequence[Sequence[float]]) -> np.ndarray:
    lengths = {len(values) for values in series_values}
    if len(lengths) > 1:
        raise ValueError(f"all series must be aligned to the same length, got {sorted(lengths)}")
    return _evaluate(expression, series_values)


def _evaluate(expression: Expression, series_values: Sequence[Sequence[float]]) -> np.ndarray:
    if expression.is_metric:
        idx = expression.metric_index
        if idx is None or not 0 <= idx < len(series_values):
            raise ValueError(f"metric index {idx} out of range for {len(series_values)} series")
        return np.asarray(series_values[idx], dtype=float)
    op = operations.get(expression.operation)
    return op.execute(*[_evaluate(operand, series_values) for operand in expression.operands])


def label(expression: Expression, metric_labels: Sequence[str]) -> str:
    if expression.is_metric:
        idx = expression.metric_index
        if idx is not None and 0 <= idx < len(metric_labels):
            return metric_labels[idx]
        return f"{DEFAULT_METRIC_LABEL} {(idx or 0) + 1}"
    op = operations.get(expression.operation)
    parts = []
    for operand in expression.operands:
        text = label(operand, metric_labels)
        # group nested binary operands
        if op.arity == 2 and not operand.is_metric and len(operand.operands) == 2:
            text = f"({text})"
        parts.append(text)
    return op.label(*parts)


def transform_label(expression: Expression, metric_labels: Sequence[str]) -> str:
    text = label(expression, metric_labels)
    if expression.is_metric:
        return text
    return TRANSFORM_LABEL_PREFIX + text
