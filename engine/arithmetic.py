"""
Element-wise arithmetic over aligned value arrays: binary and unary operations
with NaN propagation, difference, ratio and the three normalization modes.

Every function returns a new float array. Any non-finite operand or result
becomes NaN; nothing here raises for zero divisors or degenerate input.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Callable, Sequence, Tuple

import numpy as np

from engine.enums import NormalizationMode

BinaryOp = Callable[[np.ndarray, np.ndarray], np.ndarray]
UnaryOp = Callable[[np.ndarray], np.ndarray]


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def apply_binary(left: Sequence[float], right: Sequence[float], op: BinaryOp) -> np.ndarray:
    lhs = _as_array(left)
    rhs = _as_array(right)
    count = min(len(lhs), len(rhs))
    lhs, rhs = lhs[:count], rhs[:count]
    with np.errstate(all="ignore"):
        out = np.asarray(op(lhs, rhs), dtype=float)
    bad = ~np.isfinite(lhs) | ~np.isfinite(rhs) | ~np.isfinite(out)
    out[bad] = np.nan
    return out


def apply_unary(values: Sequence[float], op: UnaryOp) -> np.ndarray:
    arr = _as_array(values)
    with np.errstate(all="ignore"):
        out = np.asarray(op(arr), dtype=float)
    out[~np.isfinite(arr) | ~np.isfinite(out)] = np.nan
    return out


def difference(left: Sequence[float], right: Sequence[float]) -> np.ndarray:
    return apply_binary(left, right, np.subtract)


def _safe_divide(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    return np.where(rhs == 0, np.nan, lhs / np.where(rhs == 0, 1.0, rhs))


def ratio(left: Sequence[float], right: Sequence[float]) -> np.ndarray:
    return apply_binary(left, right, _safe_divide)


def _valid(arr: np.ndarray) -> np.ndarray:
    return arr[np.isfinite(arr)]


def zero_to_one(values: Sequence[float]) -> np.ndarray:
    """Min-max scaling; a constant or empty series maps to all NaN."""
    arr = _as_array(values)
    valid = _valid(arr)
    if valid.size == 0:
        return np.full(arr.shape, np.nan)
    lo, hi = float(valid.min()), float(valid.max())
    if hi == lo:
        return np.full(arr.shape, np.nan)
    return apply_unary(arr, lambda a: (a - lo) / (hi - lo))


def percentage_of_max(values: Sequence[float]) -> np.ndarray:
    """Each value as a fraction of the series maximum."""
    arr = _as_array(values)
    valid = _valid(arr)
    if valid.size == 0:
        return np.full(arr.shape, np.nan)
    hi = float(valid.max())
    if hi == 0:
        return np.full(arr.shape, np.nan)
    return apply_unary(arr, lambda a: a / hi)


def relative_to_max(left: Sequence[float], right: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Both series as a fraction of the right (baseline) series maximum."""
    lhs = _as_array(left)
    rhs = _as_array(right)
    valid = _valid(rhs)
    if valid.size == 0 or float(valid.max()) == 0:
        return np.full(lhs.shape, np.nan), np.full(rhs.shape, np.nan)
    hi = float(valid.max())
    return apply_unary(lhs, lambda a: a / hi), apply_unary(rhs, lambda a: a / hi)


def normalize_pair(
    left: Sequence[float],
    right: Sequence[float],
    mode: NormalizationMode,
) -> Tuple[np.ndarray, np.ndarray]:
    if mode is NormalizationMode.zero_to_one:
        return zero_to_one(left), zero_to_one(right)
    if mode is NormalizationMode.percentage_of_max:
        return percentage_of_max(left), percentage_of_max(right)
    return relative_to_max(left, right)
