"""
Normalized comparison of two series on the union of their timestamps.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from config import DEFAULT_LEFT_LABEL, DEFAULT_RIGHT_LABEL
from engine.alignment import align_by_union
from engine.arithmetic import normalize_pair
from engine.enums import NormalizationMode
from engine.series import SampleSource, TimeRange, filter_and_order
from engine.strategies.base import ChartStrategy, require
from engine.strategies.result import ComputationResult
from engine.strategies.single import label_of

log = logging.getLogger(__name__)


class NormalizedStrategy(ChartStrategy):

    def __init__(
        self,
        left: SampleSource,
        right: SampleSource,
        time_range: TimeRange,
        mode: Optional[NormalizationMode] = None,
        left_label: Optional[str] = None,
        right_label: Optional[str] = None,
        **collaborators: Any,
    ) -> None:
        super().__init__(time_range, **collaborators)
        self.left = require(left, "left series")
        self.right = require(right, "right series")
        self.mode = NormalizationMode(mode) if mode is not None else NormalizationMode.default()
        self.left_label = label_of(left, left_label, DEFAULT_LEFT_LABEL)
        self.right_label = label_of(right, right_label, DEFAULT_RIGHT_LABEL)

    @property
    def primary_label(self) -> str:
        return f"{self.left_label} ~ {self.right_label}"

    @property
    def secondary_label(self) -> str:
        if self.mode is NormalizationMode.relative_to_max:
            return f"{self.right_label} (baseline)"
        return self.right_label

    def compute(self) -> Optional[ComputationResult]:
        if not self._range_is_valid():
            return None
        lhs = filter_and_order(self.left, self.time_range)
        rhs = filter_and_order(self.right, self.time_range)
        aligned = align_by_union(lhs, rhs)
        if aligned.is_empty:
            log.debug("normalized: both series empty in range")
            return None

        smooth_left = self._smooth(lhs, aligned.timestamps)
        smooth_right = self._smooth(rhs, aligned.timestamps)
        raw_left, raw_right = normalize_pair(aligned.left, aligned.right, self.mode)
        smoothed_left, smoothed_right = normalize_pair(smooth_left, smooth_right, self.mode)

        return self._result(
            aligned.timestamps,
            raw_left,
            smoothed_left,
            self.units.resolve_pair(lhs, rhs, self.left, self.right),
            secondary_raw=raw_right,
            secondary_smoothed=smoothed_right,
        )
