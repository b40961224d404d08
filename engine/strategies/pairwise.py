"""
Two-series strategies built on index alignment: combined overlay, difference
and ratio.

Both inputs are filtered to the range and ordered before the i-th sample of
one side is paired with the i-th sample of the other; the left side supplies
the timestamps. The difference and ratio series are smoothed from the computed
values rather than from either input.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from config import DEFAULT_LEFT_LABEL, DEFAULT_RIGHT_LABEL
from engine.alignment import AlignedSeries, align_by_index
from engine.arithmetic import difference, ratio
from engine.series import Sample, SampleSource, TimeRange, filter_and_order, samples_from_values
from engine.strategies.base import ChartStrategy, require
from engine.strategies.result import ComputationResult
from engine.strategies.single import label_of

log = logging.getLogger(__name__)


class PairStrategy(ChartStrategy):

    def __init__(
        self,
        left: SampleSource,
        right: SampleSource,
        time_range: TimeRange,
        left_label: Optional[str] = None,
        right_label: Optional[str] = None,
        **collaborators: Any,
    ) -> None:
        super().__init__(time_range, **collaborators)
        self.left = require(left, "left series")
        self.right = require(right, "right series")
        self.left_label = label_of(left, left_label, DEFAULT_LEFT_LABEL)
        self.right_label = label_of(right, right_label, DEFAULT_RIGHT_LABEL)

    def _prepare(self) -> Optional[Tuple[List[Sample], List[Sample], AlignedSeries]]:
        if not self._range_is_valid():
            return None
        lhs = filter_and_order(self.left, self.time_range)
        rhs = filter_and_order(self.right, self.time_range)
        aligned = align_by_index(lhs, rhs)
        if aligned.is_empty:
            log.debug("%s: no aligned points (%d left, %d right)", type(self).__name__, len(lhs), len(rhs))
            return None
        return lhs, rhs, aligned


class CombinedMetricStrategy(PairStrategy):

    @property
    def primary_label(self) -> str:
        return self.left_label

    @property
    def secondary_label(self) -> str:
        return self.right_label

    def compute(self) -> Optional[ComputationResult]:
        prepared = self._prepare()
        if prepared is None:
            return None
        lhs, rhs, aligned = prepared
        return self._result(
            aligned.timestamps,
            aligned.left,
            self._smooth(lhs, aligned.timestamps),
            self.units.resolve_pair(lhs, rhs, self.left, self.right),
            secondary_raw=aligned.right,
            secondary_smoothed=self._smooth(rhs, aligned.timestamps),
        )


class DifferenceStrategy(PairStrategy):

    @property
    def primary_label(self) -> str:
        return f"{self.left_label} - {self.right_label}"

    def compute(self) -> Optional[ComputationResult]:
        prepared = self._prepare()
        if prepared is None:
            return None
        lhs, rhs, aligned = prepared
        values = difference(aligned.left, aligned.right)
        smoothed = self._smooth(samples_from_values(aligned.timestamps, values), aligned.timestamps)
        return self._result(
            aligned.timestamps,
            values,
            smoothed,
            self.units.resolve_pair(lhs, rhs, self.left, self.right),
        )


class RatioStrategy(PairStrategy):

    @property
    def primary_label(self) -> str:
        return f"{self.left_label} / {self.right_label}"

    def compute(self) -> Optional[ComputationResult]:
        prepared = self._prepare()
        if prepared is None:
            return None
        lhs, rhs, aligned = prepared
        values = ratio(aligned.left, aligned.right)
        smoothed = self._smooth(samples_from_values(aligned.timestamps, values), aligned.timestamps)
        return self._result(
            aligned.timestamps,
            values,
            smoothed,
            self.units.resolve_ratio(lhs, rhs, self.left, self.right),
        )
