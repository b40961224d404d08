"""
Computation service that runs chart strategies off the event loop with bounded parallelism.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Protocol, Sequence

from config import settings
from engine.enums import StrategyType
from engine.strategies import StrategyParameters, create_strategy

log = logging.getLogger(__name__)


class Computable(Protocol):
    def compute(self) -> Any: ...


class ComputationService:
    def __init__(self, max_parallel: Optional[int] = None) -> None:
        limit = max_parallel if max_parallel is not None else settings.max_parallel_computations
        self._semaphore = asyncio.Semaphore(max(1, int(limit)))

    async def compute(self, strategy: Optional[Computable]) -> Optional[Any]:
        """Run ``strategy.compute()`` on a worker thread.

        A failing strategy is logged and reported as ``None`` so the caller
        clears the chart instead of propagating the error.
        """
        if strategy is None:
            log.warning("no strategy supplied, nothing to compute")
            return None
        async with self._semaphore:
            try:
                return await asyncio.to_thread(strategy.compute)
            except Exception:
                log.exception("%s computation failed", type(strategy).__name__)
                return None

    async def compute_many(self, strategies: Sequence[Optional[Computable]]) -> List[Optional[Any]]:
        return list(await asyncio.gather(*(self.compute(s) for s in strategies)))

    async def compute_chart(self, strategy_type: StrategyType, params: StrategyParameters) -> Optional[Any]:
        # construction errors are contract violations and propagate to the caller
        strategy = create_strategy(strategy_type, params)
        return await self.compute(strategy)


computation_service = ComputationService()
