"""
Registry of unary and binary transform operations applied element-wise to aligned metric values.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

import numpy as np

from engine.arithmetic import apply_binary, apply_unary, ratio
from engine.exceptions import StrategyConfigurationError, UnknownOperationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformOperation:
    id: str
    display_name: str
    arity: int
    func: Callable[..., np.ndarray]
    symbol: str

    def execute(self, *operands: Sequence[float]) -> np.ndarray:
        if len(operands) != self.arity:
            raise StrategyConfigurationError(
                f"operation '{self.id}' takes {self.arity} operand(s), got {len(operands)}"
            )
        if self.arity == 1:
            return apply_unary(operands[0], self.func)
        return apply_binary(operands[0], operands[1], self.func)

    def label(self, *operand_labels: str) -> str:
        if self.arity == 1:
            return f"{self.symbol}({operand_labels[0]})"
        return f"{operand_labels[0]} {self.symbol} {operand_labels[1]}"


_registry: Dict[str, TransformOperation] = {}
_lock = threading.Lock()


def register(operation: TransformOperation) -> TransformOperation:
    if operation.arity not in (1, 2):
        raise StrategyConfigurationError(f"unsupported arity {operation.arity} for '{operation.id}'")
    with _lock:
        if operation.id in _registry:
            log.debug("replacing transform operation %s", operation.id)
        _registry[operation.id] = operation
    return operation


def get(operation_id: str) -> TransformOperation:
    with _lock:
        operation = _registry.get(operation_id)
    if operation is None:
        raise UnknownOperationError(f"unknown transform operation '{operation_id}'")
    return operation


def operations() -> List[TransformOperation]:
    with _lock:
        return list(_registry.values())


def unary_operations() -> List[TransformOperation]:
    return [op for op in operations() if op.arity == 1]


def binary_operations() -> List[TransformOperation]:
    return [op for op in operations() if op.arity == 2]


register(TransformOperation("log", "Logarithm", 1, np.log, "log"))
register(TransformOperation("sqrt", "Square Root", 1, np.sqrt, "√"))
register(TransformOperation("add", "Add", 2, np.add, "+"))
register(TransformOperation("subtract", "Subtract", 2, np.subtract, "-"))
register(TransformOperation("multiply", "Multiply", 2, np.multiply, "*"))
register(TransformOperation("divide", "Divide", 2, lambda a, b: ratio(a, b), "/"))
