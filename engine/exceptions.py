"""
Exceptions raised by the computation engine for contract violations.

Data-shape problems (empty input, inverted ranges, zero divisors) never raise;
they surface as ``None`` results or NaN values. The types below are reserved
for mistakes in how a caller wires the engine together.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class TrendlineError(Exception):
    """Base class for all engine errors."""


class StrategyConfigurationError(TrendlineError, ValueError):
    """Raised when a strategy is constructed with missing or inconsistent arguments."""


class UnknownOperationError(TrendlineError, KeyError):
    """Raised when a transform operation id is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown operation"
