"""
Metric transforms: operation registry, expression trees and the transform computation service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.transforms import operations
from engine.transforms.expression import Expression, evaluate, label, transform_label
from engine.transforms.operations import TransformOperation
from engine.transforms.service import TransformComputation, TransformService, transform_service

__all__ = [
    "operations",
    "Expression",
    "evaluate",
    "label",
    "transform_label",
    "TransformOperation",
    "TransformComputation",
    "TransformService",
    "transform_service",
]
