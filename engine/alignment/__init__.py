"""
Series alignment by index, by timestamp union and by exact timestamp intersection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.alignment.align import (
    AlignedSeries,
    align_by_index,
    align_by_intersection,
    align_by_union,
)

__all__ = ["AlignedSeries", "align_by_index", "align_by_union", "align_by_intersection"]
