"""
Smoothing of irregular metric samples and resampling onto target timestamps.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.smoothing.smoother import (
    SmoothingService,
    interpolate,
    smooth_series,
    smoothed_points,
    smoothing_service,
)

__all__ = ["SmoothingService", "interpolate", "smooth_series", "smoothed_points", "smoothing_service"]
