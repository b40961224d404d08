"""
Timeline model: tick interval selection, normalized interval generation and timestamp to interval index mapping.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.timeline.intervals import (
    determine_tick_interval,
    generate_normalized_intervals,
    map_timestamp_to_interval_index,
)
from engine.timeline.service import Timeline, TimelineService, timeline_service

__all__ = [
    "determine_tick_interval",
    "generate_normalized_intervals",
    "map_timestamp_to_interval_index",
    "Timeline",
    "TimelineService",
    "timeline_service",
]
