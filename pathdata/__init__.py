"""
pathdata package

Parsing of the path ``d`` mini-language into absolute drawing segments, and
cursor-to-segment lookup.
"""

from pathdata.parser import ARG_COUNTS, PathState, parse_path_data
from pathdata.locator import PROXIMITY_THRESHOLD, find_segment_at_offset

__all__ = [
    "ARG_COUNTS",
    "PathState",
    "parse_path_data",
    "PROXIMITY_THRESHOLD",
    "find_segment_at_offset",
]
