"""
pathdata/locator.py

Find the path segment that corresponds to a cursor offset.
"""

from __future__ import annotations

from typing import Optional, Sequence

from models import PathSegment

# Max distance (in characters) from a segment's span for the nearest-segment fallback
PROXIMITY_THRESHOLD = 5


def find_segment_at_offset(segments: Sequence[PathSegment], offset: int) -> Optional[PathSegment]:
    """Return the segment at ``offset`` (relative to the start of the ``d`` value).

    The last segment whose half-open span contains the offset wins. When
    none does (cursor on separator whitespace, or just past the value), the
    nearest segment is used if it lies within PROXIMITY_THRESHOLD characters.
    """
    best: Optional[PathSegment] = None
    for seg in segments:
        if seg.start_offset <= offset < seg.end_offset:
            best = seg
    if best is not None:
        return best

    min_dist = PROXIMITY_THRESHOLD
    for seg in segments:
        if offset < seg.start_offset:
            dist = seg.start_offset - offset
        else:
            dist = offset - seg.end_offset
        if dist < min_dist:
            min_dist = dist
            best = seg
    return best
