"""
sync/coordinator.py

Turns editor events into highlight messages for the preview.

Every event recomputes from scratch: the element under the cursor is
located on the full text, then, depending on the element, the path
segment or polygon vertex under the cursor. Nothing is cached between
events and nothing is diffed against the previous message.
"""

from __future__ import annotations

from typing import Optional

from debug_trace import trace
from markup.attributes import active_vertex_index, find_attribute_value, parse_points
from markup.index import find_element_at_offset
from models import HighlightMessage, PolygonPoints, ResolvedSegment, TagSpan, UpdateMessage
from pathdata.locator import find_segment_at_offset
from pathdata.parser import parse_path_data
from sync.channel import MessageChannel

# Elements whose "d" attribute carries drawing commands
PATH_DATA_TAGS = frozenset({"path"})

# Elements whose "points" attribute lists vertices
POINT_LIST_TAGS = frozenset({"polygon", "polyline"})


def segment_at(text: str, offset: int, span: TagSpan) -> Optional[ResolvedSegment]:
    """Resolve the path segment at ``offset`` within the element's ``d`` value."""
    value = find_attribute_value(text, span, "d")
    if value is None:
        return None
    value_start, value_end = value
    if not (value_start <= offset <= value_end):
        return None
    segments = parse_path_data(text[value_start:value_end])
    found = find_segment_at_offset(segments, offset - value_start)
    return found.resolved if found is not None else None


def polygon_points_at(text: str, offset: int, span: TagSpan) -> Optional[PolygonPoints]:
    """All vertices of the element's ``points`` list, with the one at ``offset`` marked."""
    value = find_attribute_value(text, span, "points")
    if value is None:
        return None
    value_start, value_end = value
    vertices = parse_points(text[value_start:value_end])
    if not vertices:
        return None
    active = None
    if value_start <= offset <= value_end:
        active = active_vertex_index(vertices, offset - value_start)
    return PolygonPoints(tuple(p for p, _ in vertices), active)


def compute_highlight(text: str, offset: int) -> HighlightMessage:
    """Build the highlight message for the cursor at ``offset`` in ``text``.

    Returns the null selection when no element contains the offset.
    """
    located = find_element_at_offset(text, offset)
    if located is None:
        return HighlightMessage()

    name = located.span.local_name
    segment = None
    polygon = None
    if name in PATH_DATA_TAGS:
        segment = segment_at(text, offset, located.span)
    elif name in POINT_LIST_TAGS:
        polygon = polygon_points_at(text, offset, located.span)

    return HighlightMessage(
        address=located.address,
        segment=segment,
        polygon_points=polygon,
        span=located.span,
    )


class HighlightCoordinator:
    """Posts one update and/or highlight message per host event.

    Args:
        channel: Channel the preview drains.
    """

    def __init__(self, channel: MessageChannel):
        self.channel = channel
        self.last_highlight = HighlightMessage()

    def on_cursor_moved(self, text: str, offset: int) -> HighlightMessage:
        msg = compute_highlight(text, offset)
        trace(f"highlight at {offset}: path={msg.address} "
              f"segment={msg.segment.kind if msg.segment else None}", "SYNC")
        self.last_highlight = msg
        self.channel.post(msg)
        return msg

    def on_text_changed(self, text: str, offset: int) -> HighlightMessage:
        self.channel.post(UpdateMessage(text))
        return self.on_cursor_moved(text, offset)

    def on_document_changed(self, text: str, offset: int) -> HighlightMessage:
        trace(f"active document changed ({len(text)} chars)", "SYNC")
        self.channel.post(UpdateMessage(text))
        return self.on_cursor_moved(text, offset)
