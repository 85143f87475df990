"""
preview/overlay.py

Highlight overlay geometry for the preview.

Builders return fresh graphics items every time; the preview removes the
previous overlays and adds new ones on each update rather than patching
existing items. Segment and vertex overlays are built in SVG user units,
with stroke widths proportional to the drawing size, and are placed under
the viewBox-to-item transform by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainterPath, QPen
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsItemGroup,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsRectItem,
)

from models import PolygonPoints, ResolvedSegment
from settings import OverlaySettings

# QGraphicsItem.data() key holding the overlay role ("bounds", "segment", "polygon")
OVERLAY_ROLE_KEY = 0

# Size-relative stroke and marker dimensions
SEGMENT_STROKE_RATIO = 0.006
POINT_RADIUS_RATIO = 0.01
VERTEX_RADIUS_RATIO = 0.008
VERTEX_STROKE_RATIO = 0.003


@dataclass
class OverlayStyle:
    """Colors and opacity for highlight overlays."""
    bounds_color: str = "#0078D7"
    segment_color: str = "#00FF00"
    segment_outline_color: str = "#00CC00"
    control_color: str = "#00FF88"
    vertex_color: str = "#0000FF"
    active_vertex_color: str = "#FF0000"
    opacity: float = 0.85

    @classmethod
    def from_settings(cls, s: OverlaySettings) -> "OverlayStyle":
        return cls(
            bounds_color=s.bounds_color,
            segment_color=s.segment_color,
            segment_outline_color=s.segment_outline_color,
            control_color=s.control_color,
            vertex_color=s.vertex_color,
            active_vertex_color=s.active_vertex_color,
            opacity=s.opacity,
        )


def _new_group(role: str) -> QGraphicsItemGroup:
    group = QGraphicsItemGroup()
    group.setData(OVERLAY_ROLE_KEY, role)
    group.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
    return group


def _add_dot(group: QGraphicsItemGroup, p: QPointF, r: float, sw: float,
             fill: str, outline: str, pen_width: Optional[float] = None,
             opacity: float = 0.9) -> None:
    dot = QGraphicsEllipseItem(p.x() - r, p.y() - r, r * 2, r * 2)
    dot.setPen(QPen(QColor(outline), sw * 0.4 if pen_width is None else pen_width))
    dot.setBrush(QBrush(QColor(fill)))
    dot.setOpacity(opacity)
    group.addToGroup(dot)


def _add_handle(group: QGraphicsItemGroup, a: QPointF, b: QPointF, sw: float, color: str) -> None:
    pen = QPen(QColor(color), sw * 0.5)
    # Dash and gap each one full segment stroke long
    pen.setDashPattern([2.0, 2.0])
    line = QGraphicsLineItem(a.x(), a.y(), b.x(), b.y())
    line.setPen(pen)
    line.setOpacity(0.7)
    group.addToGroup(line)


def _add_stroke(group: QGraphicsItemGroup, item: QGraphicsItem, sw: float, style: OverlayStyle) -> None:
    pen = QPen(QColor(style.segment_color), sw)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    item.setPen(pen)
    item.setOpacity(style.opacity)
    group.addToGroup(item)


def build_segment_overlay(segment: ResolvedSegment, size: float,
                          style: Optional[OverlayStyle] = None) -> QGraphicsItemGroup:
    """Overlay for one path segment.

    - M: point marker
    - L: line plus endpoint dot
    - C: curve, dashed handles from each end to its control point, two
      control dots and an endpoint dot
    - S: curve, one handle, one control dot and an endpoint dot
    - Q: curve, handles from both ends to the control, control dot and
      endpoint dot

    Args:
        segment: Resolved segment in SVG user units.
        size: Larger side of the drawing, in user units.
        style: Colors; defaults when omitted.
    """
    style = style or OverlayStyle()
    sw = size * SEGMENT_STROKE_RATIO
    r = size * POINT_RADIUS_RATIO
    start = QPointF(*segment.start)
    end = QPointF(*segment.end)
    controls = [QPointF(*p) for p in segment.control_points]
    group = _new_group("segment")
    outline = style.segment_outline_color

    if segment.kind == "M":
        _add_dot(group, end, r, sw, style.segment_color, outline,
                 pen_width=sw * 0.5, opacity=style.opacity)
        return group

    if segment.kind == "L":
        _add_stroke(group, QGraphicsLineItem(start.x(), start.y(), end.x(), end.y()), sw, style)
        _add_dot(group, end, r * 0.6, sw, style.segment_color, outline)
        return group

    path = QPainterPath(start)
    if segment.kind == "C":
        c1, c2 = controls
        path.cubicTo(c1, c2, end)
        handles = [(start, c1), (end, c2)]
    elif segment.kind == "S":
        # No previous curve is modelled, so the first control is the start point
        c2 = controls[0]
        path.cubicTo(start, c2, end)
        handles = [(end, c2)]
    else:  # Q
        c = controls[0]
        path.quadTo(c, end)
        handles = [(start, c), (end, c)]

    curve = QGraphicsPathItem(path)
    curve.setBrush(QBrush(Qt.BrushStyle.NoBrush))
    _add_stroke(group, curve, sw, style)
    for a, b in handles:
        _add_handle(group, a, b, sw, style.control_color)
    for c in controls:
        _add_dot(group, c, r * 0.5, sw, style.control_color, outline)
    _add_dot(group, end, r * 0.6, sw, style.segment_color, outline)
    return group


def build_polygon_overlay(polygon: PolygonPoints, size: float,
                          style: Optional[OverlayStyle] = None) -> QGraphicsItemGroup:
    """One dot per vertex; the active vertex gets its own color."""
    style = style or OverlayStyle()
    r = size * VERTEX_RADIUS_RATIO
    sw = size * VERTEX_STROKE_RATIO
    group = _new_group("polygon")
    for i, (x, y) in enumerate(polygon.points):
        fill = style.active_vertex_color if i == polygon.active_index else style.vertex_color
        _add_dot(group, QPointF(x, y), r, sw, fill, style.segment_outline_color)
    return group


def build_bounds_overlay(rect: QRectF, style: Optional[OverlayStyle] = None) -> QGraphicsRectItem:
    """Outline around the highlighted element; the pen keeps its width at any zoom."""
    style = style or OverlayStyle()
    item = QGraphicsRectItem(rect)
    pen = QPen(QColor(style.bounds_color), 2)
    pen.setCosmetic(True)
    pen.setStyle(Qt.PenStyle.DashLine)
    item.setPen(pen)
    item.setBrush(QBrush(Qt.BrushStyle.NoBrush))
    item.setData(OVERLAY_ROLE_KEY, "bounds")
    item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
    return item
