"""
models.py

Data models shared by the text-side indexers and the preview renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

ElementAddress = Tuple[int, ...]
Point = Tuple[float, float]

# Number of control points each drawing kind carries
CONTROL_POINT_COUNTS = {"M": 0, "L": 0, "C": 2, "S": 1, "Q": 1}


# ----------------------------
# Markup structure
# ----------------------------

@dataclass(frozen=True)
class TagSpan:
    """Character range covered by one element's tag(s).

    ``open_tag_start``/``open_tag_end`` bound the opening (or self-closing)
    tag; ``range_end`` is the end of the closing tag, or of the text when
    the element was never closed.
    """
    tag_name: str
    open_tag_start: int
    open_tag_end: int
    range_end: int

    def __post_init__(self):
        if not (self.open_tag_start <= self.open_tag_end <= self.range_end):
            raise ValueError(
                f"invalid span for <{self.tag_name}>: "
                f"{self.open_tag_start}, {self.open_tag_end}, {self.range_end}"
            )

    @property
    def local_name(self) -> str:
        """Tag name without any ``prefix:``."""
        return self.tag_name.rsplit(":", 1)[-1]

    def contains(self, offset: int) -> bool:
        return self.open_tag_start <= offset <= self.range_end


@dataclass(frozen=True)
class LocatedElement:
    """Result of the element locator: address plus the element's span."""
    address: ElementAddress
    span: TagSpan


# ----------------------------
# Path data
# ----------------------------

@dataclass(frozen=True)
class PathCommand:
    """One drawing instance as written in the ``d`` value.

    ``letter`` is always uppercase; ``span`` is the half-open range
    ``[start, end)`` relative to the start of the ``d`` value.
    """
    letter: str
    is_relative: bool
    args: Tuple[float, ...]
    span: Tuple[int, int]


@dataclass(frozen=True)
class ResolvedSegment:
    """A drawing instruction with absolute geometry."""
    kind: str
    start: Point
    end: Point
    control_points: Tuple[Point, ...] = ()

    def __post_init__(self):
        if self.kind not in CONTROL_POINT_COUNTS:
            raise ValueError(f"unknown segment kind: {self.kind!r}")
        expected = CONTROL_POINT_COUNTS[self.kind]
        if len(self.control_points) != expected:
            raise ValueError(
                f"{self.kind} segment needs {expected} control points, "
                f"got {len(self.control_points)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "command": self.kind,
            "startPoint": list(self.start),
            "endPoint": list(self.end),
        }
        if self.control_points:
            d["controlPoints"] = [list(p) for p in self.control_points]
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ResolvedSegment":
        return cls(
            kind=d["command"],
            start=_point(d["startPoint"]),
            end=_point(d["endPoint"]),
            control_points=tuple(_point(p) for p in d.get("controlPoints", [])),
        )


@dataclass(frozen=True)
class PathSegment:
    """A parsed command paired with its resolved geometry."""
    command: PathCommand
    resolved: ResolvedSegment

    @property
    def start_offset(self) -> int:
        return self.command.span[0]

    @property
    def end_offset(self) -> int:
        return self.command.span[1]


# ----------------------------
# Polygon / polyline vertices
# ----------------------------

@dataclass(frozen=True)
class PolygonPoints:
    """All vertices of a polygon/polyline and the one under the cursor."""
    points: Tuple[Point, ...]
    active_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [list(p) for p in self.points],
            "activeIndex": self.active_index,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PolygonPoints":
        return cls(
            points=tuple(_point(p) for p in d.get("points", [])),
            active_index=d.get("activeIndex"),
        )


# ----------------------------
# Channel messages
# ----------------------------

@dataclass(frozen=True)
class UpdateMessage:
    """Replace the rendered content with ``content``."""
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "update", "content": self.content}


@dataclass(frozen=True)
class HighlightMessage:
    """Full replacement of the renderer's highlight state.

    A message with every field ``None`` is the null selection: the
    renderer clears all highlight state on receipt.
    """
    address: Optional[ElementAddress] = None
    segment: Optional[ResolvedSegment] = None
    polygon_points: Optional[PolygonPoints] = None
    # Span of the located element, kept for the text side (not sent on the wire)
    span: Optional[TagSpan] = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.address

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "highlight",
            "path": list(self.address) if self.address else None,
            "segment": self.segment.to_dict() if self.segment else None,
            "polygonPoints": self.polygon_points.to_dict() if self.polygon_points else None,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "HighlightMessage":
        path = d.get("path")
        segment = d.get("segment")
        polygon = d.get("polygonPoints")
        return cls(
            address=tuple(path) if path else None,
            segment=ResolvedSegment.from_dict(segment) if segment else None,
            polygon_points=PolygonPoints.from_dict(polygon) if polygon else None,
        )


def message_from_dict(d: Dict[str, Any]):
    """Rebuild a channel message from its wire dict.

    Raises:
        TypeError: If the dict carries an unknown ``type``.
    """
    kind = d.get("type")
    if kind == "update":
        return UpdateMessage(content=d.get("content", ""))
    if kind == "highlight":
        return HighlightMessage.from_dict(d)
    raise TypeError(f"unknown message type: {kind!r}")


def _point(p: List[float]) -> Point:
    return (float(p[0]), float(p[1]))
