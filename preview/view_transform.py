"""
preview/view_transform.py

Pan/zoom state of the preview and the fit-to-view math.

All functions are pure: they take a ViewState and return a new one, so
the preview widget owns the only mutable copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Defaults match the preview settings section
DEFAULT_PADDING = 40.0
DEFAULT_MAX_FIT_SCALE = 10.0


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_degenerate(self) -> bool:
        """True for a box with no extent in either direction."""
        return self.width <= 0 and self.height <= 0


@dataclass(frozen=True)
class ViewState:
    """Uniform scale followed by translation: ``screen = local * scale + translate``."""
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return (x * self.scale + self.translate_x, y * self.scale + self.translate_y)

    def to_local(self, x: float, y: float) -> Tuple[float, float]:
        return ((x - self.translate_x) / self.scale, (y - self.translate_y) / self.scale)

    def box_to_local(self, box: Box) -> Box:
        x, y = self.to_local(box.x, box.y)
        return Box(x, y, box.width / self.scale, box.height / self.scale)


def fit_to_box(
    state: ViewState,
    screen_box: Box,
    container_width: float,
    container_height: float,
    padding: float = DEFAULT_PADDING,
    max_scale: float = DEFAULT_MAX_FIT_SCALE,
) -> ViewState:
    """Frame ``screen_box`` in the container.

    The on-screen box is first taken back to local (pre-transform)
    coordinates through ``state``. The new scale is the largest that fits
    the box plus ``padding`` on every side, capped at ``max_scale``; the
    translation centers the box.

    Returns ``state`` unchanged when the container leaves no room after
    padding or the box has no extent.
    """
    avail_w = container_width - padding * 2
    avail_h = container_height - padding * 2
    if avail_w <= 0 or avail_h <= 0:
        return state
    if screen_box.is_degenerate:
        return state

    local = state.box_to_local(screen_box)

    scale = max_scale
    # A zero extent (horizontal or vertical line) does not constrain that axis
    if local.width > 0:
        scale = min(scale, avail_w / local.width)
    if local.height > 0:
        scale = min(scale, avail_h / local.height)

    cx, cy = local.center
    return ViewState(
        scale=scale,
        translate_x=container_width / 2 - cx * scale,
        translate_y=container_height / 2 - cy * scale,
    )


def fit_content(
    content_box: Box,
    container_width: float,
    container_height: float,
    padding: float = DEFAULT_PADDING,
    max_scale: float = DEFAULT_MAX_FIT_SCALE,
) -> ViewState:
    """Frame the whole drawing, given its box in local coordinates."""
    return fit_to_box(ViewState(), content_box, container_width, container_height, padding, max_scale)


def zoom_about(
    state: ViewState,
    factor: float,
    anchor_x: float,
    anchor_y: float,
    min_scale: float = 0.05,
    max_scale: float = 64.0,
) -> ViewState:
    """Scale by ``factor`` keeping the screen point ``(anchor_x, anchor_y)`` fixed.

    The resulting scale is clamped to ``[min_scale, max_scale]``.
    """
    new_scale = max(min_scale, min(max_scale, state.scale * factor))
    if new_scale == state.scale:
        return state
    lx, ly = state.to_local(anchor_x, anchor_y)
    return ViewState(
        scale=new_scale,
        translate_x=anchor_x - lx * new_scale,
        translate_y=anchor_y - ly * new_scale,
    )
