"""
preview package

Renderer side of the editor/preview sync: view-fit math, the QtSvg-backed
rendered document, highlight overlays and the preview widget.
"""

from preview.view_transform import Box, ViewState, fit_content, fit_to_box, zoom_about
from preview.document import RenderedDocument
from preview.overlay import OverlayStyle, build_bounds_overlay, build_polygon_overlay, build_segment_overlay
from preview.view import SvgPreviewView

__all__ = [
    "Box",
    "ViewState",
    "fit_content",
    "fit_to_box",
    "zoom_about",
    "RenderedDocument",
    "OverlayStyle",
    "build_bounds_overlay",
    "build_polygon_overlay",
    "build_segment_overlay",
    "SvgPreviewView",
]
