"""
preview/view.py

Live SVG preview that follows the editor cursor.

The view draws the rendered content under a single content-root item whose
transform is the current ViewState (scale, then translation), so scene
coordinates equal viewport pixels. It receives update/highlight messages
from the editor side, frames the highlighted element when it changes, and
rebuilds every highlight overlay from scratch on each update.
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QPainter, QPen, QPixmap, QTransform
from PyQt6.QtSvgWidgets import QGraphicsSvgItem
from PyQt6.QtWidgets import QFrame, QGraphicsItem, QGraphicsRectItem, QGraphicsScene, QGraphicsView

from debug_trace import trace, trace_call
from models import ElementAddress, HighlightMessage, UpdateMessage
from preview.document import RenderedDocument
from preview.overlay import (
    OverlayStyle,
    build_bounds_overlay,
    build_polygon_overlay,
    build_segment_overlay,
)
from preview.view_transform import Box, ViewState, fit_content, fit_to_box, zoom_about
from settings import get_settings

# Overlays draw above the rendered content
OVERLAY_Z = 10.0

# Checkerboard tile size in pixels
CHECKER_TILE = 8


def _checker_brush() -> QBrush:
    pix = QPixmap(CHECKER_TILE * 2, CHECKER_TILE * 2)
    pix.fill(QColor("#FFFFFF"))
    painter = QPainter(pix)
    painter.fillRect(0, 0, CHECKER_TILE, CHECKER_TILE, QColor("#E0E0E0"))
    painter.fillRect(CHECKER_TILE, CHECKER_TILE, CHECKER_TILE, CHECKER_TILE, QColor("#E0E0E0"))
    painter.end()
    return QBrush(pix)


class SvgPreviewView(QGraphicsView):
    """
    Graphics view showing the rendered SVG with cursor-driven highlights.

    Highlight behavior:
    - A highlight whose element address differs from the displayed one
      resolves the address against the rendered tree and frames the element
    - Bounding-box, path-segment and polygon-vertex overlays are removed and
      redrawn on every content update, highlight and transform change
    - A null highlight clears all highlight state

    Zoom:
    - Mouse wheel zooms around the pointer
    - zoom_in/zoom_out zoom around the viewport center
    - zoom_fit frames the whole drawing, zoom_reset returns to 1:1
    """

    # Emitted with the new scale whenever the view transform changes
    zoom_changed = pyqtSignal(float)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setScene(QGraphicsScene(self))
        self.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setFrameShape(QFrame.Shape.NoFrame)

        prefs = get_settings().settings
        self._preview_prefs = prefs.preview
        self._style = OverlayStyle.from_settings(prefs.overlay)

        # Invisible container; its transform is the ViewState
        self._content_root = QGraphicsRectItem()
        self._content_root.setPen(QPen(Qt.PenStyle.NoPen))
        self.scene().addItem(self._content_root)

        self._document: Optional[RenderedDocument] = None
        self._svg_item: Optional[QGraphicsSvgItem] = None
        self._state = ViewState()
        self._highlight = HighlightMessage()
        self._displayed_address: Optional[ElementAddress] = None
        self._overlays: List[QGraphicsItem] = []

        self._checkered = self._preview_prefs.checkered_background
        self._apply_background()
        self._sync_scene_rect()

    # ---- accessors ----

    @property
    def document(self) -> Optional[RenderedDocument]:
        return self._document

    @property
    def view_state(self) -> ViewState:
        return self._state

    @property
    def displayed_address(self) -> Optional[ElementAddress]:
        return self._displayed_address

    @property
    def highlight(self) -> HighlightMessage:
        return self._highlight

    def overlay_items(self) -> List[QGraphicsItem]:
        return list(self._overlays)

    # ---- messages ----

    def apply_message(self, message) -> None:
        """Apply one message drained from the editor-side channel."""
        if isinstance(message, UpdateMessage):
            self.set_content(message.content)
        elif isinstance(message, HighlightMessage):
            self.set_highlight(message)
        else:
            raise TypeError(f"unexpected message {type(message).__name__}")

    @trace_call("PREVIEW")
    def set_content(self, text: str) -> bool:
        """Replace the rendered content.

        If the text cannot be rendered the previous render stays in place.
        The first successful render after :meth:`clear` is fitted to the view.

        Returns:
            True if the content was rendered.
        """
        doc = RenderedDocument.from_markup(text)
        if doc is None:
            return False

        first_render = self._document is None
        if self._svg_item is not None:
            self.scene().removeItem(self._svg_item)
        item = QGraphicsSvgItem()
        item.setSharedRenderer(doc.renderer)
        item.setParentItem(self._content_root)
        self._svg_item = item
        self._document = doc

        if first_render:
            self.zoom_fit()
        else:
            self._refresh_overlays()
        return True

    def set_highlight(self, message: HighlightMessage) -> None:
        """Replace the highlight state with ``message``."""
        self._highlight = message
        if message.is_empty:
            self._displayed_address = None
            self._clear_overlays()
            return

        if message.address != self._displayed_address:
            self._displayed_address = message.address
            element = self._document.resolve(message.address) if self._document else None
            if element is not None:
                self._frame_element(element)
        self._refresh_overlays()

    def clear(self) -> None:
        """Drop content and highlight; the next content load is fitted."""
        self._clear_overlays()
        if self._svg_item is not None:
            self.scene().removeItem(self._svg_item)
        self._svg_item = None
        self._document = None
        self._highlight = HighlightMessage()
        self._displayed_address = None
        self.set_view_state(ViewState())

    # ---- view transform ----

    def container_size(self):
        vp = self.viewport().size()
        return vp.width(), vp.height()

    def set_view_state(self, state: ViewState) -> None:
        self._state = state
        self._content_root.setTransform(
            QTransform(state.scale, 0, 0, state.scale, state.translate_x, state.translate_y))
        self.zoom_changed.emit(state.scale)
        self._refresh_overlays()

    def _frame_element(self, element) -> None:
        rect = self._document.element_bounds(element)
        # Current on-screen box; scene coordinates are viewport pixels
        screen = self._content_root.mapRectToScene(rect)
        box = Box(screen.x(), screen.y(), screen.width(), screen.height())
        width, height = self.container_size()
        new_state = fit_to_box(
            self._state, box, width, height,
            padding=self._preview_prefs.fit_padding,
            max_scale=self._preview_prefs.max_fit_scale,
        )
        if new_state != self._state:
            trace(f"framing {self._displayed_address}: scale={new_state.scale:.3f}", "PREVIEW")
            self.set_view_state(new_state)

    def zoom_fit(self) -> None:
        """Frame the whole drawing."""
        if self._document is None:
            return
        r = self._document.item_rect
        width, height = self.container_size()
        state = fit_content(
            Box(r.x(), r.y(), r.width(), r.height()), width, height,
            padding=self._preview_prefs.fit_padding,
            max_scale=self._preview_prefs.max_zoom,
        )
        self.set_view_state(state)

    def zoom_reset(self) -> None:
        """Reset zoom to 100% (1:1 scale)."""
        self.set_view_state(ViewState())

    def zoom_in(self) -> None:
        """Zoom in around the viewport center by the configured factor."""
        self._zoom_at_center(self._preview_prefs.wheel_factor)

    def zoom_out(self) -> None:
        """Zoom out around the viewport center by the configured factor."""
        self._zoom_at_center(1 / self._preview_prefs.wheel_factor)

    def _zoom_at_center(self, factor: float) -> None:
        width, height = self.container_size()
        self._zoom(factor, width / 2, height / 2)

    def _zoom(self, factor: float, x: float, y: float) -> None:
        state = zoom_about(self._state, factor, x, y,
                           self._preview_prefs.min_zoom, self._preview_prefs.max_zoom)
        if state != self._state:
            self.set_view_state(state)

    def wheelEvent(self, event):
        """Zoom with mouse wheel around the pointer."""
        delta = event.angleDelta().y()
        if delta == 0:
            return
        factor = self._preview_prefs.wheel_factor
        pos = event.position()
        self._zoom(factor if delta > 0 else 1 / factor, pos.x(), pos.y())
        event.accept()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._sync_scene_rect()

    def _sync_scene_rect(self) -> None:
        # Scene coordinates track viewport pixels one to one
        self.setSceneRect(QRectF(self.viewport().rect()))

    # ---- background ----

    def set_checkered_background(self, enabled: bool) -> None:
        self._checkered = enabled
        self._apply_background()

    def is_checkered_background(self) -> bool:
        return self._checkered

    def _apply_background(self) -> None:
        if self._checkered:
            self.setBackgroundBrush(_checker_brush())
        else:
            self.setBackgroundBrush(QBrush(QColor("#FFFFFF")))

    # ---- overlays ----

    def _clear_overlays(self) -> None:
        scene = self.scene()
        for item in self._overlays:
            scene.removeItem(item)
        self._overlays.clear()

    def _add_overlay(self, item: QGraphicsItem) -> None:
        item.setParentItem(self._content_root)
        item.setZValue(OVERLAY_Z)
        self._overlays.append(item)

    def _refresh_overlays(self) -> None:
        self._clear_overlays()
        msg = self._highlight
        doc = self._document
        if doc is None or msg.is_empty:
            return

        element = doc.resolve(msg.address)
        if element is not None:
            rect = doc.element_bounds(element)
            if not rect.isNull():
                self._add_overlay(build_bounds_overlay(rect, self._style))

        user_to_item = doc.user_to_item
        if msg.segment is not None:
            group = build_segment_overlay(msg.segment, doc.user_size, self._style)
            group.setTransform(user_to_item)
            self._add_overlay(group)
        if msg.polygon_points is not None:
            group = build_polygon_overlay(msg.polygon_points, doc.user_size, self._style)
            group.setTransform(user_to_item)
            self._add_overlay(group)

        trace(f"overlays rebuilt: {len(self._overlays)} item(s)", "OVERLAY")
