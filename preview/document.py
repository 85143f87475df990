"""
preview/document.py

Rendered-document adapter: the preview's view of the markup as drawn by
Qt's SVG renderer.

Child ordering comes from an ElementTree of the content; bounding boxes
come from QSvgRenderer. Elements without an ``id`` get a synthetic one
before rendering so the renderer can be queried per element.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence

from PyQt6.QtCore import QByteArray, QRectF
from PyQt6.QtGui import QTransform
from PyQt6.QtSvg import QSvgRenderer

log = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

# Keep the usual prefixes (none for SVG, "xlink") when re-serializing
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")

SYNTHETIC_ID_PREFIX = "__svgsync_"

# Drawing size assumed when the document declares neither viewBox nor size
FALLBACK_SIZE = 100.0


class RenderedDocument:
    """Parsed element tree plus the renderer drawing it.

    Use :meth:`from_markup` to build one.

    Args:
        root: Root element, with every element carrying an ``id``.
        renderer: Renderer loaded from the serialized root.
    """

    def __init__(self, root: ET.Element, renderer: QSvgRenderer):
        self.root = root
        self.renderer = renderer

    @classmethod
    def from_markup(cls, text: str) -> Optional["RenderedDocument"]:
        """Parse and render ``text``.

        Returns:
            The rendered document, or ``None`` if the text is not
            well-formed XML or Qt cannot render it.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            log.warning("Content is not well-formed, keeping previous render: %s", e)
            return None

        for n, el in enumerate(root.iter()):
            if not el.get("id"):
                el.set("id", f"{SYNTHETIC_ID_PREFIX}{n}")

        renderer = QSvgRenderer(QByteArray(ET.tostring(root, encoding="utf-8")))
        if not renderer.isValid():
            log.warning("Qt could not render the content, keeping previous render")
            return None
        return cls(root, renderer)

    # ---- structure ----

    def resolve(self, address: Optional[Sequence[int]]) -> Optional[ET.Element]:
        """Walk ``address`` from the document node down to an element.

        The document node has the root element as its only child, so a
        valid address always starts with 0. Any out-of-range index yields
        ``None``.
        """
        if not address:
            return None
        children: List[ET.Element] = [self.root]
        element = None
        for idx in address:
            if idx < 0 or idx >= len(children):
                return None
            element = children[idx]
            children = list(element)
        return element

    # ---- geometry ----

    @property
    def item_rect(self) -> QRectF:
        """Rect the whole drawing occupies in item coordinates."""
        size = self.renderer.defaultSize()
        return QRectF(0, 0, size.width(), size.height())

    @property
    def user_to_item(self) -> QTransform:
        """Maps SVG user units (viewBox space) to item coordinates."""
        vb = self.renderer.viewBoxF()
        size = self.renderer.defaultSize()
        if vb.isEmpty() or size.isEmpty():
            return QTransform()
        sx = size.width() / vb.width()
        sy = size.height() / vb.height()
        return QTransform(sx, 0, 0, sy, -vb.x() * sx, -vb.y() * sy)

    @property
    def user_size(self) -> float:
        """Larger side of the drawing in user units, for scaling overlay strokes."""
        vb = self.renderer.viewBoxF()
        if not vb.isEmpty():
            return max(vb.width(), vb.height())
        size = self.renderer.defaultSize()
        if not size.isEmpty():
            return float(max(size.width(), size.height()))
        return FALLBACK_SIZE

    def element_bounds(self, element: ET.Element) -> QRectF:
        """Bounding box of ``element`` in item coordinates.

        Returns a null rect for elements the renderer does not draw
        (e.g. ``<title>``, empty groups).
        """
        if element is self.root:
            return self.item_rect
        element_id = element.get("id")
        if not element_id or not self.renderer.elementExists(element_id):
            return QRectF()
        bounds = self.renderer.boundsOnElement(element_id)
        # boundsOnElement ignores ancestor transforms
        bounds = self.renderer.transformForElement(element_id).mapRect(bounds)
        return self.user_to_item.mapRect(bounds)
