"""
tests/test_rendered_document.py

Rendered-document adapter: address resolution against the element tree,
synthetic ids, and bounding boxes from the Qt SVG renderer.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest
from PyQt6.QtCore import QPointF

from preview.document import SYNTHETIC_ID_PREFIX, RenderedDocument

DOC = """<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 100 50">
  <rect id="box" x="10" y="10" width="20" height="10" fill="red"/>
  <g>
    <circle cx="70" cy="25" r="5" fill="blue"/>
  </g>
  <title>demo</title>
</svg>"""


def rect_tuple(r):
    return (r.x(), r.y(), r.width(), r.height())


@pytest.fixture()
def doc(qapp):
    d = RenderedDocument.from_markup(DOC)
    assert d is not None
    return d


class TestFromMarkup:
    def test_malformed_returns_none(self, qapp):
        assert RenderedDocument.from_markup("<svg") is None
        assert RenderedDocument.from_markup("") is None

    def test_ids_assigned(self, doc):
        ids = [el.get("id") for el in doc.root.iter()]
        assert "box" in ids
        assert all(ids)
        assert doc.root.get("id").startswith(SYNTHETIC_ID_PREFIX)


class TestResolve:
    def test_root(self, doc):
        assert doc.resolve((0,)) is doc.root

    def test_nested(self, doc):
        assert doc.resolve((0, 0)).get("id") == "box"
        assert doc.resolve((0, 1, 0)).tag.endswith("circle")
        assert doc.resolve((0, 2)).tag.endswith("title")

    @pytest.mark.parametrize("address", [(), None, (1,), (0, 3), (0, 0, 0), (0, -1)])
    def test_out_of_range_is_none(self, doc, address):
        assert doc.resolve(address) is None

    def test_last_child_resolves_one_past_does_not(self, doc):
        assert doc.resolve((0, len(doc.root) - 1)) is not None
        assert doc.resolve((0, len(doc.root))) is None


class TestNamespaces:
    def test_xlink_prefix_kept_when_reserialized(self, qapp):
        text = ('<svg xmlns="http://www.w3.org/2000/svg" '
                'xmlns:xlink="http://www.w3.org/1999/xlink" width="10" height="10">'
                '<defs><rect id="r" width="4" height="4"/></defs>'
                '<use xlink:href="#r"/></svg>')
        doc = RenderedDocument.from_markup(text)
        assert doc is not None
        out = ET.tostring(doc.root, encoding="unicode")
        assert "xlink:href" in out
        assert "<svg " in out


class TestGeometry:
    def test_item_rect_uses_declared_size(self, doc):
        assert rect_tuple(doc.item_rect) == (0, 0, 200, 100)

    def test_user_to_item_scales_viewbox(self, doc):
        p = doc.user_to_item.map(QPointF(50, 25))
        assert (p.x(), p.y()) == (100, 50)
        assert doc.user_size == 100

    def test_root_bounds_is_whole_drawing(self, doc):
        assert rect_tuple(doc.element_bounds(doc.root)) == (0, 0, 200, 100)

    def test_element_bounds_in_item_coordinates(self, doc):
        bounds = rect_tuple(doc.element_bounds(doc.resolve((0, 0))))
        assert bounds == pytest.approx((20, 20, 40, 20), abs=1.5)

    def test_undrawn_element_has_null_bounds(self, doc):
        assert doc.element_bounds(doc.resolve((0, 2))).isNull()
