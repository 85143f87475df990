"""
tests/test_coordinator.py

Highlight coordinator: one full-replacement message per event, path
segment and polygon vertex resolution, and the null selection.
"""

from __future__ import annotations

from models import HighlightMessage, UpdateMessage
from sync.channel import MessageChannel
from sync.coordinator import HighlightCoordinator, compute_highlight, polygon_points_at, segment_at

DOC = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <path id="p" d='M10,10 L50,10 C60,10 60,40 50,40'/>
  <polygon points="0,0 20,0 10,15"/>
  <polyline points="1,1 2,2"/>
  <g><rect width="5" height="5"/></g>
</svg>"""


def at(needle, delta=0):
    return DOC.index(needle) + delta


# ─────────────────────────────────────────────────────────
# compute_highlight
# ─────────────────────────────────────────────────────────

class TestComputeHighlight:
    def test_path_segment_under_cursor(self):
        msg = compute_highlight(DOC, at("L50,10", 2))
        assert msg.address == (0, 0)
        assert msg.segment.kind == "L"
        assert msg.segment.start == (10, 10)
        assert msg.segment.end == (50, 10)
        assert msg.polygon_points is None

    def test_cubic_segment(self):
        msg = compute_highlight(DOC, at("C60"))
        assert msg.segment.kind == "C"
        assert msg.segment.control_points == ((60, 10), (60, 40))

    def test_path_outside_d_value_has_no_segment(self):
        msg = compute_highlight(DOC, at('id="p"'))
        assert msg.address == (0, 0)
        assert msg.segment is None

    def test_end_of_d_value_is_inside(self):
        end = at("50,40'") + len("50,40")
        assert compute_highlight(DOC, end).segment.kind == "C"

    def test_polygon_vertex(self):
        msg = compute_highlight(DOC, at("20,0 10", 1))
        assert msg.address == (0, 1)
        assert msg.polygon_points.points == ((0, 0), (20, 0), (10, 15))
        assert msg.polygon_points.active_index == 1

    def test_polygon_cursor_on_tag_name(self):
        msg = compute_highlight(DOC, at("<polygon", 2))
        assert msg.polygon_points is not None
        assert msg.polygon_points.active_index is None

    def test_polyline_counts_as_point_list(self):
        msg = compute_highlight(DOC, at("2,2"))
        assert msg.address == (0, 2)
        assert msg.polygon_points.active_index == 1

    def test_nested_element(self):
        msg = compute_highlight(DOC, at("<rect", 1))
        assert msg.address == (0, 3, 0)
        assert msg.segment is None and msg.polygon_points is None

    def test_span_travels_with_message(self):
        msg = compute_highlight(DOC, at("<rect", 1))
        assert DOC[msg.span.open_tag_start:msg.span.range_end] == '<rect width="5" height="5"/>'

    def test_null_selection_outside_markup(self):
        msg = compute_highlight("   <svg/>", 0)
        assert msg.is_empty
        assert msg == HighlightMessage()

    def test_segment_at_without_d(self):
        text = "<path/>"
        span = compute_highlight(text, 1).span
        assert segment_at(text, 1, span) is None

    def test_polygon_points_at_without_points(self):
        text = "<polygon/>"
        span = compute_highlight(text, 1).span
        assert polygon_points_at(text, 1, span) is None


# ─────────────────────────────────────────────────────────
# HighlightCoordinator
# ─────────────────────────────────────────────────────────

class TestHighlightCoordinator:
    def test_cursor_move_posts_one_highlight(self):
        channel = MessageChannel()
        coord = HighlightCoordinator(channel)
        msg = coord.on_cursor_moved(DOC, at("<rect", 1))
        assert channel.pending() == 1
        assert channel.drain() == [msg]
        assert coord.last_highlight is msg

    def test_text_change_posts_update_then_highlight(self):
        channel = MessageChannel()
        coord = HighlightCoordinator(channel)
        coord.on_text_changed(DOC, 0)
        drained = channel.drain()
        assert isinstance(drained[0], UpdateMessage)
        assert drained[0].content == DOC
        assert isinstance(drained[1], HighlightMessage)

    def test_document_change_posts_update(self):
        channel = MessageChannel()
        coord = HighlightCoordinator(channel)
        coord.on_document_changed("<svg/>", 1)
        assert [type(m) for m in channel.drain()] == [UpdateMessage, HighlightMessage]

    def test_messages_are_full_replacements(self):
        channel = MessageChannel()
        coord = HighlightCoordinator(channel)
        coord.on_cursor_moved(DOC, at("L50,10", 2))
        second = coord.on_cursor_moved(DOC, at("<rect", 1))
        # Nothing from the previous path highlight carries over
        assert second.segment is None

    def test_notify_called_per_post(self):
        calls = []
        channel = MessageChannel(notify=lambda: calls.append(1))
        HighlightCoordinator(channel).on_text_changed(DOC, 0)
        assert len(calls) == 2
