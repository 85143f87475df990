"""
tests/test_code_editor.py

Source editor: UTF-16 offset conversion, the gutter line range and the
cursor offset signal.
"""

from __future__ import annotations

from editor import SvgCodeEditor, qt_to_py_offset


class TestOffsets:
    def test_ascii_unchanged(self):
        assert qt_to_py_offset("<svg/>", 3) == 3

    def test_astral_characters_count_once(self):
        text = '<text>\U0001F600</text>'
        # The emoji is two UTF-16 units but one Python character
        qt_pos = len("<text>") + 2
        assert qt_to_py_offset(text, qt_pos) == len("<text>") + 1


class TestSvgCodeEditor:
    def test_display_name(self, qapp, tmp_path):
        assert SvgCodeEditor().display_name == "untitled.svg"
        assert SvgCodeEditor(tmp_path / "a.svg").display_name == "a.svg"

    def test_highlighted_line_range(self, qapp):
        ed = SvgCodeEditor()
        text = "<svg>\n  <g>\n  </g>\n</svg>"
        ed.setPlainText(text)
        ed.set_highlighted_span(text.index("<g>"), text.index("</g>") + 4)
        assert ed.highlighted_line_range() == (1, 2)
        ed.clear_highlighted_span()
        assert ed.highlighted_line_range() == (-1, -1)

    def test_cursor_offset_signal(self, qapp):
        ed = SvgCodeEditor()
        ed.setPlainText("<svg><rect/></svg>")
        seen = []
        ed.cursor_offset_changed.connect(seen.append)
        cursor = ed.textCursor()
        cursor.setPosition(7)
        ed.setTextCursor(cursor)
        assert seen[-1] == 7
        assert ed.cursor_offset() == 7
