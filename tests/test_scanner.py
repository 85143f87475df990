"""
tests/test_scanner.py

Tag scanner: token kinds, boundaries and tolerance of broken markup.
"""

from __future__ import annotations

from markup.scanner import TagKind, scan_tags, tokenize


class TestTokenKinds:
    def test_open_self_closing_and_close(self):
        text = '<svg><rect x="1"/></svg>'
        toks = tokenize(text)
        assert [(t.kind, t.name) for t in toks] == [
            (TagKind.OPEN, "svg"),
            (TagKind.SELF_CLOSING, "rect"),
            (TagKind.CLOSE, "svg"),
        ]

    def test_boundaries_are_half_open(self):
        text = 'ab<g id="x">cd</g>'
        open_tag, close_tag = tokenize(text)
        assert text[open_tag.start:open_tag.end] == '<g id="x">'
        assert text[close_tag.start:close_tag.end] == "</g>"

    def test_namespaced_and_hyphenated_names(self):
        toks = tokenize("<svg:g><font-face/></svg:g>")
        assert [t.name for t in toks] == ["svg:g", "font-face", "svg:g"]


class TestTolerance:
    def test_non_tag_angle_brackets_are_skipped(self):
        text = "a < b <!-- c --> <?xml?> <rect/>"
        toks = tokenize(text)
        assert [(t.kind, t.name) for t in toks] == [(TagKind.SELF_CLOSING, "rect")]

    def test_unterminated_tag_stops_scanning(self):
        toks = tokenize('<svg><rect x="1" <circle/>')
        # "<rect" runs to the first ">", which belongs to <circle/>
        assert [t.name for t in toks] == ["svg", "rect"]
        assert [t.name for t in tokenize("<svg><rect x='1'")] == ["svg"]

    def test_lone_angle_at_end(self):
        assert tokenize("<svg></svg><") == tokenize("<svg></svg>")

    def test_generator_is_lazy(self):
        it = scan_tags("<a/><b/>")
        assert next(it).name == "a"
