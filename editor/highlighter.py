"""
editor/highlighter.py

SVG syntax highlighter for the code editor.
"""

from __future__ import annotations

from typing import List, Tuple

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import QSyntaxHighlighter, QTextCharFormat, QColor

from settings import get_settings

# Block states for comments spanning lines
_STATE_NORMAL = 0
_STATE_IN_COMMENT = 1


class SvgHighlighter(QSyntaxHighlighter):
    """
    Syntax highlighter for SVG markup.

    Highlights:
    - Tag names (blue, bold)
    - Attribute names (purple)
    - Quoted attribute values (green)
    - Path command letters inside d="..." (orange)
    - Comments, including multi-line ones (gray)
    """

    def __init__(self, parent):
        super().__init__(parent)

        self.rules: List[Tuple[QRegularExpression, QTextCharFormat]] = []

        # Defaults: tag=#2E86C1, attribute=#8E44AD, value=#27AE60, comment=#7F8C8D, command=#D35400
        syntax = get_settings().settings.editor.syntax

        def fmt(color_hex: str, bold: bool = False) -> QTextCharFormat:
            f = QTextCharFormat()
            f.setForeground(QColor(color_hex))
            if bold:
                f.setFontWeight(700)
            return f

        # Tag names after "<" or "</"
        self.rules.append((QRegularExpression(r"(?<=</)[A-Za-z][\w:.-]*|(?<=<)[A-Za-z][\w:.-]*"),
                           fmt(syntax.tag_color, bold=syntax.tag_bold)))

        # Attribute names (followed by "=")
        self.rules.append((QRegularExpression(r"[A-Za-z_:][\w:.-]*(?=\s*=)"),
                           fmt(syntax.attribute_color)))

        # Quoted values
        self.rules.append((QRegularExpression(r"\"[^\"]*\"|'[^']*'"), fmt(syntax.value_color)))

        # Command letters inside a single-line d="..."
        self._command_re = QRegularExpression(r"(?<![\w:.-])d\s*=\s*([\"'])([^\"']*)\1")
        self._command_letter_re = QRegularExpression(r"[MmLlHhVvCcSsQqTtAaZz]")
        self._command_fmt = fmt(syntax.path_command_color, bold=True)

        self._comment_fmt = fmt(syntax.comment_color)
        self._comment_start = QRegularExpression(r"<!--")
        self._comment_end = QRegularExpression(r"-->")

    def highlightBlock(self, text: str) -> None:
        """Apply highlighting rules to a block of text."""
        for regex, f in self.rules:
            it = regex.globalMatch(text)
            while it.hasNext():
                m = it.next()
                self.setFormat(m.capturedStart(), m.capturedLength(), f)

        it = self._command_re.globalMatch(text)
        while it.hasNext():
            m = it.next()
            value_start = m.capturedStart(2)
            letters = self._command_letter_re.globalMatch(m.captured(2))
            while letters.hasNext():
                lm = letters.next()
                self.setFormat(value_start + lm.capturedStart(), 1, self._command_fmt)

        self._highlight_comments(text)

    def _highlight_comments(self, text: str) -> None:
        self.setCurrentBlockState(_STATE_NORMAL)
        start = 0
        if self.previousBlockState() != _STATE_IN_COMMENT:
            m = self._comment_start.match(text)
            start = m.capturedStart() if m.hasMatch() else -1

        while start >= 0:
            end_match = self._comment_end.match(text, start)
            if end_match.hasMatch():
                length = end_match.capturedEnd() - start
            else:
                self.setCurrentBlockState(_STATE_IN_COMMENT)
                length = len(text) - start
            self.setFormat(start, length, self._comment_fmt)
            m = self._comment_start.match(text, start + length)
            start = m.capturedStart() if m.hasMatch() else -1
