"""
editor/code_editor.py

SVG source editor with line numbers and a gutter bar marking the element
under the cursor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

from PyQt6.QtCore import Qt, QSize, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QPainter
from PyQt6.QtWidgets import QPlainTextEdit, QWidget

from editor.highlighter import SvgHighlighter
from settings import get_settings


# =============================================================================
# Cached editor settings - initialized once to avoid repeated lookups during paint
# =============================================================================

class _CachedEditorSettings:
    """Cache for editor settings values to avoid repeated lookups during paint."""

    _instance = None

    def __init__(self):
        s = get_settings().settings.editor
        self.left_margin = s.line_numbers.left_margin
        self.right_margin = s.line_numbers.right_margin
        self.highlight_bar_width = s.line_numbers.highlight_bar_width
        self.font_family = s.font.family
        self.font_size = s.font.size
        self.tab_width = s.font.tab_width

    @classmethod
    def get(cls) -> "_CachedEditorSettings":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


def qt_to_py_offset(text: str, position: int) -> int:
    """Convert a Qt (UTF-16) cursor position into an index into ``text``."""
    if text.isascii():
        return position
    prefix = text.encode("utf-16-le")[: position * 2]
    return len(prefix.decode("utf-16-le", errors="ignore"))


class LineNumberArea(QWidget):
    """Widget that displays line numbers alongside the code editor."""

    def __init__(self, editor: "SvgCodeEditor"):
        super().__init__(editor)
        self.editor = editor

    def sizeHint(self):
        return self.editor.line_number_area_size_hint()

    def paintEvent(self, event):
        self.editor.line_number_area_paint_event(event)


class SvgCodeEditor(QPlainTextEdit):
    """
    SVG source editor with:
    - Line numbers
    - Highlight bar over the lines of the element under the cursor
    - Cursor offsets reported as Python string indices

    Args:
        path: File the text was loaded from, or None for an unsaved document.
    """

    # Emitted with the cursor's character offset whenever it moves
    cursor_offset_changed = pyqtSignal(int)

    # Default line number colors (Light theme)
    DEFAULT_LINE_COLORS = {
        "background": "#f1f5f9",
        "text": "#94a3b8",
        "text_active": "#1e293b",
        "highlight_bg": "#e0e7ff",
        "highlight_bar": "#6366f1",
        "current_line_bg": "#e2e8f0",
    }

    def __init__(self, path: Optional[Path] = None, parent=None):
        super().__init__(parent)
        self.path = path

        self.line_number_area = LineNumberArea(self)
        self.highlighter = SvgHighlighter(self.document())

        # Lines of the highlighted element: (start_line, end_line) inclusive
        self._highlighted_line_range: Tuple[int, int] = (-1, -1)

        self._line_colors = dict(self.DEFAULT_LINE_COLORS)

        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.blockCountChanged.connect(self._update_margins)
        self.updateRequest.connect(self._update_line_number_area)
        self.cursorPositionChanged.connect(self._on_cursor_position_changed)

        self._update_margins()

        # Monospace font from settings. Defaults: "Consolas", 10pt
        cached = _CachedEditorSettings.get()
        font = QFont(cached.font_family, cached.font_size)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)

        # Tab width from settings. Default: 4 characters
        self.setTabStopDistance(self.fontMetrics().horizontalAdvance(' ') * cached.tab_width)

    @property
    def display_name(self) -> str:
        return self.path.name if self.path else "untitled.svg"

    def cursor_offset(self) -> int:
        """Cursor position as an index into ``toPlainText()``."""
        return qt_to_py_offset(self.toPlainText(), self.textCursor().position())

    def set_line_number_colors(self, colors: Dict[str, str]):
        """
        Set the line number area colors.

        Args:
            colors: Dict with keys: background, text, text_active, highlight_bg,
                   highlight_bar, current_line_bg
        """
        self._line_colors = dict(self.DEFAULT_LINE_COLORS)
        self._line_colors.update(colors)
        self.line_number_area.update()

    def line_number_area_width(self) -> int:
        """Calculate the width needed for line numbers."""
        digits = len(str(max(1, self.blockCount())))
        cached = _CachedEditorSettings.get()
        return (cached.left_margin + cached.highlight_bar_width
                + self.fontMetrics().horizontalAdvance('9') * digits + cached.right_margin)

    def line_number_area_size_hint(self):
        return QSize(self.line_number_area_width(), 0)

    def _update_margins(self):
        self.setViewportMargins(self.line_number_area_width(), 0, 0, 0)

    def _update_line_number_area(self, rect, dy):
        """Update line number area when scrolling or content changes."""
        if dy:
            self.line_number_area.scroll(0, dy)
        else:
            self.line_number_area.update(0, rect.y(), self.line_number_area.width(), rect.height())

        if rect.contains(self.viewport().rect()):
            self._update_margins()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.line_number_area.setGeometry(cr.left(), cr.top(), self.line_number_area_width(), cr.height())

    def line_number_area_paint_event(self, event):
        """Paint the line numbers with the highlighted-element bar."""
        painter = QPainter(self.line_number_area)
        colors = self._line_colors

        painter.fillRect(event.rect(), QColor(colors["background"]))

        block = self.firstVisibleBlock()
        block_number = block.blockNumber()
        top = int(self.blockBoundingGeometry(block).translated(self.contentOffset()).top())
        bottom = top + int(self.blockBoundingRect(block).height())

        current_block = self.textCursor().block().blockNumber()

        cached = _CachedEditorSettings.get()
        highlight_bar_width = cached.highlight_bar_width
        right_margin = cached.right_margin
        highlight_start, highlight_end = self._highlighted_line_range

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                number = str(block_number + 1)
                block_height = int(self.blockBoundingRect(block).height())
                in_highlight_range = highlight_start <= block_number <= highlight_end

                if in_highlight_range:
                    painter.fillRect(0, top, highlight_bar_width, block_height,
                                     QColor(colors["highlight_bar"]))

                if block_number == current_block:
                    painter.fillRect(highlight_bar_width, top,
                                     self.line_number_area.width() - highlight_bar_width,
                                     block_height, QColor(colors["current_line_bg"]))
                    painter.setPen(QColor(colors["text_active"]))
                elif in_highlight_range:
                    painter.fillRect(highlight_bar_width, top,
                                     self.line_number_area.width() - highlight_bar_width,
                                     block_height, QColor(colors["highlight_bg"]))
                    painter.setPen(QColor(colors["text_active"]))
                else:
                    painter.setPen(QColor(colors["text"]))

                painter.drawText(highlight_bar_width, top,
                                 self.line_number_area.width() - highlight_bar_width - right_margin,
                                 block_height,
                                 Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, number)

            block = block.next()
            top = bottom
            bottom = top + int(self.blockBoundingRect(block).height())
            block_number += 1

        painter.end()

    def _on_cursor_position_changed(self):
        self.line_number_area.update()
        self.cursor_offset_changed.emit(self.cursor_offset())

    def set_highlighted_span(self, start: int, end: int):
        """Mark the lines covering text offsets ``start``..``end`` in the gutter.

        Pass negative offsets to clear the mark.
        """
        if start < 0 or end < 0:
            line_range = (-1, -1)
        else:
            line_range = (self._line_of_offset(start), self._line_of_offset(end))
        if line_range == self._highlighted_line_range:
            return
        self._highlighted_line_range = line_range
        self.line_number_area.update()

    def clear_highlighted_span(self):
        self.set_highlighted_span(-1, -1)

    def highlighted_line_range(self) -> Tuple[int, int]:
        return self._highlighted_line_range

    def _line_of_offset(self, offset: int) -> int:
        # Line numbers only depend on newlines, which are single UTF-16 units
        text = self.toPlainText()
        return text.count("\n", 0, min(offset, len(text)))
