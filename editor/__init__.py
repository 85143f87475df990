"""
editor package

SVG source editor with syntax highlighting, line numbers and a gutter
marker for the element under the cursor.
"""

from editor.highlighter import SvgHighlighter
from editor.code_editor import LineNumberArea, SvgCodeEditor, qt_to_py_offset

__all__ = [
    "SvgHighlighter",
    "LineNumberArea",
    "SvgCodeEditor",
    "qt_to_py_offset",
]
