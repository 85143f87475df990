"""
markup/attributes.py

Attribute lookups inside a located open tag, and ``points`` list parsing.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from models import Point, TagSpan

# Decimal number with optional sign, fraction and exponent ("-1.5e3", ".5", "10.")
NUMBER_PATTERN = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_NUMBER_RE = re.compile(NUMBER_PATTERN)


def _attribute_re(name: str) -> re.Pattern:
    # Name must stand alone: "d" must not match inside "id" or "data-d"
    return re.compile(
        r"(?<![\w:.-])" + re.escape(name) + r"\s*=\s*(['\"])(.*?)\1",
        re.DOTALL,
    )


def find_attribute_value(text: str, span: TagSpan, name: str) -> Optional[Tuple[int, int]]:
    """Find the value range of attribute ``name`` in the element's open tag.

    Both single- and double-quoted values are recognised.

    Args:
        text: Full document text.
        span: Span of the element whose open tag is searched.
        name: Attribute name.

    Returns:
        ``(value_start, value_end)`` as absolute offsets into ``text``, the
        quotes excluded, or ``None`` if the attribute is absent.
    """
    tag_text = text[span.open_tag_start:span.open_tag_end]
    m = _attribute_re(name).search(tag_text)
    if m is None:
        return None
    return span.open_tag_start + m.start(2), span.open_tag_start + m.end(2)


def parse_points(value: str) -> List[Tuple[Point, Tuple[int, int]]]:
    """Parse a ``points`` attribute into vertices with their text ranges.

    Numbers are paired in order; a trailing odd number is ignored. Each
    range runs from the start of the x token to the end of the y token,
    relative to the start of ``value``.
    """
    numbers = [(float(m.group()), m.start(), m.end()) for m in _NUMBER_RE.finditer(value)]
    vertices = []
    for i in range(0, len(numbers) - 1, 2):
        x, x_start, _ = numbers[i]
        y, _, y_end = numbers[i + 1]
        vertices.append(((x, y), (x_start, y_end)))
    return vertices


def active_vertex_index(vertices: List[Tuple[Point, Tuple[int, int]]], offset: int) -> Optional[int]:
    """Index of the vertex whose range contains ``offset`` (inclusive), else ``None``."""
    for i, (_, (start, end)) in enumerate(vertices):
        if start <= offset <= end:
            return i
    return None
