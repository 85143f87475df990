"""
markup/scanner.py

Tolerant tag scanner for raw SVG text.

The scanner is a small finite-state machine that walks the text once and
reports tag boundaries. It never builds a tree and never fails: text that
does not look like a tag is skipped, and a tag that is never terminated
produces no token.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

_NAME_START = frozenset(string.ascii_letters)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + ":-")


class ScanState(Enum):
    """Scanner states."""
    OUTSIDE = "outside"
    IN_OPEN_TAG = "in_open_tag"
    IN_CLOSE_TAG = "in_close_tag"


class TagKind(Enum):
    """Kinds of tag token the scanner emits."""
    OPEN = "open"
    SELF_CLOSING = "self_closing"
    CLOSE = "close"


@dataclass(frozen=True)
class TagToken:
    """A single tag occurrence; ``end`` is one past the closing ``>``."""
    kind: TagKind
    name: str
    start: int
    end: int


def _read_name(text: str, pos: int) -> Tuple[str, int]:
    end = pos
    while end < len(text) and text[end] in _NAME_CHARS:
        end += 1
    return text[pos:end], end


def scan_tags(text: str) -> Iterator[TagToken]:
    """Yield every tag token in ``text`` in document order.

    A tag starts at ``<`` (or ``</``) directly followed by a letter and ends
    at the first ``>`` after its name. Quotes are not honoured when looking
    for that ``>``, so an unbalanced quote during editing cannot swallow the
    rest of the document.

    Args:
        text: Raw markup.

    Yields:
        TagToken for each opening, self-closing and closing tag.
    """
    state = ScanState.OUTSIDE
    pos = 0
    n = len(text)
    tag_start = 0
    name = ""

    while pos < n:
        if state is ScanState.OUTSIDE:
            if text[pos] != "<" or pos + 1 >= n:
                pos += 1
                continue
            nxt = text[pos + 1]
            if nxt in _NAME_START:
                tag_start = pos
                name, pos = _read_name(text, pos + 1)
                state = ScanState.IN_OPEN_TAG
            elif nxt == "/" and pos + 2 < n and text[pos + 2] in _NAME_START:
                tag_start = pos
                name, pos = _read_name(text, pos + 2)
                state = ScanState.IN_CLOSE_TAG
            else:
                pos += 1
            continue

        close = text.find(">", pos)
        if close < 0:
            # Unterminated tag: nothing after it can be a tag either
            return
        end = close + 1
        if state is ScanState.IN_CLOSE_TAG:
            kind = TagKind.CLOSE
        elif text[close - 1] == "/":
            kind = TagKind.SELF_CLOSING
        else:
            kind = TagKind.OPEN
        yield TagToken(kind, name, tag_start, end)
        state = ScanState.OUTSIDE
        pos = end


def tokenize(text: str) -> List[TagToken]:
    """List form of :func:`scan_tags`."""
    return list(scan_tags(text))
