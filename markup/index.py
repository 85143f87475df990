"""
markup/index.py

Stack-based structural index over scanned tags, and the element locator.

The index stands in for a parsed element tree: every element gets a
hierarchical sibling-index address and a TagSpan, using nothing but the
order of tag tokens. Closing tags pop the innermost open scope whatever
their name, so live edits that leave the document invalid still produce
a usable structure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from markup.scanner import TagKind, scan_tags
from models import ElementAddress, LocatedElement, TagSpan


@dataclass
class _Scope:
    """An element whose closing tag has not been seen yet."""
    tag_name: str
    start: int
    tag_end: int
    address: ElementAddress
    child_count: int = 0


@dataclass
class StructuralIndex:
    """All finalized elements of one text, in finalization order."""
    elements: List[LocatedElement] = field(default_factory=list)

    @classmethod
    def build(cls, text: str) -> "StructuralIndex":
        """Scan ``text`` and finalize every element it contains.

        Never raises on malformed input: stray closing tags are ignored and
        elements left open at the end of the text span to its end.
        """
        index = cls()
        stack: List[_Scope] = []
        root_count = 0

        for tok in scan_tags(text):
            if tok.kind is TagKind.CLOSE:
                if stack:
                    top = stack.pop()
                    index._finalize(top, tok.end)
                continue

            parent = stack[-1] if stack else None
            if parent is not None:
                address = parent.address + (parent.child_count,)
                parent.child_count += 1
            else:
                address = (root_count,)
                root_count += 1

            if tok.kind is TagKind.SELF_CLOSING:
                index.elements.append(LocatedElement(
                    address, TagSpan(tok.name, tok.start, tok.end, tok.end)))
            else:
                stack.append(_Scope(tok.name, tok.start, tok.end, address))

        while stack:
            index._finalize(stack.pop(), len(text))

        return index

    def _finalize(self, scope: _Scope, range_end: int) -> None:
        self.elements.append(LocatedElement(
            scope.address, TagSpan(scope.tag_name, scope.start, scope.tag_end, range_end)))

    def element_at(self, offset: int) -> Optional[LocatedElement]:
        """Return the most specific element whose span contains ``offset``.

        The longest address wins; on a tie the later-finalized element wins.
        """
        best: Optional[LocatedElement] = None
        for el in self.elements:
            if not el.span.contains(offset):
                continue
            if best is None or len(el.address) >= len(best.address):
                best = el
        return best


def find_element_at_offset(text: str, offset: int) -> Optional[LocatedElement]:
    """Locate the deepest element at ``offset`` in ``text``, or ``None``."""
    return StructuralIndex.build(text).element_at(offset)
