"""
markup package

Tolerant, scanner-based structure for raw SVG text: tag scanning, element
addresses and spans, and attribute lookups inside open tags.
"""

from markup.scanner import ScanState, TagKind, TagToken, scan_tags
from markup.index import StructuralIndex, find_element_at_offset
from markup.attributes import active_vertex_index, find_attribute_value, parse_points

__all__ = [
    "ScanState",
    "TagKind",
    "TagToken",
    "scan_tags",
    "StructuralIndex",
    "find_element_at_offset",
    "active_vertex_index",
    "find_attribute_value",
    "parse_points",
]
