"""
sync package

Editor-side coordination: builds highlight messages from cursor and text
events and hands them to the preview through a FIFO channel.
"""

from sync.channel import MessageChannel
from sync.coordinator import HighlightCoordinator, compute_highlight

__all__ = [
    "MessageChannel",
    "HighlightCoordinator",
    "compute_highlight",
]
