"""
sync/channel.py

One-way message channel from the text-side coordinator to the preview.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, List, Optional, Union

from models import HighlightMessage, UpdateMessage

Message = Union[UpdateMessage, HighlightMessage]


class MessageChannel:
    """First-in-first-out queue of update/highlight messages.

    The receiver only ever needs the newest state, so :meth:`drain`
    coalesces: it returns at most one UpdateMessage (the newest) followed by
    at most one HighlightMessage (the newest). The preview re-applies its
    highlight after every content update, which makes this equivalent to
    replaying the full queue.

    Args:
        notify: Called after each post. The Qt shell uses it to schedule a
            drain on the next event-loop turn.
    """

    def __init__(self, notify: Optional[Callable[[], None]] = None):
        self._queue: Deque[Message] = deque()
        self._notify = notify

    def set_notify(self, notify: Optional[Callable[[], None]]) -> None:
        self._notify = notify

    def post(self, message: Message) -> None:
        if not isinstance(message, (UpdateMessage, HighlightMessage)):
            raise TypeError(f"cannot post {type(message).__name__}")
        self._queue.append(message)
        if self._notify is not None:
            self._notify()

    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> List[Message]:
        """Remove all queued messages and return the ones still relevant."""
        latest_update: Optional[UpdateMessage] = None
        latest_highlight: Optional[HighlightMessage] = None
        while self._queue:
            msg = self._queue.popleft()
            if isinstance(msg, UpdateMessage):
                latest_update = msg
            else:
                latest_highlight = msg

        out: List[Message] = []
        if latest_update is not None:
            out.append(latest_update)
        if latest_highlight is not None:
            out.append(latest_highlight)
        return out
