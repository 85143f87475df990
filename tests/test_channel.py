"""
tests/test_channel.py

Message channel ordering and coalescing.
"""

from __future__ import annotations

import pytest

from models import HighlightMessage, UpdateMessage
from sync.channel import MessageChannel


class TestMessageChannel:
    def test_empty_drain(self):
        assert MessageChannel().drain() == []

    def test_latest_of_each_kind_update_first(self):
        ch = MessageChannel()
        h1 = HighlightMessage(address=(0,))
        u1 = UpdateMessage("<svg/>")
        h2 = HighlightMessage(address=(0, 1))
        u2 = UpdateMessage("<svg><g/></svg>")
        for m in (h1, u1, h2, u2):
            ch.post(m)
        assert ch.pending() == 4
        assert ch.drain() == [u2, h2]
        assert ch.pending() == 0

    def test_null_highlight_is_kept(self):
        ch = MessageChannel()
        ch.post(HighlightMessage(address=(0,)))
        ch.post(HighlightMessage())
        (last,) = ch.drain()
        assert last.is_empty

    def test_rejects_other_objects(self):
        with pytest.raises(TypeError):
            MessageChannel().post({"type": "update", "content": ""})

    def test_set_notify(self):
        seen = []
        ch = MessageChannel()
        ch.set_notify(lambda: seen.append(ch.pending()))
        ch.post(UpdateMessage(""))
        ch.post(UpdateMessage("x"))
        assert seen == [1, 2]
