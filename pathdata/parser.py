"""
pathdata/parser.py

Parser for the SVG path ``d`` mini-language.

The command string is tokenized into command letters and numbers, and the
numbers are grouped into fixed-size argument chunks. Every complete chunk
is one drawing instance with absolute geometry. The running drawing state
(current point, subpath start, pending command letter) lives in
:class:`PathState` rather than in loop locals, because implicit command
repetition and relative/absolute threading are where path parsers go wrong.

Geometry that needs the previous curve's reflected control point (T, and
the control geometry of S) or an arc parameterisation (A) is not
reconstructed: T and A report only their endpoint, as a straight line.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

from markup.attributes import NUMBER_PATTERN
from models import PathCommand, PathSegment, Point, ResolvedSegment

# Number of arguments consumed by one instance of each command
ARG_COUNTS = {
    "M": 2, "L": 2, "T": 2,
    "H": 1, "V": 1,
    "C": 6,
    "S": 4, "Q": 4,
    "A": 7,
    "Z": 0,
}

_TOKEN_RE = re.compile(r"([MmLlHhVvCcSsQqTtAaZz])|(" + NUMBER_PATTERN + ")")


def tokenize(d: str) -> Iterator[Tuple[str, str, int, int]]:
    """Yield ``(kind, text, start, end)`` tokens, kind being "cmd" or "num".

    Anything that is neither a command letter nor a number is a separator.
    """
    for m in _TOKEN_RE.finditer(d):
        yield ("cmd" if m.group(1) else "num", m.group(), m.start(), m.end())


class PathState:
    """Drawing cursor threaded through a path's commands.

    Attributes:
        current: Current point, absolute.
        subpath_start: Start of the current subpath; the endpoint of Z.
        pending: Command letter (as written, so its case carries relativity)
            that incoming numbers belong to, or ``None`` when numbers have
            nothing to attach to.
        segments: Resolved drawing instances, in document order.
    """

    def __init__(self):
        self.current: Point = (0.0, 0.0)
        self.subpath_start: Point = (0.0, 0.0)
        self.pending: Optional[str] = None
        self.segments: List[PathSegment] = []
        self._args: List[float] = []
        self._chunk_start: Optional[int] = None
        self._chunk_end = 0

    @property
    def arity(self) -> int:
        if self.pending is None:
            return 0
        return ARG_COUNTS[self.pending.upper()]

    def feed_command(self, letter: str, start: int, end: int) -> None:
        """Start a new command; any incomplete chunk before it is dropped."""
        self.pending = letter
        self._args = []
        self._chunk_start = start
        self._chunk_end = end
        if self.arity == 0:
            self._emit()
            self.pending = None

    def feed_number(self, value: float, start: int, end: int) -> None:
        """Add one argument to the pending command's current chunk."""
        if self.pending is None:
            return
        if self._chunk_start is None:
            self._chunk_start = start
        self._args.append(value)
        self._chunk_end = end
        if len(self._args) < self.arity:
            return

        self._emit()
        # Extra pairs after a moveto are implicit linetos
        if self.pending == "M":
            self.pending = "L"
        elif self.pending == "m":
            self.pending = "l"
        self._args = []
        self._chunk_start = None

    def _emit(self) -> None:
        letter = self.pending.upper()
        relative = self.pending.islower()
        args = tuple(self._args)
        command = PathCommand(letter, relative, args, (self._chunk_start, self._chunk_end))
        self.segments.append(PathSegment(command, self._resolve(letter, relative, args)))

    def _resolve(self, letter: str, relative: bool, a: Tuple[float, ...]) -> ResolvedSegment:
        start = self.current
        sx, sy = start

        def pt(x: float, y: float) -> Point:
            return (sx + x, sy + y) if relative else (x, y)

        if letter == "M":
            end = pt(a[0], a[1])
            self.subpath_start = end
            seg = ResolvedSegment("M", start, end)
        elif letter in ("L", "T"):
            seg = ResolvedSegment("L", start, pt(a[0], a[1]))
        elif letter == "H":
            seg = ResolvedSegment("L", start, (sx + a[0] if relative else a[0], sy))
        elif letter == "V":
            seg = ResolvedSegment("L", start, (sx, sy + a[0] if relative else a[0]))
        elif letter == "C":
            seg = ResolvedSegment("C", start, pt(a[4], a[5]), (pt(a[0], a[1]), pt(a[2], a[3])))
        elif letter in ("S", "Q"):
            seg = ResolvedSegment(letter, start, pt(a[2], a[3]), (pt(a[0], a[1]),))
        elif letter == "A":
            seg = ResolvedSegment("L", start, pt(a[5], a[6]))
        else:  # Z
            seg = ResolvedSegment("L", start, self.subpath_start)

        self.current = seg.end
        return seg


def parse_path_data(d: str) -> List[PathSegment]:
    """Parse a ``d`` value into drawing segments with absolute geometry.

    Args:
        d: The attribute value, without quotes.

    Returns:
        One PathSegment per drawing instance, in document order. Spans are
        half-open and relative to the start of ``d``.
    """
    state = PathState()
    for kind, text, start, end in tokenize(d):
        if kind == "cmd":
            state.feed_command(text, start, end)
        else:
            state.feed_number(float(text), start, end)
    return state.segments
