"""Mapping from flattened buffer offsets back to source lines and columns."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from typing import Final


class SourceMap:
    """Maps buffer offsets to (line, column) in the original document.

    The buffer is built by stripping every line and concatenating the
    results, so each non-blank line becomes one contiguous segment. A
    checkpoint is stored at the start of every segment and positions are
    resolved relative to the nearest checkpoint at or before them.
    """

    def __init__(self, segments: list[tuple[int, int, int]], length: int) -> None:
        """Initialize from precomputed segments.

        Args:
            segments: ``(buffer_start, lineno, leading_stripped)`` per
                non-blank line, ordered by ``buffer_start``
            length: Total length of the flattened buffer
        """
        self.segments: Final = segments
        self.length: Final = length
        self._starts: Final = [start for start, _, _ in segments]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> SourceMap:
        """Build a source map for the buffer ``join_lines(lines)`` produces.

        Args:
            lines: Source lines, with or without line terminators

        Returns:
            A map covering every non-blank line
        """
        segments: list[tuple[int, int, int]] = []
        offset = 0

        for lineno, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped:
                continue
            leading = len(line) - len(line.lstrip())
            segments.append((offset, lineno, leading))
            offset += len(stripped)

        return cls(segments, offset)

    def locate(self, pos: int) -> tuple[int, int]:
        """Convert a buffer offset to a 1-based (line, column) pair.

        Args:
            pos: Offset into the flattened buffer, at most its length

        Returns:
            Line and column in the original document; the end of the buffer
            maps to the column just past the last character
        """
        if pos < 0 or pos > self.length:
            raise ValueError(f"position {pos} outside buffer of {self.length}")

        if not self.segments:
            return 1, 1

        # Segment whose start is at or before pos
        index = max(bisect_right(self._starts, pos) - 1, 0)
        start, lineno, leading = self.segments[index]

        return lineno, leading + (pos - start) + 1
