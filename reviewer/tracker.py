"""Line-based nesting tracker for iteration constructs.

The tracker counts loop openings and block-closing lines. It does not parse
C#, so multi-line headers, braces on the same line as code, or nested
non-loop blocks can make the depth drift. Rules that consult it accept that.
"""

from __future__ import annotations

import re

LOOP_OPEN_PATTERN = re.compile(r"foreach|for\s*\(")
BLOCK_CLOSE_PATTERN = re.compile(r"^\s*}")


class StructuralTracker:
    """Track how many iteration constructs enclose the current line."""

    def __init__(self) -> None:
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    def advance(self, line: str) -> int:
        """Fold ``line`` into the running depth and return the new value."""

        if LOOP_OPEN_PATTERN.search(line):
            self._depth += 1
        if BLOCK_CLOSE_PATTERN.match(line) and self._depth > 0:
            self._depth -= 1
        return self._depth

    def reset(self) -> None:
        self._depth = 0
