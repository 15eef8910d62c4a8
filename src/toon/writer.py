"""Line writer for building indented TOON output."""

from typing import List, Tuple

from .types import Depth


class LineWriter:
    """Collects output lines together with their indentation depth."""

    def __init__(self, indent_size: int) -> None:
        self._indentation = " " * indent_size
        self._lines: List[Tuple[Depth, str]] = []

    def __len__(self) -> int:
        return len(self._lines)

    def push(self, depth: Depth, content: str) -> None:
        self._lines.append((depth, content))

    def prefix_line(self, index: int, prefix: str) -> None:
        """Insert text right after the indentation of an already pushed line."""
        depth, content = self._lines[index]
        self._lines[index] = (depth, prefix + content)

    def to_string(self) -> str:
        return "\n".join(self._indentation * depth + content for depth, content in self._lines)
