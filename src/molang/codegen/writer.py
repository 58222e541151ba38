"""Indentation-aware emitter for generated Python source."""

from __future__ import annotations

from typing import Any


class SourceWriter:
    """Collects lines of Python source at the current indentation.

    Lines are kept in a list rather than a stream so that an expression
    can be spilled to a local after the fact (see :meth:`insert`).
    """

    def __init__(self, indent_str: str = "    ") -> None:
        self._lines: list[str] = []
        self._indent_str = indent_str
        self._indent_level = 0

    def line(self, code: str) -> None:
        """Emit one line at the current indentation."""
        self._lines.append(self._indent_str * self._indent_level + code)

    def mark(self) -> int:
        """Return a position that :meth:`insert` can later write at."""
        return len(self._lines)

    def insert(self, position: int, code: str) -> None:
        """Insert a line at an earlier mark, at the current indentation."""
        self._lines.insert(position, self._indent_str * self._indent_level + code)

    def indent(self) -> None:
        self._indent_level += 1

    def dedent(self) -> None:
        self._indent_level = max(0, self._indent_level - 1)

    def block(self, header: str) -> SourceWriter._Block:
        """Context manager emitting ``header`` and indenting its body."""
        return self._Block(self, header)

    class _Block:
        def __init__(self, writer: SourceWriter, header: str) -> None:
            self._writer = writer
            self._header = header

        def __enter__(self) -> SourceWriter:
            self._writer.line(self._header)
            self._writer.indent()
            return self._writer

        def __exit__(self, *args: Any) -> None:
            self._writer.dedent()

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def get_code(self) -> str:
        return "\n".join(self._lines) + "\n"
