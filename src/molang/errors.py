"""Error types raised by the Molang compiler."""

from __future__ import annotations


class MolangCompileError(ValueError):
    """A problem with the source text or with the compile request.

    Carries the offending source and a ``[start, end)`` span so callers can
    point at the bad token.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        start: int | None = None,
        end: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.start = start
        self.end = end

    def excerpt(self) -> str:
        """Return the source line containing the error with a caret marker."""
        if self.source is None or self.start is None:
            return ""
        line_start = self.source.rfind("\n", 0, self.start) + 1
        line_end = self.source.find("\n", self.start)
        if line_end == -1:
            line_end = len(self.source)
        end = self.end if self.end is not None and self.end > self.start else self.start + 1
        width = max(1, min(end, line_end) - self.start)
        line = self.source[line_start:line_end]
        return f"{line}\n{' ' * (self.start - line_start)}{'^' * width}"

    def __str__(self) -> str:
        if self.start is None:
            return self.message
        return f"{self.message} (at position {self.start})\n{self.excerpt()}"


class ContextArityError(MolangCompileError):
    """Too many context variables were requested for one expression."""


class VariableSizeError(MolangCompileError):
    """An actor variable's size disagrees with its name or is not positive."""


class MolangMemoryError(MemoryError):
    """Default error raised when an allocation budget is exceeded."""


class CompilerBackendError(RuntimeError):
    """Code generation or loading failed; this indicates a compiler bug."""
