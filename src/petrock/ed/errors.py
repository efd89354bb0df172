"""Errors raised by buffer editing commands."""

from __future__ import annotations


class EditError(RuntimeError):
    """Raised when a command cannot be applied to a buffer."""

    def __init__(self, operation: str, message: str, *, position: int) -> None:
        super().__init__(f"ed: {operation} at position {position}: {message}")
        self.operation = operation
        self.message = message
        self.position = position


class PatternNotFoundError(EditError):
    """``Search`` found no occurrence of its pattern between point and the end."""

    def __init__(self, pattern: str, *, position: int) -> None:
        super().__init__("Search", f"text not found: {pattern!r}", position=position)
        self.pattern = pattern


class EmptyPatternError(EditError):
    def __init__(self, *, position: int) -> None:
        super().__init__(
            "Search", "search text cannot be empty", position=position
        )
        self.pattern = ""


class MarkNotSetError(EditError):
    """``ReplaceRegion`` ran without a preceding ``SetMark``."""

    def __init__(self, *, position: int) -> None:
        super().__init__("ReplaceRegion", "no mark set", position=position)


class OutOfRangeError(EditError):
    """A motion would leave point outside ``[0, len(text)]``."""

    def __init__(self, offset: int, *, position: int, limit: int) -> None:
        target = position + offset
        super().__init__(
            "ForwardChar",
            f"cannot move by {offset} to {target} (buffer length {limit})",
            position=position,
        )
        self.offset = offset
        self.target = target
        self.limit = limit


__all__ = [
    "EditError",
    "PatternNotFoundError",
    "EmptyPatternError",
    "MarkNotSetError",
    "OutOfRangeError",
]
