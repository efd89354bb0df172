"""Text buffer with a point and an optional mark."""

from __future__ import annotations

from typing import Optional, Tuple

Region = Tuple[int, int]


class Buffer:
    """In-memory text plus the two cursor positions commands operate on.

    ``point`` is the active cursor. ``mark`` is either ``None`` or the other
    end of the region consumed by ``ReplaceRegion``. Both always lie within
    ``[0, len(text)]``. Only region replacement changes ``text``.

    A buffer belongs to the caller that created it and is not safe to share
    between threads.
    """

    __slots__ = ("_text", "_point", "_mark")

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._point = 0
        self._mark: Optional[int] = None

    @classmethod
    def new(cls, text: str) -> "Buffer":
        return cls(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def point(self) -> int:
        return self._point

    # Alias matching the name used by callers that think in cursor terms.
    position = point

    @property
    def mark(self) -> Optional[int]:
        return self._mark

    @property
    def marked(self) -> bool:
        return self._mark is not None

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Buffer(len={len(self._text)}, point={self._point}, mark={self._mark})"

    def string(self) -> str:
        return self._text

    def region(self) -> Optional[Region]:
        """Return ``(start, end)`` of the marked region, or ``None``."""

        if self._mark is None:
            return None
        return min(self._mark, self._point), max(self._mark, self._point)

    def do(self, *ops: object) -> None:
        """Run ``ops`` against this buffer; see :func:`petrock.ed.interpreter.do`."""

        from .interpreter import do

        do(self, *ops)

    def _in_bounds(self, offset: int) -> bool:
        return 0 <= offset <= len(self._text)

    def _set_point(self, offset: int) -> None:
        if not self._in_bounds(offset):
            raise ValueError(f"offset {offset} outside buffer of length {len(self)}")
        self._point = offset

    def _set_mark(self) -> None:
        self._mark = self._point

    def _replace_region(self, start: int, end: int, replacement: str) -> None:
        self._text = self._text[:start] + replacement + self._text[end:]
        self._point = start + len(replacement)
        self._mark = None


__all__ = ["Buffer", "Region"]
