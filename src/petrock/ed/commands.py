"""The closed set of commands understood by the interpreter.

Commands are plain values. They carry only their argument and hold no state
between runs; :mod:`petrock.ed.interpreter` gives them meaning.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class BeginningOfBuffer:
    """Move point to offset 0."""

    name = "BeginningOfBuffer"


@dataclass(frozen=True, slots=True)
class Search:
    """Move point to the start of the next literal match of ``pattern``."""

    pattern: str
    name = "Search"


@dataclass(frozen=True, slots=True)
class ForwardChar:
    """Move point by ``count`` characters; negative counts move backward."""

    count: int
    name = "ForwardChar"


@dataclass(frozen=True, slots=True)
class SetMark:
    """Record point as the mark."""

    name = "SetMark"


@dataclass(frozen=True, slots=True)
class ReplaceRegion:
    """Replace the text between mark and point with ``replacement``."""

    replacement: str
    name = "ReplaceRegion"


Command = Union[BeginningOfBuffer, Search, ForwardChar, SetMark, ReplaceRegion]


def beginning_of_buffer() -> BeginningOfBuffer:
    return BeginningOfBuffer()


def search(pattern: str) -> Search:
    return Search(pattern)


def forward_char(count: int) -> ForwardChar:
    return ForwardChar(count)


def set_mark() -> SetMark:
    return SetMark()


def replace_region(replacement: str) -> ReplaceRegion:
    return ReplaceRegion(replacement)


__all__ = [
    "Command",
    "BeginningOfBuffer",
    "Search",
    "ForwardChar",
    "SetMark",
    "ReplaceRegion",
    "beginning_of_buffer",
    "search",
    "forward_char",
    "set_mark",
    "replace_region",
]
