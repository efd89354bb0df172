"""Cursor-and-mark buffer editing used for surgical edits on generated source.

A caller builds a :class:`Buffer`, describes an edit as a list of commands
("go here, remember this spot, go there, replace what's between") and runs
it with :func:`do`::

    buffer = Buffer("type Foo struct {\\n\\tA int\\n}")
    buffer.do(
        beginning_of_buffer(),
        search("{"),
        forward_char(1),
        set_mark(),
        search("}"),
        replace_region("\\n\\tB string\\n"),
    )
    str(buffer)  # 'type Foo struct {\\n\\tB string\\n}'
"""

from .buffer import Buffer, Region
from .commands import (
    BeginningOfBuffer,
    Command,
    ForwardChar,
    ReplaceRegion,
    Search,
    SetMark,
    beginning_of_buffer,
    forward_char,
    replace_region,
    search,
    set_mark,
)
from .errors import (
    EditError,
    EmptyPatternError,
    MarkNotSetError,
    OutOfRangeError,
    PatternNotFoundError,
)
from .interpreter import apply, do, run, run_all

__all__ = [
    "Buffer",
    "Region",
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
    "EditError",
    "EmptyPatternError",
    "MarkNotSetError",
    "OutOfRangeError",
    "PatternNotFoundError",
    "apply",
    "do",
    "run",
    "run_all",
]
