"""Run command sequences against a buffer, stopping at the first failure."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from petrock.runtime import telemetry

from .buffer import Buffer
from .commands import (
    BeginningOfBuffer,
    Command,
    ForwardChar,
    ReplaceRegion,
    Search,
    SetMark,
)
from .errors import (
    EditError,
    EmptyPatternError,
    MarkNotSetError,
    OutOfRangeError,
    PatternNotFoundError,
)

LOGGER_NAME = "petrock.ed"

Handler = Callable[[Buffer, Command], None]


def _beginning_of_buffer(buffer: Buffer, command: BeginningOfBuffer) -> None:
    del command
    buffer._set_point(0)


def _search(buffer: Buffer, command: Search) -> None:
    if not command.pattern:
        raise EmptyPatternError(position=buffer.point)
    index = buffer.text.find(command.pattern, buffer.point)
    if index == -1:
        raise PatternNotFoundError(command.pattern, position=buffer.point)
    buffer._set_point(index)


def _forward_char(buffer: Buffer, command: ForwardChar) -> None:
    target = buffer.point + command.count
    if not buffer._in_bounds(target):
        raise OutOfRangeError(command.count, position=buffer.point, limit=len(buffer))
    buffer._set_point(target)


def _set_mark(buffer: Buffer, command: SetMark) -> None:
    del command
    buffer._set_mark()


def _replace_region(buffer: Buffer, command: ReplaceRegion) -> None:
    region = buffer.region()
    if region is None:
        raise MarkNotSetError(position=buffer.point)
    start, end = region
    buffer._replace_region(start, end, command.replacement)


_HANDLERS: Dict[type, Handler] = {
    BeginningOfBuffer: _beginning_of_buffer,  # type: ignore[dict-item]
    Search: _search,  # type: ignore[dict-item]
    ForwardChar: _forward_char,  # type: ignore[dict-item]
    SetMark: _set_mark,  # type: ignore[dict-item]
    ReplaceRegion: _replace_region,  # type: ignore[dict-item]
}


def apply(buffer: Buffer, command: Command) -> None:
    """Apply a single command. Raises :class:`EditError` on failure."""

    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"unknown editor command {command!r}")
    handler(buffer, command)


def do(buffer: Buffer, *ops: Command) -> None:
    """Run ``ops`` in order against ``buffer``.

    Execution stops at the first failing command and its error propagates
    unchanged. Commands that ran before it keep their effect; since only
    ``ReplaceRegion`` edits text, a failed motion leaves the text as it was.
    """

    with telemetry.span(
        "ed::do",
        logger_name=LOGGER_NAME,
        metadata={"ops": len(ops)},
        quiet_errors=(PatternNotFoundError,),
    ) as handle:
        for index, command in enumerate(ops):
            try:
                apply(buffer, command)
            except EditError:
                handle.add_metadata("failed_op", command.name)
                handle.add_metadata("failed_index", index)
                raise


def run(text: str, *ops: Command) -> str:
    """Edit ``text`` on a fresh buffer and return the result."""

    buffer = Buffer(text)
    do(buffer, *ops)
    return buffer.string()


def run_all(text: str, scripts: Iterable[Iterable[Command]]) -> str:
    """Apply each script to the output of the previous one."""

    for script in scripts:
        text = run(text, *script)
    return text


__all__ = ["apply", "do", "run", "run_all"]
