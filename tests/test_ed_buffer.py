from __future__ import annotations

import pytest

from petrock.ed import (
    Buffer,
    beginning_of_buffer,
    forward_char,
    replace_region,
    search,
    set_mark,
)

SAMPLES = [
    "",
    "abc",
    "type Foo struct {\n\tA int\n}",
    "héllo, wörld ✓",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_new_buffer_round_trips_text(text: str) -> None:
    buffer = Buffer.new(text)

    assert buffer.string() == text
    assert str(buffer) == text
    assert buffer.point == 0
    assert buffer.mark is None
    assert buffer.marked is False


def test_default_buffer_is_empty() -> None:
    buffer = Buffer()

    assert str(buffer) == ""
    assert len(buffer) == 0
    assert buffer.region() is None


def test_position_aliases_point() -> None:
    buffer = Buffer("hello")
    buffer.do(forward_char(3))

    assert buffer.position == buffer.point == 3


def test_region_is_ordered_regardless_of_mark_side() -> None:
    buffer = Buffer("0123456789")
    buffer.do(forward_char(7), set_mark(), beginning_of_buffer(), forward_char(2))

    assert buffer.mark == 7
    assert buffer.point == 2
    assert buffer.region() == (2, 7)


@pytest.mark.parametrize(
    "mark_at, point_at",
    [(2, 7), (7, 2), (4, 4), (0, 10)],
)
def test_replace_region_splices_text(mark_at: int, point_at: int) -> None:
    text = "0123456789"
    buffer = Buffer(text)
    buffer.do(forward_char(mark_at), set_mark(), beginning_of_buffer(), forward_char(point_at))

    buffer.do(replace_region("XY"))

    lo, hi = min(mark_at, point_at), max(mark_at, point_at)
    assert str(buffer) == text[:lo] + "XY" + text[hi:]
    assert buffer.point == lo + 2
    assert buffer.mark is None


def test_zero_length_region_inserts_without_deleting() -> None:
    buffer = Buffer("abcdef")
    buffer.do(forward_char(3), set_mark(), replace_region("--"))

    assert str(buffer) == "abc--def"
    assert buffer.point == 5


def test_motion_commands_leave_text_untouched() -> None:
    text = "func f() int {\n\treturn compute()\n}"
    buffer = Buffer(text)

    buffer.do(
        search("return"),
        set_mark(),
        forward_char(6),
        beginning_of_buffer(),
        search("}"),
        set_mark(),
        forward_char(-3),
    )

    assert str(buffer) == text


def test_repr_mentions_cursor_state() -> None:
    buffer = Buffer("abc")
    buffer.do(forward_char(1), set_mark())

    assert repr(buffer) == "Buffer(len=3, point=1, mark=1)"
