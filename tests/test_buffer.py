import pytest

from edit_engine.buffer import OutOfRangeError, TextBuffer


def make_buffer(text: str = "Hello World") -> TextBuffer:
    return TextBuffer.from_text(text, name="test")


def test_insert_moves_cursor_past_text() -> None:
    buffer = make_buffer("Hello")

    buffer.insert(" World", 5)

    assert buffer.get_text() == "Hello World"
    assert buffer.get_cursor() == 11
    assert buffer.version == 1


def test_insert_at_end_appends_but_one_past_end_fails() -> None:
    buffer = make_buffer("abc")

    buffer.insert("d", 3)
    assert buffer.text == "abcd"

    with pytest.raises(OutOfRangeError) as info:
        buffer.insert("x", 5)

    assert info.value.position == 5
    assert info.value.size == 4
    assert buffer.text == "abcd"


def test_insert_rejects_negative_position() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(OutOfRangeError):
        buffer.insert("x", -1)


def test_delete_clamps_length_and_returns_removed_text() -> None:
    buffer = make_buffer("Hello World")

    removed = buffer.delete(6, 100)

    assert removed == "World"
    assert buffer.text == "Hello "
    assert buffer.cursor == 6


@pytest.mark.parametrize("start,length", [(-1, 1), (11, 1), (0, 0), (2, -3)])
def test_delete_rejects_invalid_spans(start: int, length: int) -> None:
    buffer = make_buffer("Hello World")
    buffer.set_cursor(4)

    with pytest.raises(OutOfRangeError):
        buffer.delete(start, length)

    assert buffer.text == "Hello World"
    assert buffer.cursor == 4
    assert buffer.version == 0


def test_delete_on_empty_buffer_fails() -> None:
    buffer = TextBuffer()

    with pytest.raises(OutOfRangeError):
        buffer.delete(0, 1)


def test_replace_is_single_mutation() -> None:
    buffer = make_buffer("Hello World")

    replaced = buffer.replace(6, 5, "Universe")

    assert replaced == "World"
    assert buffer.text == "Hello Universe"
    assert buffer.cursor == 14
    assert buffer.version == 1


def test_replace_accepts_zero_length_span_at_end() -> None:
    buffer = make_buffer("Hello ")

    buffer.replace(6, 0, "World")

    assert buffer.text == "Hello World"


def test_replace_rejects_start_past_end() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(OutOfRangeError):
        buffer.replace(4, 1, "x")


def test_get_text_range_is_clamped_and_empty_out_of_range() -> None:
    buffer = make_buffer("Hello")

    assert buffer.get_text_range(3, 10) == "lo"
    assert buffer.get_text_range(5, 1) == ""
    assert buffer.get_text_range(-1, 2) == ""


def test_set_cursor_bounds() -> None:
    buffer = make_buffer("abc")

    buffer.set_cursor(3)
    assert buffer.cursor == 3

    with pytest.raises(OutOfRangeError):
        buffer.set_cursor(4)


def test_clear_and_snapshot() -> None:
    buffer = make_buffer("abc")
    buffer.set_cursor(2)

    buffer.clear()
    view = buffer.snapshot()

    assert view.text == ""
    assert view.cursor == 0
    assert view.name == "test"
    assert view.version == 1
    assert len(buffer) == 0
