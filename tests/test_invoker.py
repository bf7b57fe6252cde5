from __future__ import annotations

from typing import List, Tuple

import pytest

from edit_engine.buffer import OutOfRangeError, TextBuffer
from edit_engine.history import HistoryBus, OperationInvoker, OperationStack
from edit_engine.operations import Delete, EditOperation, Insert, Macro, Replace


def make_invoker(text: str = "", **kwargs) -> OperationInvoker:
    return OperationInvoker(TextBuffer.from_text(text), **kwargs)


def test_insert_undo_redo_scenario() -> None:
    invoker = make_invoker()
    buffer = invoker.buffer

    invoker.execute_new(Insert("Hello", 0))
    assert buffer.text == "Hello"
    invoker.execute_new(Insert(" World", 5))
    assert buffer.text == "Hello World"

    assert invoker.undo() is True
    assert buffer.text == "Hello"
    assert invoker.undo() is True
    assert buffer.text == ""
    assert invoker.redo() is True
    assert buffer.text == "Hello"


def test_replace_scenario() -> None:
    invoker = make_invoker("Hello World")

    invoker.execute_new(Replace.capture(invoker.buffer, 6, 5, "Universe"))
    assert invoker.buffer.text == "Hello Universe"

    invoker.undo()
    assert invoker.buffer.text == "Hello World"


def test_macro_scenario() -> None:
    invoker = make_invoker()

    invoker.execute_new(Macro("Format Text", [Insert("*** ", 0), Insert(" ***", 4)]))
    assert invoker.buffer.text == "***  ***"
    assert invoker.undo_depth == 1

    invoker.undo()
    assert invoker.buffer.text == ""


def test_new_operation_after_undo_clears_redo() -> None:
    invoker = make_invoker()
    invoker.execute_new(Insert("a", 0))
    invoker.execute_new(Insert("b", 1))
    invoker.undo()
    assert invoker.can_redo()

    invoker.execute_new(Insert("c", 1))

    assert invoker.can_redo() is False
    assert invoker.redo() is False
    assert invoker.buffer.text == "ac"


def test_k_undos_restore_state_in_reverse_order() -> None:
    invoker = make_invoker("base")
    states: List[str] = [invoker.buffer.text]
    ops = [
        Insert("!", 4),
        Insert(">", 0),
    ]
    for op in ops:
        invoker.execute_new(op)
        states.append(invoker.buffer.text)
    invoker.execute_new(Delete.capture(invoker.buffer, 1, 2))
    states.append(invoker.buffer.text)

    for expected in reversed(states[:-1]):
        invoker.undo()
        assert invoker.buffer.text == expected

    assert invoker.buffer.text == "base"
    assert invoker.can_undo() is False


def test_empty_history_is_a_notice_not_an_error() -> None:
    events: List[Tuple[str, object]] = []
    bus = HistoryBus()
    bus.subscribe("history.empty", lambda payload: events.append(("empty", payload)))
    invoker = make_invoker(bus=bus)

    assert invoker.undo() is False
    assert invoker.redo() is False
    assert events == [("empty", "Nothing to undo"), ("empty", "Nothing to redo")]


def test_failed_execute_leaves_stacks_unchanged() -> None:
    invoker = make_invoker("abc")
    invoker.execute_new(Insert("d", 3))
    invoker.undo()

    with pytest.raises(OutOfRangeError):
        invoker.execute_new(Insert("x", 10))

    assert invoker.buffer.text == "abc"
    assert invoker.undo_depth == 0
    assert invoker.redo_depth == 1


class FailingUndo(EditOperation):
    def execute(self, buffer: TextBuffer) -> None:
        buffer.insert("z", 0)

    def undo(self, buffer: TextBuffer) -> None:
        raise RuntimeError("cannot reverse")

    def describe(self) -> str:
        return "failing undo"


def test_failed_undo_still_moves_entry_to_redo() -> None:
    invoker = make_invoker()
    invoker.execute_new(FailingUndo())

    with pytest.raises(RuntimeError):
        invoker.undo()

    assert invoker.undo_depth == 0
    assert invoker.redo_depth == 1


def test_failed_redo_keeps_entry_on_redo() -> None:
    invoker = make_invoker("abc")
    invoker.execute_new(Insert("d", 3))
    invoker.undo()
    invoker.buffer.clear()

    with pytest.raises(OutOfRangeError):
        invoker.redo()

    assert invoker.redo_depth == 1
    assert invoker.undo_depth == 0


def test_history_lists_most_recent_first() -> None:
    invoker = make_invoker()
    invoker.execute_new(Insert("Hello", 0))
    invoker.execute_new(Insert(" World", 5))
    invoker.execute_new(Insert("!", 11))
    invoker.undo()

    snapshot = invoker.history()

    assert snapshot.undo == (
        "Insert ' World' at position 5",
        "Insert 'Hello' at position 0",
    )
    assert snapshot.redo == ("Insert '!' at position 11",)
    assert snapshot.lines()[0] == "Undo stack (2 commands):"


def test_bus_announces_execute_undo_redo() -> None:
    names: List[str] = []
    invoker = make_invoker()
    for event in ("history.execute", "history.undo", "history.redo"):
        invoker.bus.subscribe(event, lambda payload, name=event: names.append(name))

    invoker.execute_new(Insert("a", 0))
    invoker.undo()
    invoker.redo()

    assert names == ["history.execute", "history.undo", "history.redo"]


def test_limit_discards_oldest_entries() -> None:
    invoker = make_invoker(limit=2)
    for index, char in enumerate("abc"):
        invoker.execute_new(Insert(char, index))

    assert invoker.undo_depth == 2
    invoker.undo()
    invoker.undo()
    assert invoker.undo() is False
    assert invoker.buffer.text == "a"


def test_group_folds_operations_into_one_entry() -> None:
    invoker = make_invoker("Universe")

    with invoker.group("Format Text"):
        invoker.execute_new(Insert("*** ", 0))
        invoker.execute_new(Insert(" ***", len(invoker.buffer)))

    assert invoker.buffer.text == "*** Universe ***"
    assert invoker.history().undo == ("Macro: Format Text (2 commands)",)

    invoker.undo()
    assert invoker.buffer.text == "Universe"
    invoker.redo()
    assert invoker.buffer.text == "*** Universe ***"


def test_group_rolls_back_when_block_raises() -> None:
    invoker = make_invoker("abc")

    with pytest.raises(OutOfRangeError):
        with invoker.group("broken"):
            invoker.execute_new(Insert("X", 0))
            invoker.execute_new(Delete.capture(invoker.buffer, 40, 1))

    assert invoker.buffer.text == "abc"
    assert invoker.can_undo() is False


def test_group_interrupted_rolls_back_and_invoker_recovers() -> None:
    invoker = make_invoker("abc")

    with pytest.raises(KeyboardInterrupt):
        with invoker.group("interrupted"):
            invoker.execute_new(Insert("X", 0))
            raise KeyboardInterrupt

    assert invoker.buffer.text == "abc"
    assert invoker.can_undo() is False

    invoker.execute_new(Insert("Y", 0))
    assert invoker.history().undo == ("Insert 'Y' at position 0",)
    assert invoker.undo() is True
    assert invoker.buffer.text == "abc"
    invoker.clear()
    assert invoker.can_redo() is False


def test_group_frame_released_after_rollback() -> None:
    invoker = make_invoker("abc")

    with pytest.raises(OutOfRangeError):
        with invoker.group("broken"):
            invoker.execute_new(Insert("X", 99))

    invoker.execute_new(Insert("Z", 3))
    assert invoker.undo_depth == 1
    assert invoker.redo() is False


def test_nested_group_becomes_child_macro() -> None:
    invoker = make_invoker()

    with invoker.group("outer"):
        invoker.execute_new(Insert("a", 0))
        with invoker.group("inner"):
            invoker.execute_new(Insert("b", 1))
            invoker.execute_new(Insert("c", 2))

    assert invoker.history().undo == ("Macro: outer (2 commands)",)
    invoker.undo()
    assert invoker.buffer.text == ""


def test_undo_inside_group_is_rejected() -> None:
    invoker = make_invoker()

    with pytest.raises(RuntimeError):
        with invoker.group("g"):
            invoker.undo()


def test_operation_stack_lifo_and_limit() -> None:
    stack = OperationStack(limit=2)
    first, second, third = Insert("1", 0), Insert("2", 0), Insert("3", 0)
    for op in (first, second, third):
        stack.push(op)

    assert list(stack) == [third, second]
    assert stack.peek() is third
    assert stack.pop() is third
    assert stack.pop() is second
    assert not stack
    with pytest.raises(IndexError):
        stack.pop()


def test_operation_stack_rejects_bad_limit() -> None:
    with pytest.raises(ValueError):
        OperationStack(limit=0)


def test_history_bus_rejects_unknown_events() -> None:
    bus = HistoryBus()

    with pytest.raises(ValueError):
        bus.subscribe("history.exeucte", lambda payload: None)
    with pytest.raises(ValueError):
        bus.emit("buffer.changed")


def test_history_bus_unsubscribe_stops_delivery() -> None:
    received: List[object] = []
    invoker = make_invoker()

    def listener(payload: object) -> None:
        received.append(payload)

    invoker.bus.subscribe("history.execute", listener)
    invoker.execute_new(Insert("a", 0))
    invoker.bus.unsubscribe("history.execute", listener)
    invoker.execute_new(Insert("b", 1))

    assert received == ["Insert 'a' at position 0"]
