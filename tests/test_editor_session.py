"""Tests for EditorSession edit operations and undo/redo."""

from __future__ import annotations

from inkwell.editor.controller import EditorController
from inkwell.editor.document_model import SelectionRange, Snapshot
from inkwell.editor.history import HistoryStore
from inkwell.editor.session import EditorSession, suggested_filename


def test_new_session_starts_empty(session: EditorSession) -> None:
    assert session.content == ""
    assert session.selection == SelectionRange(0, 0)
    assert len(session.history) == 0
    assert session.can_undo is False


def test_manual_edit_commits_content_and_selection(session: EditorSession) -> None:
    snapshot = session.apply_manual_edit("hello", (2, 4))

    assert session.content == "hello"
    assert session.selection == SelectionRange(2, 4)
    assert session.history.current() is snapshot
    assert len(session.history) == 1


def test_manual_edit_without_selection_places_caret_at_end(session: EditorSession) -> None:
    session.apply_manual_edit("hello")

    assert session.selection == SelectionRange(5, 5)


def test_bold_wraps_selection_and_keeps_wrapped_text_selected(session: EditorSession) -> None:
    session.apply_manual_edit("hello world", SelectionRange(0, 5))

    session.apply_formatting("**", "**")

    assert session.content == "**hello** world"
    assert session.selection == SelectionRange(2, 7)
    assert session.snapshot.selected_text == "hello"


def test_formatting_without_suffix_repeats_prefix_around_caret(session: EditorSession) -> None:
    session.apply_manual_edit("hello", SelectionRange(5, 5))

    session.apply_formatting("**")

    assert session.content == "hello****"
    assert session.selection == SelectionRange(7, 7)


def test_formatting_with_asymmetric_markers(session: EditorSession) -> None:
    session.apply_manual_edit("see docs", SelectionRange(4, 8))

    session.apply_formatting("[", "](url)")

    assert session.content == "see [docs](url)"
    assert session.selection == SelectionRange(5, 9)


def test_empty_suffix_inserts_line_prefix_only(session: EditorSession) -> None:
    session.apply_manual_edit("Title", SelectionRange(0, 5))

    session.apply_formatting("# ", "")

    assert session.content == "# Title"
    assert session.selection == SelectionRange(2, 7)


def test_formatting_on_empty_document(session: EditorSession) -> None:
    session.apply_formatting("`")

    assert session.content == "``"
    assert session.selection == SelectionRange(1, 1)
    assert len(session.history) == 1


def test_replace_content_collapses_caret_to_start(session: EditorSession) -> None:
    session.apply_manual_edit("draft", SelectionRange(1, 3))

    session.replace_content("# Generated\n\nText")

    assert session.content == "# Generated\n\nText"
    assert session.selection == SelectionRange(0, 0)
    assert len(session.history) == 2


def test_undo_and_redo_restore_content_and_caret(session: EditorSession) -> None:
    session.apply_manual_edit("hello world", SelectionRange(0, 5))
    session.apply_formatting("**", "**")

    restored = session.undo()

    assert restored == Snapshot("hello world", SelectionRange(0, 5))
    assert session.content == "hello world"
    assert session.selection == SelectionRange(0, 5)

    replayed = session.redo()

    assert replayed is not None
    assert session.content == "**hello** world"
    assert session.selection == SelectionRange(2, 7)


def test_undo_at_first_entry_is_a_noop(session: EditorSession) -> None:
    session.apply_manual_edit("only")

    assert session.undo() is None
    assert session.content == "only"


def test_edit_after_undo_drops_redo(session: EditorSession) -> None:
    session.apply_manual_edit("a")
    session.apply_manual_edit("ab")
    session.apply_manual_edit("abc")
    session.undo()
    session.undo()

    session.apply_manual_edit("aX")

    assert session.redo() is None
    assert [snapshot.content for snapshot in session.history.snapshots()] == ["a", "aX"]


def test_state_tracks_history_cursor_through_mixed_operations(session: EditorSession) -> None:
    session.apply_manual_edit("text", SelectionRange(0, 4))
    session.apply_formatting("*")
    session.replace_content("new")
    session.undo()

    assert session.snapshot == session.history.current()
    session.redo()
    assert session.snapshot == session.history.current()


def test_set_selection_moves_caret_without_committing(session: EditorSession) -> None:
    session.apply_manual_edit("hello world")

    session.set_selection(6, 11)
    session.apply_formatting("*")

    assert session.content == "hello *world*"
    assert len(session.history) == 2


def test_change_listeners_receive_committed_and_restored_snapshots(session: EditorSession) -> None:
    seen: list[str] = []
    session.add_change_listener(lambda snapshot: seen.append(snapshot.content))

    session.apply_manual_edit("one")
    session.apply_manual_edit("two")
    session.undo()
    session.undo()

    assert seen == ["one", "two", "one"]


def test_suggested_filename_slugifies_topic() -> None:
    assert suggested_filename("Rust  Ownership Basics") == "rust-ownership-basics.md"
    assert suggested_filename("   ") == "untitled.md"


def test_injected_empty_history_receives_commits() -> None:
    history = HistoryStore()
    session = EditorSession(history)

    session.apply_manual_edit("hello")

    assert session.history is history
    assert len(history) == 1
    assert history.current() == session.snapshot


def test_controller_keeps_injected_session_with_empty_history() -> None:
    session = EditorSession(HistoryStore())
    controller = EditorController(session)

    controller.type_text("draft")

    assert controller.session is session
    assert session.history.cursor == 0


def test_caret_move_diverges_from_history_until_next_commit(session: EditorSession) -> None:
    session.apply_manual_edit("hello world")

    session.set_selection(0, 5)

    assert session.history.current().selection == SelectionRange(11, 11)
    assert session.snapshot != session.history.current()

    session.apply_formatting("**")
    assert session.snapshot == session.history.current()
