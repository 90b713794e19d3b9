"""Tests for the immutable snapshot values."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from inkwell.editor.document_model import SelectionRange, Snapshot


def test_selection_rejects_inverted_or_negative_ranges() -> None:
    with pytest.raises(ValueError):
        SelectionRange(5, 2)
    with pytest.raises(ValueError):
        SelectionRange(-1, 0)


def test_snapshot_rejects_selection_past_content() -> None:
    with pytest.raises(ValueError):
        Snapshot("abc", SelectionRange(1, 4))


def test_snapshot_is_frozen_and_exposes_selected_text() -> None:
    snapshot = Snapshot("hello world", SelectionRange(6, 11))

    assert snapshot.selected_text == "world"
    assert snapshot.to_dict() == {"content": "hello world", "selection": {"start": 6, "end": 11}}
    with pytest.raises(FrozenInstanceError):
        snapshot.content = "changed"  # type: ignore[misc]


def test_caret_helper_builds_collapsed_range() -> None:
    caret = SelectionRange.caret(3)

    assert caret.is_collapsed
    assert caret.length == 0
    assert caret.as_tuple() == (3, 3)
