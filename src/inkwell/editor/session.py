"""Editing session owning the current document state and its history."""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol

from .document_model import SelectionRange, Snapshot
from .history import HistoryStore

LOGGER = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


class ChangeListener(Protocol):
    """Callback invoked with the snapshot the session now reflects."""

    def __call__(self, snapshot: Snapshot) -> None:
        ...


class EditorSession:
    """Value holder keeping content/selection in sync with a :class:`HistoryStore`.

    Every edit either commits a new snapshot or adopts one restored from
    history, so after each edit, undo or redo the session state equals the
    snapshot at the history cursor. :meth:`set_selection` is the exception: it
    moves the live caret without committing, and the next edit commits it.
    None of the operations suspend; callers hosting the session in a
    concurrent environment must serialize access.
    """

    def __init__(self, history: HistoryStore | None = None) -> None:
        self._history = history if history is not None else HistoryStore()
        self._snapshot = self._history.current()
        self._listeners: list[ChangeListener] = []

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def content(self) -> str:
        return self._snapshot.content

    @property
    def selection(self) -> SelectionRange:
        return self._snapshot.selection

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def history(self) -> HistoryStore:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Register a callback fired whenever the session adopts a new snapshot."""

        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Edit operations
    # ------------------------------------------------------------------
    def apply_manual_edit(
        self,
        new_content: str,
        new_selection: SelectionRange | tuple[int, int] | None = None,
    ) -> Snapshot:
        """Adopt text typed directly into the editor and commit it."""

        if new_selection is None:
            selection = SelectionRange.caret(len(new_content))
        elif isinstance(new_selection, SelectionRange):
            selection = new_selection
        else:
            selection = SelectionRange(*new_selection)
        return self._commit(Snapshot(new_content, selection))

    def apply_formatting(self, prefix: str, suffix: Optional[str] = None) -> Snapshot:
        """Wrap the current selection in ``prefix``/``suffix`` and commit.

        ``suffix`` defaults to ``prefix``; pass ``""`` for line prefixes that
        take no closing marker. The new selection spans exactly the wrapped
        text, which collapses to a caret between the markers when nothing was
        selected.
        """

        closing = prefix if suffix is None else suffix
        content = self._snapshot.content
        start, end = self._snapshot.selection.as_tuple()
        new_content = content[:start] + prefix + content[start:end] + closing + content[end:]
        inner_start = start + len(prefix)
        selection = SelectionRange(inner_start, inner_start + (end - start))
        return self._commit(Snapshot(new_content, selection))

    def replace_content(self, new_content: str) -> Snapshot:
        """Replace the whole document (used for generated content).

        The caret always collapses to the start of the document.
        """

        return self._commit(Snapshot(new_content, SelectionRange.caret(0)))

    def set_selection(self, start: int, end: int | None = None) -> Snapshot:
        """Move the caret without committing; caret moves are not edits."""

        selection = SelectionRange(start, start if end is None else end)
        self._snapshot = Snapshot(self._snapshot.content, selection)
        return self._snapshot

    # ------------------------------------------------------------------
    # Undo/redo
    # ------------------------------------------------------------------
    def undo(self) -> Optional[Snapshot]:
        return self._restore(self._history.undo())

    def redo(self) -> Optional[Snapshot]:
        return self._restore(self._history.redo())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _commit(self, snapshot: Snapshot) -> Snapshot:
        self._history.push(snapshot)
        self._adopt(snapshot)
        LOGGER.debug(
            "Committed snapshot #%s (chars=%s, selection=%s)",
            self._history.cursor,
            len(snapshot.content),
            snapshot.selection.as_tuple(),
        )
        return snapshot

    def _restore(self, snapshot: Optional[Snapshot]) -> Optional[Snapshot]:
        if snapshot is None:
            return None
        self._adopt(snapshot)
        return snapshot

    def _adopt(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)


def suggested_filename(topic: str, *, extension: str = ".md") -> str:
    """Return the download filename used when exporting a generated document."""

    stem = _WHITESPACE_RUN.sub("-", topic.strip().lower()) or "untitled"
    return f"{stem}{extension}"
