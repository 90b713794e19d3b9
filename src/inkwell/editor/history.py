"""Branch-discarding linear undo/redo history of editor snapshots."""

from __future__ import annotations

import logging
from typing import List, Optional

from .document_model import EMPTY_SNAPSHOT, Snapshot

LOGGER = logging.getLogger(__name__)


class HistoryStore:
    """Ordered snapshot sequence with a movable cursor.

    The cursor is ``-1`` while nothing has been committed. Committing while the
    cursor sits behind the tail discards the redo branch before appending, so
    the history always stays linear.
    """

    def __init__(self) -> None:
        self._entries: List[Snapshot] = []
        self._cursor: int = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def push(self, snapshot: Snapshot) -> None:
        """Commit ``snapshot`` as the new tail, dropping any redo branch."""

        discarded = len(self._entries) - (self._cursor + 1)
        if discarded:
            del self._entries[self._cursor + 1 :]
            LOGGER.debug("Discarded %s redo snapshot(s)", discarded)
        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1

    def undo(self) -> Optional[Snapshot]:
        """Step back one entry; returns ``None`` when nothing can be undone."""

        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[Snapshot]:
        """Step forward one entry; returns ``None`` at the tail."""

        if not self.can_redo:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def current(self) -> Snapshot:
        if self._cursor < 0:
            return EMPTY_SNAPSHOT
        return self._entries[self._cursor]

    def snapshots(self) -> tuple[Snapshot, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = -1
