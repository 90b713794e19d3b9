"""Immutable values describing editor content and caret selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Half-open caret selection ``[start, end)`` inside the document text."""

    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid selection range: [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def as_tuple(self) -> tuple[int, int]:
        """Return the selection as a tuple for serialization."""

        return (self.start, self.end)

    @classmethod
    def caret(cls, offset: int) -> "SelectionRange":
        return cls(offset, offset)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Document content plus caret selection at one point in history."""

    content: str = ""
    selection: SelectionRange = field(default_factory=SelectionRange)

    def __post_init__(self) -> None:
        if self.selection.end > len(self.content):
            raise ValueError(
                f"Selection {self.selection.as_tuple()} exceeds content length {len(self.content)}"
            )

    @property
    def selected_text(self) -> str:
        return self.content[self.selection.start : self.selection.end]

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable payload for logging and export collaborators."""

        return {
            "content": self.content,
            "selection": {"start": self.selection.start, "end": self.selection.end},
        }


EMPTY_SNAPSHOT = Snapshot()
