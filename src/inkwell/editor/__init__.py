"""Editor package containing the document model, history, and session."""

from .document_model import SelectionRange, Snapshot
from .history import HistoryStore
from .session import EditorSession

__all__ = ["EditorSession", "HistoryStore", "SelectionRange", "Snapshot"]
