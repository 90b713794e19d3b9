"""Editor-side flow wiring input events and generation onto a session."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .document_model import SelectionRange, Snapshot
from .formatting import REDO, UNDO, get_action, resolve_shortcut
from .session import EditorSession, suggested_filename

LOGGER = logging.getLogger(__name__)

_GENERIC_FAILURE = "Failed to generate content. Please try again."


class GenerationRequester(Protocol):
    """Source of generation replies shaped like the ``/generate`` endpoint."""

    async def request(self, topic: str) -> Any:  # pragma: no cover - protocol stub
        ...


@dataclass(frozen=True, slots=True)
class Notification:
    """Non-fatal, user-visible message (a toast in the UI layer)."""

    level: str
    message: str


class NotificationListener(Protocol):
    def __call__(self, notification: Notification) -> None:
        ...


class EditorController:
    """Dispatches keyboard/toolbar input and generation results to a session.

    Generation never touches the session until the reply arrives, and a
    failed reply leaves the document unchanged. Only one generation may be in
    flight at a time.
    """

    def __init__(
        self,
        session: EditorSession | None = None,
        *,
        requester: GenerationRequester | None = None,
    ) -> None:
        self._session = session if session is not None else EditorSession()
        self._requester = requester
        self._listeners: list[NotificationListener] = []
        self._generating = False
        self._topic = ""

    @property
    def session(self) -> EditorSession:
        return self._session

    @property
    def is_generating(self) -> bool:
        return self._generating

    @property
    def topic(self) -> str:
        return self._topic

    def add_notification_listener(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------
    def type_text(self, content: str, selection: SelectionRange | tuple[int, int] | None = None) -> Snapshot:
        return self._session.apply_manual_edit(content, selection)

    def apply_action(self, name: str) -> Snapshot:
        action = get_action(name)
        return self._session.apply_formatting(action.prefix, action.suffix)

    def handle_key(self, key: str, *, ctrl: bool = False, meta: bool = False, shift: bool = False) -> bool:
        """Handle a shortcut; returns ``True`` when the key press was consumed."""

        command = resolve_shortcut(key, ctrl=ctrl, meta=meta, shift=shift)
        if command is None:
            return False
        if command == UNDO:
            self._session.undo()
        elif command == REDO:
            self._session.redo()
        else:
            self.apply_action(command)
        return True

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    async def generate(self, topic: str) -> Snapshot | None:
        """Request a document for ``topic`` and replace the content on success."""

        if not topic or not topic.strip():
            self._notify("error", "Please enter a topic first")
            return None
        if self._requester is None:
            self._notify("error", "Generation is not available")
            return None
        if self._generating:
            self._notify("warning", "A generation request is already running")
            return None

        self._generating = True
        try:
            response = await self._requester.request(topic)
        finally:
            self._generating = False

        body = getattr(response, "body", None) or {}
        content = body.get("content") if getattr(response, "ok", False) else None
        if not isinstance(content, str):
            message = body.get("error") or _GENERIC_FAILURE
            LOGGER.warning(
                "Generation failed (status=%s): %s", getattr(response, "status_code", None), message
            )
            self._notify("error", str(message))
            return None

        self._topic = topic.strip()
        snapshot = self._session.replace_content(content)
        self._notify("success", "Content generated successfully!")
        return snapshot

    def export_filename(self) -> str:
        return suggested_filename(self._topic)

    def _notify(self, level: str, message: str) -> None:
        notification = Notification(level, message)
        for listener in list(self._listeners):
            listener(notification)


__all__ = ["EditorController", "GenerationRequester", "Notification"]
