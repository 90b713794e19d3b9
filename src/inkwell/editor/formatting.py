"""Declarative toolbar and keyboard formatting tables for the markdown editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

UNDO = "undo"
REDO = "redo"


@dataclass(frozen=True, slots=True)
class FormatAction:
    """Markdown markers inserted around the current selection.

    ``suffix`` of ``None`` repeats the prefix; ``""`` inserts no closing marker.
    """

    name: str
    label: str
    prefix: str
    suffix: str | None = None
    shortcut: str | None = None

    @property
    def tooltip(self) -> str:
        return f"{self.label} ({self.shortcut})" if self.shortcut else self.label


@dataclass(frozen=True, slots=True)
class ToolbarGroup:
    """Named cluster of toolbar actions rendered between dividers."""

    name: str
    title: str
    actions: tuple[str, ...]


_TABLE_LITERAL = "| Header | Header |\n| --- | --- |\n| Cell | Cell |"

FORMAT_ACTIONS: Mapping[str, FormatAction] = {
    action.name: action
    for action in (
        FormatAction("bold", "Bold", "**", "**", shortcut="Ctrl+B"),
        FormatAction("italic", "Italic", "*", "*", shortcut="Ctrl+I"),
        FormatAction("strikethrough", "Strikethrough", "~~", "~~"),
        FormatAction("inline_code", "Code", "`", "`", shortcut="Ctrl+E"),
        FormatAction("heading_1", "H1", "# ", ""),
        FormatAction("heading_2", "H2", "## ", ""),
        FormatAction("heading_3", "H3", "### ", ""),
        FormatAction("bullet_list", "Bullet List", "- ", ""),
        FormatAction("numbered_list", "Numbered List", "1. ", ""),
        FormatAction("task_list", "Task List", "- [ ] ", ""),
        FormatAction("link", "Link", "[", "](url)", shortcut="Ctrl+K"),
        FormatAction("image", "Image", "![alt text](", ")"),
        FormatAction("table", "Table", _TABLE_LITERAL, ""),
        FormatAction("code_block", "Code Block", "\n```\n", "\n```\n"),
        FormatAction("blockquote", "Blockquote", "> ", ""),
        FormatAction("horizontal_rule", "Horizontal Rule", "\n---\n", ""),
    )
}

TOOLBAR_GROUPS: tuple[ToolbarGroup, ...] = (
    ToolbarGroup("basic", "Basic Formatting", ("bold", "italic", "strikethrough", "inline_code")),
    ToolbarGroup("headings", "Headings", ("heading_1", "heading_2", "heading_3")),
    ToolbarGroup("lists", "Lists", ("bullet_list", "numbered_list", "task_list")),
    ToolbarGroup("insert", "Insert", ("link", "image", "table")),
    ToolbarGroup("blocks", "Blocks", ("code_block", "blockquote", "horizontal_rule")),
)

# Ctrl/Cmd + key; shift picks the second entry when one exists.
_KEY_BINDINGS: Mapping[str, tuple[str, str | None]] = {
    "b": ("bold", None),
    "i": ("italic", None),
    "k": ("link", None),
    "e": ("inline_code", None),
    "z": (UNDO, REDO),
}


def get_action(name: str) -> FormatAction:
    try:
        return FORMAT_ACTIONS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown formatting action: {name!r}") from exc


def resolve_shortcut(key: str, *, ctrl: bool = False, meta: bool = False, shift: bool = False) -> str | None:
    """Map a key press to a formatting action name, ``"undo"`` or ``"redo"``.

    Returns ``None`` for keys the editor does not intercept.
    """

    if not (ctrl or meta) or not key:
        return None
    binding = _KEY_BINDINGS.get(key.lower())
    if binding is None:
        return None
    plain, shifted = binding
    if shift and shifted is not None:
        return shifted
    return plain


__all__ = [
    "FormatAction",
    "ToolbarGroup",
    "FORMAT_ACTIONS",
    "TOOLBAR_GROUPS",
    "UNDO",
    "REDO",
    "get_action",
    "resolve_shortcut",
]
