"""Translate Qt key events into the key names the keystroke processor understands."""

from __future__ import annotations

import unicodedata

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent

_QT_KEY_NAMES = {
    Qt.Key.Key_Backspace: "Backspace",
    Qt.Key.Key_Shift: "Shift",
    Qt.Key.Key_Control: "Control",
    Qt.Key.Key_Alt: "Alt",
    Qt.Key.Key_AltGr: "Alt",
    Qt.Key.Key_Meta: "Meta",
    Qt.Key.Key_CapsLock: "CapsLock",
    Qt.Key.Key_Tab: "Tab",
    Qt.Key.Key_Backtab: "Tab",
    Qt.Key.Key_Escape: "Escape",
    Qt.Key.Key_Up: "ArrowUp",
    Qt.Key.Key_Down: "ArrowDown",
    Qt.Key.Key_Left: "ArrowLeft",
    Qt.Key.Key_Right: "ArrowRight",
    Qt.Key.Key_Home: "Home",
    Qt.Key.Key_End: "End",
    Qt.Key.Key_PageUp: "PageUp",
    Qt.Key.Key_PageDown: "PageDown",
    Qt.Key.Key_Insert: "Insert",
    Qt.Key.Key_Delete: "Delete",
    Qt.Key.Key_Return: "Enter",
    Qt.Key.Key_Enter: "Enter",
}
_QT_KEY_NAMES.update({getattr(Qt.Key, f"Key_F{n}"): f"F{n}" for n in range(1, 13)})
_KEY_NAMES = {int(key): name for key, name in _QT_KEY_NAMES.items()}


def key_name(event: QKeyEvent) -> str:
    """Return a control-key name, the typed text, or "" for keys that produce nothing."""
    name = _KEY_NAMES.get(int(event.key()))
    if name is not None:
        return name
    text = event.text()
    # Ctrl/Alt chords come through as control characters
    if len(text) == 1 and unicodedata.category(text) == "Cc":
        return ""
    return text
