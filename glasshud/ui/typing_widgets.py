"""Typing test UI: the target text grid with its block cursor."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QRectF, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QFontMetricsF, QKeyEvent, QPainter
from PySide6.QtWidgets import QSizePolicy, QWidget

from glasshud.core.session import Verdict
from glasshud.ui.colors import HudColors
from glasshud.ui.key_mapping import key_name
from glasshud.ui.text_layout import first_visible_line, wrap_positions

_VERDICT_COLORS = {
    Verdict.UNTESTED: HudColors.CHAR_UNTESTED,
    Verdict.CORRECT: HudColors.CHAR_CORRECT,
    Verdict.INCORRECT: HudColors.CHAR_INCORRECT,
}


class TypingArea(QWidget):
    """Monospaced character grid showing a verdict colour per character.

    Shows three wrapped lines at a time and scrolls so the cursor stays on the
    second line. Key presses are forwarded as key names through
    ``keyPressed``; the widget itself never judges anything.
    """

    keyPressed = Signal(str)

    VISIBLE_LINES = 3
    PADDING = 8
    TYPING_PULSE_MS = 500

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._text = ""
        self._verdicts: list[Verdict] = []
        self._cursor = 0
        self._typing = False
        self._positions: list[tuple[int, int]] = []

        self._font = QFont("JetBrains Mono")
        self._font.setStyleHint(QFont.StyleHint.Monospace)
        self._font.setPointSize(20)
        metrics = QFontMetricsF(self._font)
        self._char_width = metrics.horizontalAdvance("M")
        self._line_height = metrics.height() * 1.5

        self._typing_timer = QTimer(self)
        self._typing_timer.setSingleShot(True)
        self._typing_timer.setInterval(self.TYPING_PULSE_MS)
        self._typing_timer.timeout.connect(self._end_typing_pulse)

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMinimumWidth(320)

    def sizeHint(self) -> QSize:
        height = int(self.VISIBLE_LINES * self._line_height + 2 * self.PADDING)
        return QSize(900, height)

    def minimumSizeHint(self) -> QSize:
        return QSize(320, self.sizeHint().height())

    def set_text(self, text: str) -> None:
        """Show a new target text with every character untested."""
        self._text = text
        self._verdicts = [Verdict.UNTESTED] * len(text)
        self._cursor = 0
        self._relayout()
        self.update()

    def set_verdict(self, index: int, verdict: Verdict) -> None:
        if 0 <= index < len(self._verdicts):
            self._verdicts[index] = verdict
            self.update()

    def set_cursor(self, index: int) -> None:
        self._cursor = max(0, min(index, len(self._text)))
        self.update()

    def pulse_typing(self) -> None:
        """Switch the cursor to its typing style until keys stop for a moment."""
        self._typing = True
        self._typing_timer.start()
        self.update()

    def _end_typing_pulse(self) -> None:
        self._typing = False
        self.update()

    def _relayout(self) -> None:
        usable = max(0.0, self.width() - 2 * self.PADDING)
        columns = max(1, int(usable // self._char_width))
        self._positions = wrap_positions(self._text, columns)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._relayout()

    def focusNextPrevChild(self, next: bool) -> bool:
        # Tab goes to the test (where it is ignored), not to the next widget
        return False

    def keyPressEvent(self, event: QKeyEvent) -> None:
        name = key_name(event)
        if name:
            self.keyPressed.emit(name)
        event.accept()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if not self._positions:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setFont(self._font)

        cursor_index = min(self._cursor, len(self._positions) - 1)
        first_line = first_visible_line(self._positions[cursor_index][0], self.VISIBLE_LINES)
        last_line = first_line + self.VISIBLE_LINES

        for index, (line, col) in enumerate(self._positions):
            if line < first_line:
                continue
            if line >= last_line:
                break
            rect = QRectF(
                self.PADDING + col * self._char_width,
                self.PADDING + (line - first_line) * self._line_height,
                self._char_width,
                self._line_height,
            )
            verdict = self._verdicts[index]
            if index == cursor_index:
                color = HudColors.CURSOR_TYPING if self._typing else HudColors.CURSOR
                painter.setPen(Qt.NoPen)
                painter.setBrush(QColor(color))
                painter.drawRoundedRect(rect.adjusted(0, 4, 0, -4), 3, 3)
                text_color = QColor(HudColors.CARD_SOLID)
            else:
                if verdict is Verdict.INCORRECT:
                    painter.setPen(Qt.NoPen)
                    painter.setBrush(QColor(HudColors.CHAR_INCORRECT_BG))
                    painter.drawRoundedRect(rect.adjusted(0, 4, 0, -4), 3, 3)
                text_color = QColor(_VERDICT_COLORS[verdict])
            painter.setPen(text_color)
            painter.drawText(rect, Qt.AlignCenter, self._text[index])
