from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from glasshud.core.controller import SessionController
from glasshud.core.effects import (
    CellVerdictChanged,
    CursorMoved,
    Effect,
    LiveMetricsUpdated,
    SessionFinished,
    SessionReset,
    VelocityChanged,
)
from glasshud.core.settings import MAX_DURATION, MIN_DURATION
from glasshud.ui.colors import HudColors, blend_hex
from glasshud.ui.results_overlay import ResultsOverlay
from glasshud.ui.typing_widgets import TypingArea

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen typing test: live stats, duration picker, text card, results overlay.

    All state lives in the ``SessionController``; the window forwards key
    presses and button clicks to it and renders the effects it emits.
    """

    def __init__(self, controller: SessionController) -> None:
        super().__init__()
        self._controller = controller
        self._pills: dict[int, QPushButton] = {}
        self._wpm_label: Optional[QLabel] = None
        self._accuracy_label: Optional[QLabel] = None
        self._time_label: Optional[QLabel] = None
        self._card: Optional[QFrame] = None
        self._card_shadow: Optional[QGraphicsDropShadowEffect] = None
        self._custom_time: Optional[QSpinBox] = None

        self.setWindowTitle("Glass HUD")
        self.setMinimumSize(760, 520)
        self._build_ui()

        self._controller.subscribe(self._on_effect)

        self._typing_area.set_text(self._controller.state.text)
        self._select_pill(self._controller.duration_seconds)
        self._set_velocity(False)
        self._controller.refresh()

        escape = QShortcut(QKeySequence(Qt.Key.Key_Escape), self)
        escape.activated.connect(self._on_escape)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("hudRoot")
        root.setStyleSheet(
            f"""
            QWidget#hudRoot {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {HudColors.BG_TOP}, stop:1 {HudColors.BG_BOTTOM});
            }}
            """
        )
        layout = QVBoxLayout(root)
        layout.setContentsMargins(48, 36, 48, 36)
        layout.setSpacing(24)

        # ---- Stats row ----
        stats = QHBoxLayout()
        stats.setSpacing(16)
        self._wpm_label = self._stat(stats, "WPM", "0")
        self._accuracy_label = self._stat(stats, "ACCURACY", "100")
        self._time_label = self._stat(stats, "TIME", str(self._controller.duration_seconds))
        layout.addLayout(stats)

        # ---- Timer pills ----
        pills = QHBoxLayout()
        pills.setSpacing(8)
        pills.addStretch(1)
        for seconds in self._controller.settings.presets:
            pill = QPushButton(f"{seconds}s")
            pill.setCheckable(True)
            pill.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            pill.setCursor(Qt.CursorShape.PointingHandCursor)
            pill.setStyleSheet(self._pill_style())
            pill.clicked.connect(lambda _checked=False, s=seconds: self._on_duration_chosen(s))
            self._pills[seconds] = pill
            pills.addWidget(pill)

        self._custom_time = QSpinBox()
        self._custom_time.setRange(MIN_DURATION, MAX_DURATION)
        self._custom_time.setSuffix(" s")
        self._custom_time.setSpecialValueText("custom")
        self._custom_time.setMinimum(MIN_DURATION - 1)
        self._custom_time.setValue(MIN_DURATION - 1)
        self._custom_time.setFixedWidth(96)
        self._custom_time.setStyleSheet(
            f"""
            QSpinBox {{
                background: {HudColors.CARD_BG};
                color: {HudColors.TEXT_PRIMARY};
                border: 1px solid {HudColors.CARD_BORDER};
                border-radius: 14px;
                padding: 4px 10px;
            }}
            """
        )
        self._custom_time.editingFinished.connect(self._on_custom_time)
        pills.addWidget(self._custom_time)
        pills.addStretch(1)
        layout.addLayout(pills)

        # ---- Text card ----
        self._card = QFrame()
        self._card.setObjectName("glassCard")
        card_layout = QVBoxLayout(self._card)
        card_layout.setContentsMargins(28, 28, 28, 28)
        self._typing_area = TypingArea(self._card)
        self._typing_area.keyPressed.connect(self._on_key)
        card_layout.addWidget(self._typing_area)
        self._card_shadow = QGraphicsDropShadowEffect(self._card)
        self._card_shadow.setBlurRadius(36)
        self._card_shadow.setOffset(0, 10)
        self._card.setGraphicsEffect(self._card_shadow)
        layout.addWidget(self._card)

        restart_btn = QPushButton("↻  Restart")
        restart_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        restart_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        restart_btn.setStyleSheet(self._pill_style())
        restart_btn.clicked.connect(self._on_restart)
        layout.addWidget(restart_btn, 0, Qt.AlignCenter)
        layout.addStretch(1)

        self.setCentralWidget(root)

        self._results = ResultsOverlay(self)
        self._results.restartRequested.connect(self._on_restart)

    def _stat(self, row: QHBoxLayout, caption: str, initial: str) -> QLabel:
        box = QFrame()
        box.setObjectName("statCard")
        box.setStyleSheet(
            f"""
            QFrame#statCard {{
                background: {HudColors.CARD_BG};
                border: 1px solid {HudColors.CARD_BORDER};
                border-radius: 16px;
            }}
            """
        )
        box_layout = QVBoxLayout(box)
        box_layout.setContentsMargins(20, 12, 20, 12)
        box_layout.setSpacing(0)
        value = QLabel(initial)
        value.setStyleSheet(f"color: {HudColors.TEXT_PRIMARY}; font-size: 32px; font-weight: 800;")
        value.setAlignment(Qt.AlignCenter)
        label = QLabel(caption)
        label.setStyleSheet(
            f"color: {HudColors.TEXT_SECONDARY}; font-size: 11px; font-weight: 600; letter-spacing: 2px;"
        )
        label.setAlignment(Qt.AlignCenter)
        box_layout.addWidget(value)
        box_layout.addWidget(label)
        row.addWidget(box)
        return value

    @staticmethod
    def _pill_style() -> str:
        return f"""
            QPushButton {{
                background: {HudColors.CARD_BG};
                color: {HudColors.TEXT_SECONDARY};
                border: 1px solid {HudColors.CARD_BORDER};
                border-radius: 14px;
                padding: 6px 16px;
                font-weight: 600;
            }}
            QPushButton:hover {{ color: {HudColors.TEXT_PRIMARY}; }}
            QPushButton:checked {{
                background: {HudColors.ACCENT};
                color: {HudColors.CARD_SOLID};
                border-color: {HudColors.ACCENT};
            }}
        """

    def _set_velocity(self, active: bool) -> None:
        if self._card is None or self._card_shadow is None:
            return
        border = HudColors.VELOCITY if active else HudColors.CARD_BORDER
        tint = blend_hex(HudColors.CARD_SOLID, HudColors.VELOCITY, 0.12 if active else 0.0)
        self._card.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {tint};
                border: 1px solid {border};
                border-radius: 24px;
            }}
            """
        )
        glow = QColor(HudColors.VELOCITY if active else "#000000")
        glow.setAlpha(140 if active else 90)
        self._card_shadow.setColor(glow)

    def _select_pill(self, seconds: int) -> None:
        for value, pill in self._pills.items():
            pill.setChecked(value == seconds)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def _on_key(self, name: str) -> None:
        if self._controller.submit_key(name):
            self._typing_area.pulse_typing()

    def _on_duration_chosen(self, seconds: int) -> None:
        logger.debug("Duration pill %ds selected", seconds)
        if self._custom_time is not None:
            self._custom_time.blockSignals(True)
            self._custom_time.setValue(self._custom_time.minimum())
            self._custom_time.blockSignals(False)
        self._controller.configure(seconds)
        self._select_pill(self._controller.duration_seconds)
        self._typing_area.setFocus()

    def _on_custom_time(self) -> None:
        if self._custom_time is None:
            return
        value = self._custom_time.value()
        if value == self._controller.duration_seconds:
            return
        if self._controller.configure(value):
            self._select_pill(-1)
        self._typing_area.setFocus()

    def _on_restart(self) -> None:
        self._controller.request_restart()
        self._typing_area.setFocus()

    def _on_escape(self) -> None:
        if self._controller.results_visible:
            self._on_restart()

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _on_effect(self, effect: Effect) -> None:
        if isinstance(effect, CellVerdictChanged):
            self._typing_area.set_verdict(effect.index, effect.verdict)
        elif isinstance(effect, CursorMoved):
            self._typing_area.set_cursor(effect.index)
        elif isinstance(effect, LiveMetricsUpdated):
            self._wpm_label.setText(str(effect.wpm))
            self._accuracy_label.setText(str(effect.accuracy))
            self._time_label.setText(str(effect.remaining_seconds))
        elif isinstance(effect, VelocityChanged):
            self._set_velocity(effect.active)
        elif isinstance(effect, SessionFinished):
            self._results.show_results(effect.metrics, effect.samples)
        elif isinstance(effect, SessionReset):
            self._results.hide()
            self._typing_area.set_text(effect.target_text)
            self._time_label.setText(str(effect.duration_seconds))

    def resizeEvent(self, event) -> None:
        """Keep the overlay covering the window and re-send the live view."""
        super().resizeEvent(event)
        self._results.setGeometry(self.rect())
        QTimer.singleShot(10, self._controller.refresh)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._typing_area.setFocus()
