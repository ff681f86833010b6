"""In-window results overlay shown when a test finishes."""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from glasshud.core.metrics import FinalMetrics
from glasshud.core.session import PerformanceSample
from glasshud.ui.colors import HudColors
from glasshud.ui.models import ResultsSummary
from glasshud.ui.performance_graph import PerformanceGraph


class ResultsOverlay(QWidget):
    """Results card over a dimmed background, clipped to the main window."""

    restartRequested = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        overlay_bg = QWidget(self)
        overlay_bg.setStyleSheet("background: rgba(2, 6, 23, 0.72);")
        overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        overlay_bg.setMinimumSize(1, 1)
        main_layout.addWidget(overlay_bg, 0, 0)

        radius = 24
        container = QFrame(self)
        container.setObjectName("resultsContainer")
        container.setMinimumWidth(560)
        container.setMaximumWidth(760)
        container.setStyleSheet(
            f"""
            QFrame#resultsContainer {{
                background: {HudColors.CARD_SOLID};
                border: 1px solid {HudColors.CARD_BORDER};
                border-radius: {radius}px;
            }}
            """
        )
        container_shadow = QGraphicsDropShadowEffect(container)
        container_shadow.setBlurRadius(40)
        container_shadow.setOffset(0, 12)
        container_shadow.setColor(QColor(34, 211, 238, 60))
        container.setGraphicsEffect(container_shadow)

        layout = QVBoxLayout(container)
        layout.setContentsMargins(36, 32, 36, 28)
        layout.setSpacing(18)

        title = QLabel("TEST COMPLETE")
        title.setStyleSheet(
            f"color: {HudColors.TEXT_SECONDARY}; font-size: 12px; font-weight: 600; letter-spacing: 3px;"
        )
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        # ---- Headline: WPM and accuracy ----
        headline = QHBoxLayout()
        headline.setSpacing(48)
        self._wpm_value = self._headline_stat(headline, "WPM", HudColors.ACCENT)
        self._accuracy_value = self._headline_stat(headline, "ACCURACY", HudColors.ACCURACY)
        layout.addLayout(headline)

        # ---- Detail tiles ----
        self._details_layout = QHBoxLayout()
        self._details_layout.setSpacing(12)
        layout.addLayout(self._details_layout)

        self._graph = PerformanceGraph(container)
        layout.addWidget(self._graph)

        legend = QLabel(
            f'<span style="color:{HudColors.ACCENT}">━ WPM</span>'
            f'&nbsp;&nbsp;&nbsp;<span style="color:{HudColors.ACCURACY}">━ Accuracy</span>'
        )
        legend.setStyleSheet(f"color: {HudColors.TEXT_MUTED}; font-size: 11px;")
        legend.setAlignment(Qt.AlignCenter)
        layout.addWidget(legend)

        restart_btn = QPushButton("Restart  (Esc)")
        restart_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        restart_btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        restart_btn.setFixedHeight(40)
        restart_btn.setStyleSheet(
            f"""
            QPushButton {{
                background: {HudColors.ACCENT};
                color: {HudColors.CARD_SOLID};
                border: none;
                border-radius: 12px;
                font-size: 14px;
                font-weight: 700;
                padding: 0 24px;
            }}
            QPushButton:hover {{ background: {HudColors.ACCENT_SOFT}; }}
            """
        )
        restart_btn.clicked.connect(self.restartRequested.emit)
        layout.addWidget(restart_btn, 0, Qt.AlignCenter)

        main_layout.addWidget(container, 0, 0, Qt.AlignCenter)
        self.hide()

    def _headline_stat(self, row: QHBoxLayout, caption: str, color: str) -> QLabel:
        column = QVBoxLayout()
        column.setSpacing(2)
        value = QLabel("0")
        value.setStyleSheet(f"color: {color}; font-size: 56px; font-weight: 800;")
        value.setAlignment(Qt.AlignCenter)
        label = QLabel(caption)
        label.setStyleSheet(
            f"color: {HudColors.TEXT_SECONDARY}; font-size: 11px; font-weight: 600; letter-spacing: 2px;"
        )
        label.setAlignment(Qt.AlignCenter)
        column.addWidget(value)
        column.addWidget(label)
        row.addStretch(1)
        row.addLayout(column)
        row.addStretch(1)
        return value

    def show_results(self, metrics: FinalMetrics, samples: Sequence[PerformanceSample]) -> None:
        summary = ResultsSummary.from_metrics(metrics)
        self._wpm_value.setText(summary.wpm)
        self._accuracy_value.setText(summary.accuracy)

        while self._details_layout.count():
            item = self._details_layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        for tile in summary.details:
            self._details_layout.addWidget(self._tile(tile.label, tile.value))

        self._graph.set_samples(samples)
        if self.parentWidget() is not None:
            self.setGeometry(self.parentWidget().rect())
        self.show()
        self.raise_()

    def _tile(self, caption: str, value: str) -> QFrame:
        tile = QFrame()
        tile.setObjectName("resultTile")
        tile.setStyleSheet(
            f"""
            QFrame#resultTile {{
                background: {HudColors.CARD_BG};
                border: 1px solid {HudColors.CARD_BORDER};
                border-radius: 12px;
            }}
            """
        )
        tile_layout = QVBoxLayout(tile)
        tile_layout.setContentsMargins(12, 10, 12, 10)
        tile_layout.setSpacing(2)
        value_label = QLabel(value)
        value_label.setStyleSheet(f"color: {HudColors.TEXT_PRIMARY}; font-size: 20px; font-weight: 700;")
        value_label.setAlignment(Qt.AlignCenter)
        caption_label = QLabel(caption)
        caption_label.setStyleSheet(f"color: {HudColors.TEXT_MUTED}; font-size: 10px; letter-spacing: 1px;")
        caption_label.setAlignment(Qt.AlignCenter)
        tile_layout.addWidget(value_label)
        tile_layout.addWidget(caption_label)
        return tile
