"""WPM and accuracy over time, drawn on the results overlay."""

from __future__ import annotations

from typing import Optional, Sequence

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF
from PySide6.QtWidgets import QWidget

from glasshud.core.session import PerformanceSample
from glasshud.ui.colors import HudColors, blend_hex
from glasshud.ui.graph_layout import GRAPH_HEIGHT, GraphLayout, Padding, layout_graph


class PerformanceGraph(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._samples: tuple = ()
        self._padding = Padding()
        self.setFixedHeight(GRAPH_HEIGHT)
        self.setMinimumWidth(200)

    def set_samples(self, samples: Sequence[PerformanceSample]) -> None:
        self._samples = tuple(samples)
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        layout = layout_graph(self._samples, self.width(), self.height(), self._padding)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        font = QFont("JetBrains Mono")
        font.setStyleHint(QFont.StyleHint.Monospace)

        if not layout.enough_data:
            font.setPixelSize(12)
            painter.setFont(font)
            painter.setPen(QColor(255, 255, 255, 51))
            painter.drawText(self.rect(), Qt.AlignCenter, "Not enough data")
            return

        font.setPixelSize(9)
        painter.setFont(font)
        self._draw_axes(painter, layout)
        self._draw_wpm(painter, layout)
        self._draw_accuracy(painter, layout)

    def _draw_axes(self, painter: QPainter, layout: GraphLayout) -> None:
        pad = self._padding
        label_color = QColor(255, 255, 255, 77)
        for grid in layout.grid:
            painter.setPen(QPen(QColor(255, 255, 255, 13), 1))
            painter.drawLine(QPointF(pad.left, grid.position), QPointF(layout.width - pad.right, grid.position))
            painter.setPen(label_color)
            painter.drawText(
                QRectF(0, grid.position - 6, pad.left - 5, 12),
                Qt.AlignRight | Qt.AlignVCenter,
                grid.text,
            )
        for label in layout.x_labels:
            painter.drawText(
                QRectF(label.position - 20, layout.height - 16, 40, 12),
                Qt.AlignCenter,
                label.text,
            )

    def _draw_wpm(self, painter: QPainter, layout: GraphLayout) -> None:
        points = [QPointF(x, y) for x, y in layout.wpm_points]
        baseline = layout.height - self._padding.bottom

        area = QPolygonF([QPointF(points[0].x(), baseline), *points, QPointF(points[-1].x(), baseline)])
        fill = QColor(blend_hex(HudColors.ACCENT, HudColors.CARD_SOLID, 0.8))
        fill.setAlpha(120)
        painter.setPen(Qt.NoPen)
        painter.setBrush(fill)
        painter.drawPolygon(area)

        path = QPainterPath(points[0])
        for point in points[1:]:
            path.lineTo(point)
        painter.setBrush(Qt.NoBrush)
        glow = QColor(HudColors.ACCENT)
        glow.setAlpha(60)
        painter.setPen(QPen(glow, 6, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        painter.drawPath(path)
        painter.setPen(QPen(QColor(HudColors.ACCENT), 2, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        painter.drawPath(path)

    def _draw_accuracy(self, painter: QPainter, layout: GraphLayout) -> None:
        points = [QPointF(x, y) for x, y in layout.accuracy_points]
        path = QPainterPath(points[0])
        for point in points[1:]:
            path.lineTo(point)
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor(HudColors.ACCURACY), 2, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
        painter.drawPath(path)
