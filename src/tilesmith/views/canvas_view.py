"""Canvas widgets displaying the tile sheet and tile map surfaces."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent, QPainter
from PySide6.QtWidgets import QWidget

from tilesmith.core.surface import DrawingSurface


class SurfaceCanvas(QWidget):
    """Shows a drawing surface at 1:1 scale and follows its size."""

    def __init__(self, surface: DrawingSurface, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._surface = surface
        self._surface.resized.connect(self._on_surface_resized)
        self._surface.updated.connect(self.update)
        self.setFixedSize(surface.width(), surface.height())

    def surface(self) -> DrawingSurface:
        return self._surface

    def _on_surface_resized(self, width: int, height: int) -> None:
        self.setFixedSize(width, height)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.drawImage(0, 0, self._surface.image())
        painter.end()


class TileSheetCanvas(SurfaceCanvas):
    """Tile sheet view reporting left clicks as pixel offsets."""

    clicked = Signal(int, int)  # offset x, offset y

    def __init__(self, surface: DrawingSurface, parent: QWidget | None = None) -> None:
        super().__init__(surface, parent)
        self.setCursor(Qt.CursorShape.CrossCursor)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position().toPoint()
            self.clicked.emit(pos.x(), pos.y())
            event.accept()
        else:
            super().mousePressEvent(event)
