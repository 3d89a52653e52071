"""Off-screen drawing surface backing each canvas widget."""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal, Qt
from PySide6.QtGui import QImage, QPainter


class DrawingSurface(QObject):
    """Raster buffer the renderer draws into and a canvas widget displays.

    Resizing discards the current contents, like an HTML canvas.
    """

    resized = Signal(int, int)  # width, height
    updated = Signal()

    def __init__(self, name: str, width: int, height: int, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._name = name
        self._image = self._new_image(width, height)

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        image = QImage(max(0, width), max(0, height), QImage.Format.Format_ARGB32_Premultiplied)
        if not image.isNull():
            image.fill(Qt.GlobalColor.transparent)
        return image

    @property
    def name(self) -> str:
        return self._name

    def width(self) -> int:
        return self._image.width()

    def height(self) -> int:
        return self._image.height()

    def size(self) -> tuple[int, int]:
        return self._image.width(), self._image.height()

    def image(self) -> QImage:
        """Get the backing image."""
        return self._image

    def resize(self, width: int, height: int) -> None:
        """Resize the surface. Contents are cleared even if the size is unchanged."""
        self._image = self._new_image(width, height)
        self.resized.emit(self._image.width(), self._image.height())

    def begin_paint(self) -> QPainter | None:
        """Open a drawing context, or None if the surface cannot be painted."""
        if self._image.isNull():
            return None
        painter = QPainter(self._image)
        if not painter.isActive():
            return None
        return painter

    def mark_updated(self) -> None:
        """Notify viewers that new contents are ready."""
        self.updated.emit()

    def __repr__(self) -> str:
        return f"DrawingSurface({self._name!r}, {self.width()}x{self.height()})"
