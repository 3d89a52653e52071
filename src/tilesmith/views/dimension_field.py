"""Numeric input field for pixel dimensions."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLineEdit, QWidget


class DimensionField(QLineEdit):
    """Line edit passing raw text on every edit.

    Validation belongs to the editor state; the field only shows the value the
    state accepted once editing finishes.
    """

    value_edited = Signal(str)

    def __init__(self, value: int, parent: QWidget | None = None) -> None:
        super().__init__(str(value), parent)
        self._value = value
        self.setFixedWidth(70)
        self.textEdited.connect(self.value_edited.emit)
        self.editingFinished.connect(self._restore_value)

    def value(self) -> int:
        """Last accepted value."""
        return self._value

    def set_value(self, value: int) -> None:
        """Record the accepted value, updating the text if not being edited."""
        self._value = value
        if not self.hasFocus():
            self.setText(str(value))

    def _restore_value(self) -> None:
        self.setText(str(self._value))
