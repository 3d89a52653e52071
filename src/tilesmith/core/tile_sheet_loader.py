"""Background decoding of tile sheet files."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock, Thread

from PySide6.QtCore import QObject, Signal

from tilesmith.core.image_loader import DecodedImage, ImageDecodeError, decode_image_file

_logger = logging.getLogger(__name__)


class TileSheetLoader(QObject):
    """Decodes tile sheet files off the UI thread.

    Results arrive through queued signals on the thread owning the loader.
    Requests are independent and never cancelled, so when several are in
    flight the one that finishes last is the one the editor ends up showing.
    """

    decoded = Signal(object)  # DecodedImage
    failed = Signal(str, str)  # source, reason

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending = 0
        self._pending_lock = Lock()

    def is_loading(self) -> bool:
        """Check if any decode is still running."""
        with self._pending_lock:
            return self._pending > 0

    def submit(self, path: Path) -> None:
        """Decode a file in a background thread."""
        _logger.info(f"Decoding tile sheet: {path}")
        with self._pending_lock:
            self._pending += 1

        def load_task():
            try:
                result = decode_image_file(path)
            except ImageDecodeError as e:
                _logger.warning(str(e))
                self.failed.emit(e.source, e.reason)
            except Exception as e:
                _logger.error(f"Unexpected error decoding {path}: {e}", exc_info=True)
                self.failed.emit(str(path), str(e))
            else:
                self.decoded.emit(result)
            finally:
                with self._pending_lock:
                    self._pending -= 1

        thread = Thread(target=load_task, daemon=True)
        thread.start()

    def submit_many(self, paths: list[Path]) -> None:
        """Decode several files, each independently."""
        for path in paths:
            self.submit(path)
