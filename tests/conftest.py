"""Pytest fixtures for Tilesmith tests."""

import os
import shutil
import tempfile
import time
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PIL import Image  # noqa: E402
from PySide6.QtCore import QSettings  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402


def pytest_configure(config):
    """Console-only logging so the test run never writes a log file."""
    from tilesmith.utils.logger import setup_logging
    from tilesmith.utils.settings import Settings

    settings_path = Path(tempfile.mkdtemp()) / "settings.ini"
    qsettings = QSettings(str(settings_path), QSettings.Format.IniFormat)
    qsettings.setValue("debug/logging_enabled", False)
    setup_logging(Settings(qsettings))


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Single QApplication for the whole test session."""
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    # Cleanup
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def state():
    """Fresh editor state with no surfaces attached."""
    from tilesmith.core.editor_state import EditorState

    return EditorState()


@pytest.fixture
def sheet_surface():
    """Tile sheet surface at its startup size."""
    from tilesmith.core.editor_state import DEFAULT_TILE_SHEET_SURFACE_SIZE
    from tilesmith.core.surface import DrawingSurface

    return DrawingSurface(
        "tile sheet", DEFAULT_TILE_SHEET_SURFACE_SIZE, DEFAULT_TILE_SHEET_SURFACE_SIZE
    )


@pytest.fixture
def map_surface():
    """Tile map surface at the default map size."""
    from tilesmith.core.surface import DrawingSurface

    return DrawingSurface("tile map", 320, 320)


@pytest.fixture
def wired_state(state, sheet_surface, map_surface):
    """Editor state with both surfaces attached."""
    state.set_tile_sheet_surface(sheet_surface)
    state.set_tile_map_surface(map_surface)
    return state


@pytest.fixture
def sheet_png(temp_dir: Path) -> Path:
    """A 96x64 red tile sheet written with Pillow."""
    path = temp_dir / "sheet.png"
    Image.new("RGBA", (96, 64), (255, 0, 0, 255)).save(path)
    return path


@pytest.fixture
def corrupt_png(temp_dir: Path) -> Path:
    """A file with a PNG name and header but no image data."""
    path = temp_dir / "broken.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n")
    return path


@pytest.fixture
def ini_settings(temp_dir: Path):
    """Settings backed by an ini file in the temp directory."""
    from tilesmith.utils.settings import Settings

    qsettings = QSettings(str(temp_dir / "settings.ini"), QSettings.Format.IniFormat)
    return Settings(qsettings)


@pytest.fixture
def wait_for(qapp):
    """Process Qt events until condition() is true or the timeout expires."""

    def wait(condition, timeout: float = 5.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            qapp.processEvents()
            if condition():
                return True
            time.sleep(0.01)
        return False

    return wait
