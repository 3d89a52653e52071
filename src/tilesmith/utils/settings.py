"""Application settings management."""

from pathlib import Path

from PySide6.QtCore import QSettings

from tilesmith.core.renderer import RenderStyle


class Settings:
    """Manage application settings using QSettings.

    Only window and display preferences are stored; tile maps themselves are
    never saved.
    """

    def __init__(self, qsettings: QSettings | None = None):
        self._settings = qsettings if qsettings is not None else QSettings("Tilesmith", "Tilesmith")

    # Window geometry
    def save_window_geometry(self, geometry: bytes):
        """Save window geometry."""
        self._settings.setValue("window/geometry", geometry)

    def load_window_geometry(self) -> bytes | None:
        """Load window geometry."""
        return self._settings.value("window/geometry")

    def save_window_state(self, state: bytes):
        """Save window state."""
        self._settings.setValue("window/state", state)

    def load_window_state(self) -> bytes | None:
        """Load window state."""
        return self._settings.value("window/state")

    # Splitter sizes
    def save_splitter_sizes(self, sizes: list[int]):
        """Save splitter sizes."""
        self._settings.setValue("window/splitter_sizes", sizes)

    def load_splitter_sizes(self) -> list[int] | None:
        """Load splitter sizes."""
        sizes = self._settings.value("window/splitter_sizes")
        if sizes:
            return [int(s) for s in sizes]
        return None

    # Last directory used in the open dialog
    def save_last_open_dir(self, path: Path):
        """Save last tile sheet directory."""
        self._settings.setValue("navigation/last_open_dir", str(path))

    def load_last_open_dir(self) -> Path | None:
        """Load last tile sheet directory, if it still exists."""
        path_str = self._settings.value("navigation/last_open_dir")
        if path_str:
            path = Path(path_str)
            if path.is_dir():
                return path
        return None

    # Language
    def save_language(self, lang: str):
        """Save language setting."""
        self._settings.setValue("general/language", lang)

    def load_language(self) -> str | None:
        """Load language setting. Returns None if not set (use system default)."""
        return self._settings.value("general/language")

    def clear_language(self):
        """Forget the language setting so the system language is used."""
        self._settings.remove("general/language")

    # Logging enabled
    def save_logging_enabled(self, enabled: bool):
        """Save logging enabled setting."""
        self._settings.setValue("debug/logging_enabled", enabled)

    def load_logging_enabled(self) -> bool:
        """Load logging enabled setting. Default True."""
        return self._settings.value("debug/logging_enabled", True, type=bool)

    # Render colors
    def save_render_style(self, style: RenderStyle):
        """Save grid, highlight and background colors."""
        self._settings.setValue("render/grid_color", style.grid_color)
        self._settings.setValue("render/highlight_color", style.highlight_color)
        self._settings.setValue("render/map_background", style.map_background)
        self._settings.setValue("render/line_width", style.line_width)

    def load_render_style(self) -> RenderStyle:
        """Load render colors. Defaults match RenderStyle()."""
        default = RenderStyle()
        return RenderStyle(
            grid_color=self._settings.value("render/grid_color", default.grid_color, type=str),
            highlight_color=self._settings.value(
                "render/highlight_color", default.highlight_color, type=str
            ),
            map_background=self._settings.value(
                "render/map_background", default.map_background, type=str
            ),
            line_width=self._settings.value("render/line_width", default.line_width, type=int),
        )
