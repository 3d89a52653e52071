"""Main window with tile map and tile sheet panels."""

from pathlib import Path

from PySide6.QtCore import QBuffer, QIODevice, QMimeData, Qt
from PySide6.QtGui import QAction, QActionGroup, QDragEnterEvent, QDropEvent, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from tilesmith.core.editor_state import DEFAULT_TILE_SHEET_SURFACE_SIZE, EditorState
from tilesmith.core.image_loader import (
    ALL_IMAGE_FORMATS,
    DecodedImage,
    ImageDecodeError,
    decode_image_bytes,
    is_supported_image,
)
from tilesmith.core.renderer import CanvasRenderer
from tilesmith.core.surface import DrawingSurface
from tilesmith.core.tile_sheet_loader import TileSheetLoader
from tilesmith.utils.i18n import LANGUAGE_NAMES, SUPPORTED_LANGUAGES, tr
from tilesmith.utils.logger import get_logger, is_file_logging_enabled, set_logging_enabled
from tilesmith.utils.settings import Settings
from tilesmith.views.canvas_view import SurfaceCanvas, TileSheetCanvas
from tilesmith.views.dimension_field import DimensionField

_logger = get_logger()


class MainWindow(QMainWindow):
    """Tile map on the left, tile sheet and its controls on the right."""

    def __init__(self, settings: Settings | None = None):
        _logger.info("MainWindow.__init__ started")
        super().__init__()
        self._settings = settings or Settings()
        self._state = EditorState(self)
        self._renderer = CanvasRenderer(self._settings.load_render_style())
        self._loader = TileSheetLoader(self)

        self._tile_sheet_surface = DrawingSurface(
            "tile sheet", DEFAULT_TILE_SHEET_SURFACE_SIZE, DEFAULT_TILE_SHEET_SURFACE_SIZE, self
        )
        self._tile_map_surface = DrawingSurface(
            "tile map", self._state.map_width, self._state.map_height, self
        )

        self.setAcceptDrops(True)

        _logger.debug("Setting up UI...")
        self._setup_ui()
        _logger.debug("Setting up menu...")
        self._setup_menu()
        _logger.debug("Connecting signals...")
        self._connect_signals()
        _logger.debug("Loading settings...")
        self._load_settings()

        # Surfaces become available once their canvases exist
        self._state.set_tile_map_surface(self._tile_map_surface)
        self._state.set_tile_sheet_surface(self._tile_sheet_surface)
        self._renderer.attach(self._state)

        self.setWindowTitle(tr("app_name"))
        _logger.info("MainWindow.__init__ completed")

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def loader(self) -> TileSheetLoader:
        return self._loader

    def _setup_ui(self):
        """Setup the main UI layout."""
        self._splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(self._splitter)

        self._splitter.addWidget(self._create_map_panel())
        self._splitter.addWidget(self._create_sheet_panel())
        self._splitter.setStretchFactor(0, 1)
        self._splitter.setSizes([800, 360])

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(tr("ready"))

    def _create_map_panel(self) -> QWidget:
        """Tile map canvas with grid toggle and map size fields."""
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(5, 5, 5, 5)

        controls = QHBoxLayout()
        self._show_grid_check = QCheckBox(tr("show_grid"))
        self._show_grid_check.setChecked(self._state.show_grid)
        self._map_width_field = DimensionField(self._state.map_width)
        self._map_height_field = DimensionField(self._state.map_height)

        controls.addWidget(self._show_grid_check)
        controls.addSpacing(10)
        controls.addWidget(QLabel(tr("width")))
        controls.addWidget(self._map_width_field)
        controls.addWidget(QLabel(tr("height")))
        controls.addWidget(self._map_height_field)
        controls.addStretch()
        layout.addLayout(controls)

        self._map_canvas = SurfaceCanvas(self._tile_map_surface)
        map_scroll = QScrollArea()
        map_scroll.setAlignment(Qt.AlignmentFlag.AlignCenter)
        map_scroll.setWidget(self._map_canvas)
        layout.addWidget(map_scroll, stretch=1)

        return panel

    def _create_sheet_panel(self) -> QWidget:
        """Tile sheet canvas with open button and tile size fields."""
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.setContentsMargins(5, 5, 5, 5)

        self._open_button = QPushButton(tr("open_tile_sheet"))
        layout.addWidget(self._open_button)

        layout.addWidget(QLabel(tr("tile_sheet")))

        self._sheet_canvas = TileSheetCanvas(self._tile_sheet_surface)
        sheet_scroll = QScrollArea()
        sheet_scroll.setFixedSize(320, 320)
        sheet_scroll.setWidget(self._sheet_canvas)
        layout.addWidget(sheet_scroll)

        size_layout = QHBoxLayout()
        self._tile_width_field = DimensionField(self._state.tile_width)
        self._tile_height_field = DimensionField(self._state.tile_height)
        size_layout.addWidget(QLabel(tr("tile_width")))
        size_layout.addWidget(self._tile_width_field)
        size_layout.addWidget(QLabel(tr("tile_height")))
        size_layout.addWidget(self._tile_height_field)
        size_layout.addStretch()
        layout.addLayout(size_layout)

        self._selection_label = QLabel()
        layout.addWidget(self._selection_label)
        layout.addStretch()

        return panel

    def _setup_menu(self):
        """Setup menu bar."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu(tr("menu_file"))

        open_action = QAction(tr("open_tile_sheet"), self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._open_file_dialog)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        exit_action = QAction(tr("exit"), self)
        exit_action.setShortcut(QKeySequence("Ctrl+Q"))
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        # Edit menu
        edit_menu = menubar.addMenu(tr("menu_edit"))

        paste_action = QAction(tr("paste_tile_sheet"), self)
        paste_action.setShortcut(QKeySequence.StandardKey.Paste)
        paste_action.triggered.connect(lambda: self.paste_tile_sheet())
        edit_menu.addAction(paste_action)

        # View menu
        view_menu = menubar.addMenu(tr("menu_view"))

        self._show_grid_action = QAction(tr("show_grid"), self)
        self._show_grid_action.setCheckable(True)
        self._show_grid_action.setShortcut(QKeySequence("G"))
        self._show_grid_action.triggered.connect(self._state.set_show_grid)
        view_menu.addAction(self._show_grid_action)

        clear_selection_action = QAction(tr("clear_selection"), self)
        clear_selection_action.setShortcut(QKeySequence("Escape"))
        clear_selection_action.triggered.connect(self._state.clear_selection)
        view_menu.addAction(clear_selection_action)

        # Settings menu
        settings_menu = menubar.addMenu(tr("menu_settings"))

        self._file_logging_action = QAction(tr("file_logging"), self)
        self._file_logging_action.setCheckable(True)
        self._file_logging_action.setChecked(is_file_logging_enabled())
        self._file_logging_action.triggered.connect(
            lambda enabled: set_logging_enabled(enabled, self._settings)
        )
        settings_menu.addAction(self._file_logging_action)

        # Language, applied on next start
        language_menu = settings_menu.addMenu(tr("menu_language"))
        self._language_group = QActionGroup(self)
        saved_language = self._settings.load_language()
        choices = [("", tr("system_default"))]
        choices += [(code, LANGUAGE_NAMES.get(code, code)) for code in SUPPORTED_LANGUAGES]
        for code, name in choices:
            action = QAction(name, self)
            action.setCheckable(True)
            action.setData(code)
            if code == (saved_language if saved_language in SUPPORTED_LANGUAGES else ""):
                action.setChecked(True)
            self._language_group.addAction(action)
            language_menu.addAction(action)
        self._language_group.triggered.connect(self._on_language_selected)

    def _on_language_selected(self, action: QAction):
        code = action.data()
        if code:
            self._settings.save_language(code)
        else:
            self._settings.clear_language()
        _logger.info(f"Language set to {code or 'system default'}")
        self._status_bar.showMessage(tr("restart_required"))

    def _connect_signals(self):
        """Wire widgets to the editor state."""
        self._show_grid_check.toggled.connect(self._state.set_show_grid)
        self._map_width_field.value_edited.connect(self._state.set_map_width)
        self._map_height_field.value_edited.connect(self._state.set_map_height)
        self._tile_width_field.value_edited.connect(self._state.set_tile_width)
        self._tile_height_field.value_edited.connect(self._state.set_tile_height)
        self._sheet_canvas.clicked.connect(self._state.select_tile_at)
        self._open_button.clicked.connect(self._open_file_dialog)

        self._loader.decoded.connect(self._on_tile_sheet_decoded)
        self._loader.failed.connect(self._on_tile_sheet_failed)

        self._state.changed.connect(self._sync_controls)

    def _sync_controls(self):
        """Reflect accepted state values in the controls."""
        state = self._state
        self._map_width_field.set_value(state.map_width)
        self._map_height_field.set_value(state.map_height)
        self._tile_width_field.set_value(state.tile_width)
        self._tile_height_field.set_value(state.tile_height)

        for toggle in (self._show_grid_check, self._show_grid_action):
            if toggle.isChecked() != state.show_grid:
                toggle.blockSignals(True)
                toggle.setChecked(state.show_grid)
                toggle.blockSignals(False)

        selection = state.selected_tile
        if selection is None:
            self._selection_label.setText(tr("no_selection"))
        else:
            self._selection_label.setText(tr("selected_tile", x=selection.x, y=selection.y))

    # === Tile sheet loading ===

    def _open_file_dialog(self):
        """Pick one or more tile sheet files."""
        start_dir = self._settings.load_last_open_dir() or Path.home()
        patterns = " ".join(f"*{ext}" for ext in sorted(ALL_IMAGE_FORMATS))
        files, _ = QFileDialog.getOpenFileNames(
            self,
            tr("open_tile_sheet"),
            str(start_dir),
            f"{tr('images')} ({patterns})",
        )
        if files:
            paths = [Path(f) for f in files]
            self._settings.save_last_open_dir(paths[0].parent)
            self.open_tile_sheets(paths)

    def open_tile_sheets(self, paths: list[Path]):
        """Decode files in the background. The last one to finish is kept."""
        for path in paths:
            _logger.info(f"Opening tile sheet: {path}")
        self._status_bar.showMessage(tr("loading"))
        self._loader.submit_many(paths)

    def _on_tile_sheet_decoded(self, decoded: DecodedImage):
        if self._state.load_tile_sheet(decoded):
            self._status_bar.showMessage(
                tr(
                    "tile_sheet_loaded",
                    name=Path(decoded.source).name,
                    width=decoded.width,
                    height=decoded.height,
                )
            )

    def _on_tile_sheet_failed(self, source: str, reason: str):
        _logger.error(f"Failed to load tile sheet {source}: {reason}")
        self._status_bar.showMessage(tr("cannot_load_image", name=Path(source).name))

    def paste_tile_sheet(self, mime: QMimeData | None = None) -> bool:
        """Load a tile sheet from clipboard image data."""
        if mime is None:
            mime = QApplication.clipboard().mimeData()
        data = self._image_data(mime) if mime is not None else None
        if data is None:
            self._status_bar.showMessage(tr("clipboard_no_image"))
            return False
        return self._load_image_data(data, tr("clipboard"))

    def _load_image_data(self, data: bytes, name: str) -> bool:
        """Decode in-memory image data and adopt it as the tile sheet."""
        try:
            decoded = decode_image_bytes(data, name)
        except ImageDecodeError as e:
            self._on_tile_sheet_failed(e.source, e.reason)
            return False
        self._on_tile_sheet_decoded(decoded)
        return True

    @staticmethod
    def _image_data(mime: QMimeData) -> bytes | None:
        """Raw image bytes from mime data, PNG preferred."""
        formats = mime.formats()
        if "image/png" in formats:
            return mime.data("image/png").data()
        for fmt in formats:
            if fmt.startswith("image/"):
                return mime.data(fmt).data()
        if mime.hasImage():
            buffer = QBuffer()
            buffer.open(QIODevice.OpenModeFlag.WriteOnly)
            mime.imageData().save(buffer, "PNG")
            return buffer.data().data()
        return None

    # === Drag and drop ===

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        """Accept drops containing local image files or image data."""
        mime = event.mimeData()
        if self._dropped_images(mime) or self._image_data(mime) is not None:
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:
        """Open dropped image files, or dropped image data, as tile sheets."""
        mime = event.mimeData()
        paths = self._dropped_images(mime)
        if paths:
            self.open_tile_sheets(paths)
            event.acceptProposedAction()
            return
        data = self._image_data(mime)
        if data is not None:
            self._load_image_data(data, tr("dropped_image"))
            event.acceptProposedAction()
            return
        super().dropEvent(event)

    @staticmethod
    def _dropped_images(mime: QMimeData) -> list[Path]:
        if not mime.hasUrls():
            return []
        paths = [Path(url.toLocalFile()) for url in mime.urls() if url.isLocalFile()]
        return [p for p in paths if is_supported_image(p)]

    # === Settings ===

    def _load_settings(self):
        """Load saved settings."""
        geometry = self._settings.load_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)
        else:
            self.resize(1200, 800)

        state = self._settings.load_window_state()
        if state:
            self.restoreState(state)

        sizes = self._settings.load_splitter_sizes()
        if sizes:
            self._splitter.setSizes(sizes)

    def _save_settings(self):
        """Save current settings."""
        self._settings.save_window_geometry(self.saveGeometry())
        self._settings.save_window_state(self.saveState())
        self._settings.save_splitter_sizes(self._splitter.sizes())

    def closeEvent(self, event):
        """Save settings on close."""
        self._save_settings()
        super().closeEvent(event)
