"""Editor state store - single owner of all mutable editor configuration."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from PySide6.QtCore import QObject, Signal

from tilesmith.core.grid_geometry import pixel_to_tile_origin
from tilesmith.core.image_loader import DecodedImage
from tilesmith.core.surface import DrawingSurface

_logger = logging.getLogger(__name__)

DEFAULT_TILE_SIZE = 32
DEFAULT_MAP_SIZE = 32 * 10
# Tile sheet surface size before any image is loaded
DEFAULT_TILE_SHEET_SURFACE_SIZE = 318
# Largest accepted tile or map extent, same as a browser canvas
MAX_DIMENSION = 32767

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class TileSize:
    width: int
    height: int


@dataclass(frozen=True)
class MapDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class SelectedTile:
    """Pixel-space top-left corner of the selected tile on the tile sheet."""

    x: int
    y: int


def parse_dimension(value: object) -> int | None:
    """Convert raw user input into a positive pixel dimension.

    Strings are read by their leading integer ("12px" -> 12, "3.7" -> 3).

    Returns:
        The dimension, or None if the input is non-numeric, not positive or
        larger than MAX_DIMENSION.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return None
        number = int(value)
    elif isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if not match:
            return None
        number = int(match.group(1))
    else:
        return None
    if number <= 0 or number > MAX_DIMENSION:
        return None
    return number


class EditorState(QObject):
    """Holds tile size, map size, grid flag, selection, image and surfaces.

    Mutation goes only through the setters below. Every applied mutation
    emits ``changed`` exactly once; rejected input emits nothing.
    """

    changed = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tile_size = TileSize(DEFAULT_TILE_SIZE, DEFAULT_TILE_SIZE)
        self._map_dimensions = MapDimensions(DEFAULT_MAP_SIZE, DEFAULT_MAP_SIZE)
        self._show_grid: bool = False
        self._selected_tile: SelectedTile | None = None
        self._tile_sheet: DecodedImage | None = None
        self._tile_sheet_surface: DrawingSurface | None = None
        self._tile_map_surface: DrawingSurface | None = None

    # === Accessors ===

    @property
    def tile_size(self) -> TileSize:
        return self._tile_size

    @property
    def tile_width(self) -> int:
        return self._tile_size.width

    @property
    def tile_height(self) -> int:
        return self._tile_size.height

    @property
    def map_dimensions(self) -> MapDimensions:
        return self._map_dimensions

    @property
    def map_width(self) -> int:
        return self._map_dimensions.width

    @property
    def map_height(self) -> int:
        return self._map_dimensions.height

    @property
    def show_grid(self) -> bool:
        return self._show_grid

    @property
    def selected_tile(self) -> SelectedTile | None:
        return self._selected_tile

    @property
    def tile_sheet(self) -> DecodedImage | None:
        return self._tile_sheet

    @property
    def tile_sheet_surface(self) -> DrawingSurface | None:
        return self._tile_sheet_surface

    @property
    def tile_map_surface(self) -> DrawingSurface | None:
        return self._tile_map_surface

    # === Tile size ===

    def set_tile_width(self, value: object) -> bool:
        """Set tile width from raw input. Clears the selection on success."""
        width = parse_dimension(value)
        if width is None:
            _logger.debug(f"Rejected tile width: {value!r}")
            return False
        self._apply_tile_size(TileSize(width, self._tile_size.height))
        return True

    def set_tile_height(self, value: object) -> bool:
        """Set tile height from raw input. Clears the selection on success."""
        height = parse_dimension(value)
        if height is None:
            _logger.debug(f"Rejected tile height: {value!r}")
            return False
        self._apply_tile_size(TileSize(self._tile_size.width, height))
        return True

    def set_tile_size(self, width: object, height: object) -> bool:
        """Set both tile extents at once. Rejected unless both are valid."""
        new_width = parse_dimension(width)
        new_height = parse_dimension(height)
        if new_width is None or new_height is None:
            _logger.debug(f"Rejected tile size: {width!r} x {height!r}")
            return False
        self._apply_tile_size(TileSize(new_width, new_height))
        return True

    def _apply_tile_size(self, size: TileSize) -> None:
        # A selection is in units of the old tile size
        self._tile_size = size
        self._selected_tile = None
        self.changed.emit()

    # === Map dimensions ===

    def set_map_width(self, value: object) -> bool:
        """Set map width in pixels from raw input."""
        width = parse_dimension(value)
        if width is None:
            _logger.debug(f"Rejected map width: {value!r}")
            return False
        self._apply_map_dimensions(MapDimensions(width, self._map_dimensions.height))
        return True

    def set_map_height(self, value: object) -> bool:
        """Set map height in pixels from raw input."""
        height = parse_dimension(value)
        if height is None:
            _logger.debug(f"Rejected map height: {value!r}")
            return False
        self._apply_map_dimensions(MapDimensions(self._map_dimensions.width, height))
        return True

    def _apply_map_dimensions(self, dimensions: MapDimensions) -> None:
        if self._tile_map_surface is not None:
            self._tile_map_surface.resize(dimensions.width, dimensions.height)
        self._map_dimensions = dimensions
        self.changed.emit()

    # === Unconditional setters ===

    def set_show_grid(self, show: bool) -> None:
        self._show_grid = bool(show)
        self.changed.emit()

    def set_selected_tile(self, tile: SelectedTile | None) -> None:
        self._selected_tile = tile
        self.changed.emit()

    def clear_selection(self) -> None:
        self.set_selected_tile(None)

    def select_tile_at(self, offset_x: int, offset_y: int) -> SelectedTile:
        """Select the tile under a pointer offset on the tile sheet surface."""
        x, y = pixel_to_tile_origin(offset_x, offset_y, self.tile_width, self.tile_height)
        tile = SelectedTile(x, y)
        self.set_selected_tile(tile)
        return tile

    def set_tile_sheet_surface(self, surface: DrawingSurface | None) -> None:
        self._tile_sheet_surface = surface
        self.changed.emit()

    def set_tile_map_surface(self, surface: DrawingSurface | None) -> None:
        self._tile_map_surface = surface
        if surface is not None:
            surface.resize(self._map_dimensions.width, self._map_dimensions.height)
        self.changed.emit()

    # === Tile sheet ===

    def load_tile_sheet(self, decoded: DecodedImage) -> bool:
        """Adopt a decoded tile sheet, sizing the tile sheet surface to match.

        Returns:
            False if there is no tile sheet surface yet; the image is dropped.
        """
        surface = self._tile_sheet_surface
        if surface is None:
            _logger.error("No tile sheet surface, cannot load tile sheet")
            return False

        surface.resize(decoded.width, decoded.height)
        self._tile_sheet = decoded
        _logger.info(f"Loaded tile sheet {decoded.source} ({decoded.width}x{decoded.height})")
        self.changed.emit()
        return True
