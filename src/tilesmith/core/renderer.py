"""Canvas renderer - full redraw of the tile sheet and tile map surfaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PySide6.QtCore import QLine, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from tilesmith.core.editor_state import EditorState
from tilesmith.core.grid_geometry import GridLines, grid_lines, tile_rect
from tilesmith.core.surface import DrawingSurface

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStyle:
    """Colors used by the renderer (names accepted by QColor)."""

    grid_color: str = "#000000"
    highlight_color: str = "#aa34bde3"  # #34bde3 at 2/3 opacity, ARGB
    map_background: str = "#ffffff"
    line_width: int = 1


@dataclass(frozen=True)
class SurfaceScene:
    """Primitives for one surface, in paint order."""

    width: int
    height: int
    background: str | None  # None clears to transparent
    image: QImage | None
    grid: GridLines | None
    highlight: tuple[int, int, int, int] | None  # x, y, width, height


def build_tile_sheet_scene(state: EditorState, surface: DrawingSurface) -> SurfaceScene:
    """Describe the tile sheet surface: image, full grid, selection highlight."""
    width, height = surface.size()
    selection = state.selected_tile
    highlight = None
    if selection is not None:
        highlight = tile_rect(selection.x, selection.y, state.tile_width, state.tile_height)

    return SurfaceScene(
        width=width,
        height=height,
        background=None,
        image=state.tile_sheet.image if state.tile_sheet is not None else None,
        grid=grid_lines(width, height, state.tile_width, state.tile_height),
        highlight=highlight,
    )


def build_tile_map_scene(
    state: EditorState, surface: DrawingSurface, style: RenderStyle
) -> SurfaceScene:
    """Describe the tile map surface: background and the optional grid.

    The grid spans the configured map dimensions, not the surface pixel size.
    """
    grid = None
    if state.show_grid:
        grid = grid_lines(state.map_width, state.map_height, state.tile_width, state.tile_height)

    return SurfaceScene(
        width=surface.width(),
        height=surface.height(),
        background=style.map_background,
        image=None,
        grid=grid,
        highlight=None,
    )


def paint_scene(painter: QPainter, scene: SurfaceScene, style: RenderStyle) -> None:
    """Paint a scene onto an open drawing context."""
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, False)

    if scene.background is None:
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        painter.fillRect(0, 0, scene.width, scene.height, Qt.GlobalColor.transparent)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)
    else:
        painter.fillRect(0, 0, scene.width, scene.height, QColor(scene.background))

    if scene.image is not None:
        painter.drawImage(0, 0, scene.image)

    if scene.grid is not None:
        pen = QPen(QColor(style.grid_color))
        pen.setWidth(style.line_width)
        painter.setPen(pen)
        grid = scene.grid
        lines = [QLine(x, 0, x, grid.height) for x in grid.vertical]
        lines += [QLine(0, y, grid.width, y) for y in grid.horizontal]
        if lines:
            painter.drawLines(lines)

    if scene.highlight is not None:
        x, y, w, h = scene.highlight
        painter.fillRect(x, y, w, h, QColor(style.highlight_color))


class CanvasRenderer:
    """Redraws both surfaces whenever the editor state changes."""

    def __init__(self, style: RenderStyle | None = None) -> None:
        self._style = style or RenderStyle()
        self._state: EditorState | None = None
        self._render_count = 0

    @property
    def style(self) -> RenderStyle:
        return self._style

    @property
    def render_count(self) -> int:
        """Number of completed render passes."""
        return self._render_count

    def set_style(self, style: RenderStyle) -> None:
        self._style = style
        if self._state is not None:
            self.render(self._state)

    def attach(self, state: EditorState) -> None:
        """Subscribe to a state store and render its current contents."""
        if self._state is not None:
            self._state.changed.disconnect(self._on_state_changed)
        self._state = state
        state.changed.connect(self._on_state_changed)
        self.render(state)

    def _on_state_changed(self) -> None:
        if self._state is not None:
            self.render(self._state)

    def render(self, state: EditorState) -> bool:
        """Run one full render pass over both surfaces.

        Returns:
            False if the pass was skipped because a surface or its drawing
            context is unavailable. Nothing is drawn in that case.
        """
        tile_map_surface = state.tile_map_surface
        tile_sheet_surface = state.tile_sheet_surface

        if tile_map_surface is None:
            _logger.error("No tile map surface")
            return False

        if tile_sheet_surface is None:
            _logger.error("No tile sheet surface")
            return False

        sheet_painter = tile_sheet_surface.begin_paint()
        map_painter = tile_map_surface.begin_paint()

        try:
            if map_painter is None:
                _logger.error("No tile map drawing context")
                return False

            if sheet_painter is None:
                _logger.error("No tile sheet drawing context")
                return False

            paint_scene(sheet_painter, build_tile_sheet_scene(state, tile_sheet_surface), self._style)
            paint_scene(
                map_painter, build_tile_map_scene(state, tile_map_surface, self._style), self._style
            )
        finally:
            if sheet_painter is not None:
                sheet_painter.end()
            if map_painter is not None:
                map_painter.end()

        self._render_count += 1
        tile_sheet_surface.mark_updated()
        tile_map_surface.mark_updated()
        return True
