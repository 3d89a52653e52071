"""Grid geometry for tile sheets and tile maps.

Pure functions shared by the renderer and the click handling. All values are
in surface pixels.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GridLines:
    """Interior grid line positions for one surface."""

    vertical: list[int]  # x positions
    horizontal: list[int]  # y positions
    width: int
    height: int


def _check_tile_extent(tile_extent: int) -> None:
    if tile_extent <= 0:
        raise ValueError(f"Tile extent must be positive, got {tile_extent}")


def grid_line_count(surface_extent: int, tile_extent: int) -> int:
    """Number of whole tiles that fit along one axis of a surface."""
    _check_tile_extent(tile_extent)
    return surface_extent // tile_extent


def grid_line_positions(surface_extent: int, tile_extent: int) -> list[int]:
    """Get positions of the interior grid lines along one axis.

    Lines sit on every multiple of the tile extent strictly between 0 and the
    surface edge. The border lines at 0 and at the far edge are never returned.
    """
    _check_tile_extent(tile_extent)
    if surface_extent <= tile_extent:
        return []
    return list(range(tile_extent, surface_extent, tile_extent))


def grid_lines(width: int, height: int, tile_width: int, tile_height: int) -> GridLines:
    """Compute both axes of the grid overlay for a surface of the given size."""
    return GridLines(
        vertical=grid_line_positions(width, tile_width),
        horizontal=grid_line_positions(height, tile_height),
        width=width,
        height=height,
    )


def pixel_to_tile_origin(
    offset_x: int, offset_y: int, tile_width: int, tile_height: int
) -> tuple[int, int]:
    """Snap a pointer offset to the top-left corner of the containing tile.

    No bounds checking is done: offsets outside the image still give a tile
    origin, which may lie past the image edge.
    """
    _check_tile_extent(tile_width)
    _check_tile_extent(tile_height)
    # Floor division so negative offsets snap to the cell on their left/top
    return (
        int(offset_x // tile_width) * tile_width,
        int(offset_y // tile_height) * tile_height,
    )


def tile_rect(x: int, y: int, tile_width: int, tile_height: int) -> tuple[int, int, int, int]:
    """Highlight rectangle (x, y, width, height) for a tile origin."""
    return x, y, tile_width, tile_height
