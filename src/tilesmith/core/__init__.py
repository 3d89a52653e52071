"""Editor core: geometry, state, rendering and image decoding."""

from .editor_state import EditorState, MapDimensions, SelectedTile, TileSize
from .image_loader import DecodedImage, ImageDecodeError
from .renderer import CanvasRenderer, RenderStyle
from .surface import DrawingSurface

__all__ = [
    "EditorState",
    "MapDimensions",
    "SelectedTile",
    "TileSize",
    "DecodedImage",
    "ImageDecodeError",
    "CanvasRenderer",
    "RenderStyle",
    "DrawingSurface",
]
