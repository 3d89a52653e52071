"""Tile sheet image decoding with Qt and Pillow."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

from PySide6.QtGui import QImage
from PIL import Image, UnidentifiedImageError


# Standard image formats supported by Qt natively
QT_NATIVE_FORMATS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".tiff", ".tif", ".ico"}

# Other raster formats read through Pillow
PILLOW_FORMATS = {
    ".jfif",
    ".jpe",  # JPEG variants
    ".tga",  # Targa
    ".pcx",  # PCX
    ".dds",  # DirectDraw Surface
    ".pbm",
    ".pgm",
    ".ppm",
    ".pnm",  # Netpbm
    ".sgi",
    ".rgb",
    ".rgba",
    ".bw",  # SGI
    ".im",  # IM
    ".msp",  # MSP
    ".xbm",  # XBM
    ".xpm",  # XPM
    ".cur",  # Windows cursor
    ".icns",  # macOS icon
    ".qoi",  # QOI (Quite OK Image)
}

# All supported formats
ALL_IMAGE_FORMATS = QT_NATIVE_FORMATS | PILLOW_FORMATS


class ImageDecodeError(Exception):
    """Raised when a file cannot be decoded into a tile sheet."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot decode {source}: {reason}")
        self.source = source
        self.reason = reason


@dataclass(frozen=True)
class DecodedImage:
    """A decoded tile sheet with its natural pixel size."""

    image: QImage
    width: int
    height: int
    source: str  # File path or display name


def is_supported_image(path: Path) -> bool:
    """Check if path has a supported image extension."""
    return path.suffix.lower() in ALL_IMAGE_FORMATS


def _decoded(image: QImage, source: str) -> DecodedImage:
    return DecodedImage(image=image, width=image.width(), height=image.height(), source=source)


def _pil_to_qimage(pil_image: Image.Image) -> QImage:
    """Convert a PIL image to a QImage that owns its pixel data."""
    # Animated formats: first frame only
    if getattr(pil_image, "n_frames", 1) > 1:
        pil_image.seek(0)

    if pil_image.mode != "RGBA":
        pil_image = pil_image.convert("RGBA")

    data = pil_image.tobytes("raw", "RGBA")
    qimage = QImage(
        data,
        pil_image.width,
        pil_image.height,
        pil_image.width * 4,
        QImage.Format.Format_RGBA8888,
    )
    # Detach from the Python buffer
    return qimage.copy()


def _decode_with_pillow(stream, source: str) -> QImage:
    try:
        with Image.open(stream) as pil_image:
            pil_image.load()
            return _pil_to_qimage(pil_image)
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
        raise ImageDecodeError(source, str(e)) from e


def decode_image_file(path: Path) -> DecodedImage:
    """Decode an image file.

    Qt-native formats are tried with Qt first, then Pillow.

    Raises:
        ImageDecodeError: The file is missing, unreadable or not an image.
    """
    source = str(path)
    if not path.is_file():
        raise ImageDecodeError(source, "file not found")

    if path.suffix.lower() in QT_NATIVE_FORMATS:
        image = QImage(source)
        if not image.isNull():
            return _decoded(image, source)

    return _decoded(_decode_with_pillow(path, source), source)


def decode_image_bytes(data: bytes, name: str = "<memory>") -> DecodedImage:
    """Decode an in-memory image (e.g. dropped or pasted data).

    Pillow is tried first since it supports more formats, then Qt.

    Raises:
        ImageDecodeError: The data is empty or not an image.
    """
    if not data:
        raise ImageDecodeError(name, "no data")

    try:
        return _decoded(_decode_with_pillow(BytesIO(data), name), name)
    except ImageDecodeError as pillow_error:
        image = QImage()
        if image.loadFromData(data) and not image.isNull():
            return _decoded(image, name)
        raise pillow_error
