"""Indexed PNG to WASM-4 sprite conversion pipeline."""
from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .encoding import encode_1bpp_image, encode_2bpp_image
from .errors import (
    FileWithoutStemError,
    ImageError,
    InvalidPaletteSizeError,
    NonUtf8PathError,
    PngDecodingError,
    SpriteIOError,
)
from .flags import Flags
from .palette_ops import compute_palette_mapping, ensure_indexed, extract_palette
from .variables import SpriteVariables


logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def open_png(data: bytes) -> Image.Image:
    """Open ``data`` as a PNG and read its header chunks.

    Pixel data is decoded lazily by Pillow, so only header problems surface
    here.
    """

    if not data.startswith(PNG_SIGNATURE):
        raise PngDecodingError()
    try:
        image = Image.open(io.BytesIO(data), formats=["PNG"])
    except Image.DecompressionBombError as exc:
        raise ImageError(f"image processing failed: {exc}") from exc
    except (UnidentifiedImageError, SyntaxError, ValueError, OSError) as exc:
        raise PngDecodingError(f"image is not encoded in PNG format: {exc}") from exc
    return image


def load_indexed(data: bytes) -> Image.Image:
    image = ensure_indexed(open_png(data))
    try:
        image.load()
    except (Image.DecompressionBombError, SyntaxError, ValueError, OSError) as exc:
        raise ImageError(f"image processing failed: {exc}") from exc
    return image


def convert_png_to_variables(name: str, data: bytes) -> SpriteVariables:
    """Convert raw PNG bytes into the sprite variables named ``name``."""

    image = load_indexed(data)
    palette = extract_palette(image)
    mapping = compute_palette_mapping(palette)
    logger.debug(
        "convert name=%s size=%s mode=%s palette=%s", name, image.size, image.mode, palette.size
    )

    if palette.size == 2:
        encoded, flags = encode_1bpp_image(image, mapping), Flags.ONE_BIT_PER_PIXEL
    elif palette.size == 4:
        encoded, flags = encode_2bpp_image(image, mapping), Flags.TWO_BITS_PER_PIXEL
    else:
        raise InvalidPaletteSizeError(palette.size)

    width, height = image.size
    return SpriteVariables(name=name, width=width, height=height, flags=flags, data=encoded)


def sprite_name(path: Path) -> str:
    """Return the file stem of ``path`` as a valid UTF-8 string."""

    stem = path.stem
    if not stem:
        raise FileWithoutStemError()
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise NonUtf8PathError() from exc
    return stem


def read_sprite_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SpriteIOError(f"an IO error occurred: {exc}") from exc


def convert_png_file(path: Path) -> SpriteVariables:
    name = sprite_name(path)
    return convert_png_to_variables(name, read_sprite_bytes(path))
