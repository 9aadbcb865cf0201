"""Palette extraction and color lookup helpers."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from PIL import Image

from .errors import NotIndexedPngError


ColorTuple = Tuple[int, int, int]

logger = logging.getLogger(__name__)

_INDEXED_MODES = {"P", "PA"}


@dataclass(slots=True)
class PaletteInfo:
    """Snapshot of the explicit palette stored in an indexed PNG."""

    colors: List[ColorTuple]

    @property
    def size(self) -> int:
        return len(self.colors)

    @property
    def keys(self) -> List[int]:
        return [color_key(color) for color in self.colors]


def color_key(color: ColorTuple) -> int:
    """Pack an RGB color into a 32-bit value, leaving the alpha byte zero."""

    r, g, b = color[:3]
    return (r << 24) | (g << 16) | (b << 8)


def pixel_keys(image: Image.Image) -> np.ndarray:
    """Return a ``height x width`` array with the color key of every pixel."""

    rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32)
    return (rgba[..., 0] << 24) | (rgba[..., 1] << 16) | (rgba[..., 2] << 8)


def ensure_indexed(image: Image.Image) -> Image.Image:
    """Reject images without an explicit palette.

    Only the mode is checked, so this runs before any pixel data is decoded.
    """

    if image.mode not in _INDEXED_MODES:
        raise NotIndexedPngError()
    return image


def extract_palette(image: Image.Image) -> PaletteInfo:
    """Return every entry of the palette stored in ``image``.

    Unused trailing entries are not trimmed, so they still count toward the
    palette size.
    """

    ensure_indexed(image)
    palette = image.getpalette()
    if not palette:
        raise NotIndexedPngError()
    colors: List[ColorTuple] = []
    for i in range(0, len(palette) - 2, 3):
        colors.append((palette[i], palette[i + 1], palette[i + 2]))
    logger.debug("extract_palette mode=%s colors=%s", image.mode, len(colors))
    return PaletteInfo(colors=colors)


def compute_palette_mapping(palette: PaletteInfo) -> Dict[int, int]:
    """Map each palette color key to its index.

    Later duplicates overwrite earlier ones.
    """

    return {key: index for index, key in enumerate(palette.keys)}
