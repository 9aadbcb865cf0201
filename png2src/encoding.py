"""Packing of palette indices into WASM-4 1bpp/2bpp sprite data.

Pixels are visited row by row from the top-left corner and stored most
significant bits first.  The byte index follows the pixel position in the
image while the bit position only depends on the column, so only widths that
are a multiple of 8 (1bpp) or 4 (2bpp) give non-overlapping rows.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

import numpy as np
from PIL import Image

from .palette_ops import pixel_keys


logger = logging.getLogger(__name__)

# (byte index, shift, mask) for pixel (x, y) in an image of the given width.
BitLocator = Callable[[int, int, int], Tuple[int, int, int]]


def _locate_1bpp(x: int, y: int, width: int) -> Tuple[int, int, int]:
    idx = (y * width + x) >> 3
    shift = 7 - (x & 0x07)
    return idx, shift, 0x1 << shift


def _locate_2bpp(x: int, y: int, width: int) -> Tuple[int, int, int]:
    idx = (y * width + x) >> 2
    shift = 6 - ((x & 0x03) << 1)
    return idx, shift, 0x3 << shift


_LOCATORS: Dict[int, BitLocator] = {1: _locate_1bpp, 2: _locate_2bpp}


def encoded_length(width: int, height: int, bits_per_pixel: int) -> int:
    return (width * height * bits_per_pixel + 7) // 8


def encode_image(
    image: Image.Image, mapping: Dict[int, int], bits_per_pixel: int
) -> bytes:
    """Pack every pixel of ``image`` as its index in ``mapping``.

    ``mapping`` must hold the color key of every pixel; it is built from the
    palette of the same image so a missing key means a broken invariant.
    """

    try:
        locate = _LOCATORS[bits_per_pixel]
    except KeyError:
        raise ValueError(f"Unsupported bits per pixel: {bits_per_pixel}") from None

    width, height = image.size
    keys = pixel_keys(image)
    out = bytearray()
    for y in range(height):
        row = keys[y]
        for x in range(width):
            index = mapping.get(int(row[x]))
            assert index is not None, f"Missing pixel value {int(row[x]):#010x} in mapping"
            idx, shift, mask = locate(x, y, width)
            while len(out) <= idx:
                out.append(0)
            out[idx] = ((index << shift) | (out[idx] & ~mask)) & 0xFF
    logger.debug(
        "encode_image size=%sx%s bpp=%s bytes=%s", width, height, bits_per_pixel, len(out)
    )
    return bytes(out)


def encode_1bpp_image(image: Image.Image, mapping: Dict[int, int]) -> bytes:
    return encode_image(image, mapping, 1)


def encode_2bpp_image(image: Image.Image, mapping: Dict[int, int]) -> bytes:
    return encode_image(image, mapping, 2)


def unpack_indices(
    data: bytes, width: int, height: int, bits_per_pixel: int
) -> np.ndarray:
    """Return the ``height x width`` palette indices stored in ``data``.

    Reads back through the same byte/shift layout used by ``encode_image``.
    """

    if bits_per_pixel not in _LOCATORS:
        raise ValueError(f"Unsupported bits per pixel: {bits_per_pixel}")
    expected = encoded_length(width, height, bits_per_pixel)
    if len(data) < expected:
        raise ValueError(f"Expected at least {expected} bytes, got {len(data)}")
    raw = np.frombuffer(bytes(data), dtype=np.uint8).astype(np.int32)
    xs = np.arange(width, dtype=np.int32)[None, :]
    ys = np.arange(height, dtype=np.int32)[:, None]
    linear = ys * width + xs
    if bits_per_pixel == 1:
        idx, shift = linear >> 3, 7 - (xs & 0x07)
    else:
        idx, shift = linear >> 2, 6 - ((xs & 0x03) << 1)
    mask = (1 << bits_per_pixel) - 1
    return (raw[idx] >> shift) & mask
