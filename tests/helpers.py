from __future__ import annotations

import io
import struct
import zlib
from pathlib import Path
from typing import Sequence, Tuple

from PIL import Image

ColorTuple = Tuple[int, int, int]

FOUR_COLORS: Sequence[ColorTuple] = [(0, 0, 0), (85, 85, 85), (170, 170, 170), (255, 255, 255)]
TWO_COLORS: Sequence[ColorTuple] = [(0, 0, 0), (255, 255, 255)]

# 4x4 sprite packing to 0x5a, 0x5a, 0xf0, 0xf0 at 2bpp
CHECKER_ROWS = [
    [1, 1, 2, 2],
    [1, 1, 2, 2],
    [3, 3, 0, 0],
    [3, 3, 0, 0],
]


def indexed_png_bytes(rows: Sequence[Sequence[int]], palette: Sequence[ColorTuple]) -> bytes:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    image = Image.new("P", (width, height))
    flat = []
    for color in palette:
        flat.extend(color)
    image.putpalette(flat)
    image.putdata([value for row in rows for value in row])
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def rgb_png_bytes(width: int, height: int) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def write_indexed_png(
    path: Path, rows: Sequence[Sequence[int]], palette: Sequence[ColorTuple] = FOUR_COLORS
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(indexed_png_bytes(rows, palette))
    return path


def _chunk(cid: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(cid + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + cid + payload + struct.pack(">I", crc)


def oversized_indexed_png_bytes(width: int, height: int) -> bytes:
    """1-bit indexed PNG whose header claims ``width x height`` pixels."""

    header = struct.pack(">IIBBBBB", width, height, 1, 3, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", header)
        + _chunk(b"PLTE", bytes([0, 0, 0, 255, 255, 255]))
        + _chunk(b"IDAT", zlib.compress(b"\x00"))
        + _chunk(b"IEND", b"")
    )
