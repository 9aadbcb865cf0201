import io
from pathlib import Path

import pytest
from PIL import Image

from helpers import (
    CHECKER_ROWS,
    FOUR_COLORS,
    TWO_COLORS,
    indexed_png_bytes,
    oversized_indexed_png_bytes,
    rgb_png_bytes,
    write_indexed_png,
)
from png2src.errors import (
    FileWithoutStemError,
    ImageError,
    InvalidPaletteSizeError,
    NotIndexedPngError,
    Png2SrcError,
    PngDecodingError,
    SpriteIOError,
)
from png2src.flags import Flags
from png2src.processing import convert_png_file, convert_png_to_variables, sprite_name


def test_convert_four_color_sprite():
    variables = convert_png_to_variables("player", indexed_png_bytes(CHECKER_ROWS, FOUR_COLORS))
    assert variables.name == "player"
    assert (variables.width, variables.height) == (4, 4)
    assert variables.flags is Flags.TWO_BITS_PER_PIXEL
    assert variables.data == bytes([0x5A, 0x5A, 0xF0, 0xF0])


def test_convert_two_color_sprite():
    rows = [[0, 1] * 4, [1, 0] * 4]
    variables = convert_png_to_variables("dots", indexed_png_bytes(rows, TWO_COLORS))
    assert (variables.width, variables.height) == (8, 2)
    assert variables.flags is Flags.ONE_BIT_PER_PIXEL
    assert variables.data == bytes([0x55, 0xAA])


def test_palette_order_defines_indices():
    swapped = [FOUR_COLORS[3], FOUR_COLORS[2], FOUR_COLORS[1], FOUR_COLORS[0]]
    rows = [[3 - value for value in row] for row in CHECKER_ROWS]
    variables = convert_png_to_variables("player", indexed_png_bytes(rows, swapped))
    assert variables.data == bytes([0xA5, 0xA5, 0x0F, 0x0F])


@pytest.mark.parametrize("colors", [3, 5, 16])
def test_invalid_palette_size(colors):
    palette = [(i, i, i) for i in range(colors)]
    with pytest.raises(InvalidPaletteSizeError) as info:
        convert_png_to_variables("bad", indexed_png_bytes([[0, 1], [1, 0]], palette))
    assert info.value.size == colors
    assert str(info.value) == f"palette has invalid size {colors}"


def test_rgb_png_is_not_indexed():
    buffer = io.BytesIO()
    Image.new("RGB", (2, 2), (255, 0, 0)).save(buffer, format="PNG")
    with pytest.raises(NotIndexedPngError):
        convert_png_to_variables("rgb", buffer.getvalue())


def test_other_formats_are_not_png():
    buffer = io.BytesIO()
    Image.new("P", (2, 2)).save(buffer, format="GIF")
    with pytest.raises(PngDecodingError):
        convert_png_to_variables("gif", buffer.getvalue())
    with pytest.raises(PngDecodingError):
        convert_png_to_variables("text", b"hello")


def test_truncated_indexed_png_is_image_error():
    data = indexed_png_bytes(CHECKER_ROWS, FOUR_COLORS)
    cut = data.index(b"IDAT") + 6
    with pytest.raises(ImageError):
        convert_png_to_variables("cut", data[:cut])


def test_truncated_rgb_png_is_not_indexed():
    data = rgb_png_bytes(64, 64)
    cut = data.index(b"IDAT") + 6
    with pytest.raises(NotIndexedPngError):
        convert_png_to_variables("cut", data[:cut])


def test_oversized_image_is_image_error():
    with pytest.raises(ImageError) as info:
        convert_png_to_variables("huge", oversized_indexed_png_bytes(20000, 20000))
    assert isinstance(info.value.__cause__, Image.DecompressionBombError)


def test_convert_file_uses_stem(tmp_path):
    path = write_indexed_png(tmp_path / "hero-idle.png", CHECKER_ROWS)
    variables = convert_png_file(path)
    assert variables.name == "hero-idle"
    assert variables.constant_name == "HERO_IDLE"


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(SpriteIOError) as info:
        convert_png_file(tmp_path / "missing.png")
    assert isinstance(info.value.__cause__, OSError)
    assert isinstance(info.value, Png2SrcError)


def test_path_without_stem():
    with pytest.raises(FileWithoutStemError):
        sprite_name(Path("/"))
