"""Exceptions raised while converting sprites to source code."""
from __future__ import annotations


class Png2SrcError(RuntimeError):
    """Base class for every conversion failure."""


class SpriteIOError(Png2SrcError):
    """Raised when a sprite file or directory cannot be read."""


class PngDecodingError(Png2SrcError):
    """Raised when the input bytes are not a PNG image."""

    def __init__(self, message: str = "image is not encoded in PNG format") -> None:
        super().__init__(message)


class ImageError(Png2SrcError):
    """Raised when image decoding fails for any other reason."""


class NotIndexedPngError(Png2SrcError):
    def __init__(self) -> None:
        super().__init__("PNG image is not indexed")


class InvalidPaletteSizeError(Png2SrcError):
    """Raised for palettes that are neither 2 nor 4 colors.

    WASM-4 sprites only support 1 and 2 bits per pixel.
    """

    def __init__(self, size: int) -> None:
        super().__init__(f"palette has invalid size {size}")
        self.size = size


class FileWithoutStemError(Png2SrcError):
    def __init__(self) -> None:
        super().__init__("file does not have a stem")


class NonUtf8PathError(Png2SrcError):
    def __init__(self) -> None:
        super().__init__("path is not valid UTF-8")
