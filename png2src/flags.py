from __future__ import annotations

from enum import IntEnum


class Flags(IntEnum):
    """WASM-4 blit flags describing a sprite's bit depth."""

    ONE_BIT_PER_PIXEL = 0
    TWO_BITS_PER_PIXEL = 1

    @property
    def bits_per_pixel(self) -> int:
        return 1 if self is Flags.ONE_BIT_PER_PIXEL else 2

    @property
    def human_readable_value(self) -> str:
        return "BLIT_1BPP" if self is Flags.ONE_BIT_PER_PIXEL else "BLIT_2BPP"
