"""Rust constant declarations describing one WASM-4 sprite."""
from __future__ import annotations

from dataclasses import dataclass

from .flags import Flags
from .sanitization import sanitize_variable_name


@dataclass(frozen=True, order=True)
class SpriteVariables:
    """Sprite dimensions, flags and packed data, ordered field by field.

    ``str(variables)`` matches ``w4 png2src --rust``; ``render(alternate=True)``
    prints the data bytes in binary instead of hexadecimal.
    """

    name: str
    width: int
    height: int
    flags: Flags
    data: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "flags", Flags(self.flags))

    @property
    def constant_name(self) -> str:
        return sanitize_variable_name(self.name)

    def render(self, alternate: bool = False) -> str:
        name = self.constant_name
        byte_format = "0b{:08b}" if alternate else "0x{:02x}"
        values = ", ".join(byte_format.format(byte) for byte in self.data)
        return (
            f"const {name}_WIDTH: u32 = {self.width};\n"
            f"const {name}_HEIGHT: u32 = {self.height};\n"
            f"const {name}_FLAGS: u32 = {self.flags.value}; // {self.flags.human_readable_value}\n"
            f"const {name}: [u8; {len(self.data)}] = [{values}];\n"
        )

    def __str__(self) -> str:
        return self.render()
