"""Sprite module trees mirroring a directory of sprites."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, TextIO, Tuple

from .processing import convert_png_file
from .variables import SpriteVariables


logger = logging.getLogger(__name__)

INDENT = " " * 4


@dataclass(frozen=True, order=True)
class Module:
    """A module holding sprite paths and nested submodules.

    Paths and submodules are deduplicated and kept sorted, so equal trees
    compare equal however they were assembled.
    """

    name: str
    sprite_paths: Tuple[Path, ...] = ()
    submodules: Tuple["Module", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sprite_paths", tuple(sorted(set(map(Path, self.sprite_paths)))))
        object.__setattr__(self, "submodules", tuple(sorted(set(self.submodules))))

    def is_empty(self) -> bool:
        """True when no sprite lives anywhere in this subtree."""

        return not self.sprite_paths and all(sub.is_empty() for sub in self.submodules)

    def iter_sprite_paths(self) -> Iterator[Path]:
        """Yield own paths first, then each submodule's paths depth-first."""

        yield from self.sprite_paths
        for submodule in self.submodules:
            yield from submodule.iter_sprite_paths()

    def parse(self) -> "ParsedModule":
        """Convert every sprite of the tree, stopping at the first failure."""

        variables: List[SpriteVariables] = []
        for path in self.sprite_paths:
            logger.debug("parse module=%s sprite=%s", self.name, path)
            variables.append(convert_png_file(path))
        submodules = [submodule.parse() for submodule in self.submodules]
        return ParsedModule(self.name, variables, submodules)

    def flatten(self) -> "Module":
        """Return a single-level module holding every sprite of the tree."""

        sprite_paths = list(self.sprite_paths)
        for submodule in self.submodules:
            sprite_paths.extend(submodule.flatten().sprite_paths)
        return Module(self.name, sprite_paths)

    def cargo_build_instructions(self) -> Iterator[str]:
        """Yield cargo instructions rebuilding the crate when a sprite changes."""

        for path in self.iter_sprite_paths():
            yield f"cargo:rerun-if-changed={path}"

    def write_cargo_build_instructions(self, stream: TextIO) -> None:
        for line in self.cargo_build_instructions():
            stream.write(line + "\n")


@dataclass(frozen=True, order=True)
class ParsedModule:
    name: str
    variables: Tuple[SpriteVariables, ...] = ()
    submodules: Tuple["ParsedModule", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", tuple(sorted(set(self.variables))))
        object.__setattr__(self, "submodules", tuple(sorted(set(self.submodules))))

    def render(self, alternate: bool = False, level: int = 0) -> str:
        lines: List[str] = []
        _render_lines(self, level, alternate, lines)
        return "".join(lines)

    def __str__(self) -> str:
        return self.render()


def _render_lines(module: ParsedModule, level: int, alternate: bool, out: List[str]) -> None:
    mod_prefix = INDENT * level
    prefix = INDENT * (level + 1)
    out.append(f"{mod_prefix}pub mod {module.name} {{\n")
    for variables in module.variables:
        for line in variables.render(alternate).split("\n"):
            if line:
                out.append(f"{prefix}pub {line}\n")
        out.append("\n")
    for submodule in module.submodules:
        _render_lines(submodule, level + 1, alternate, out)
    out.append(f"{mod_prefix}}}\n\n")
