"""Directory scanning for sprite module trees."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import NonUtf8PathError, SpriteIOError
from .modules import Module


logger = logging.getLogger(__name__)

SPRITE_EXTENSION = ".png"


def is_sprite_file(path: Path) -> bool:
    # Case-sensitive on purpose: "foo.PNG" is not picked up.
    return path.is_file() and path.suffix == SPRITE_EXTENSION


@dataclass(slots=True)
class DirectoryListing:
    sprite_paths: List[Path]
    directories: List[Path]


def _module_name(directory: Path) -> str:
    name = directory.resolve().name if directory.name in ("", ".", "..") else directory.name
    if not name:
        raise SpriteIOError(f"directory has no name: {directory}")
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise NonUtf8PathError() from exc
    return name


def list_directory(directory: Path) -> DirectoryListing:
    sprite_paths: List[Path] = []
    directories: List[Path] = []
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise SpriteIOError(f"cannot list {directory}: {exc}") from exc
    for path in entries:
        if is_sprite_file(path):
            sprite_paths.append(path)
        elif path.is_dir():
            directories.append(path)
    return DirectoryListing(sprite_paths=sprite_paths, directories=directories)


def build_sprite_modules_tree(directory: Path | str) -> Module:
    """Build the module tree of all sprites below ``directory``.

    Each subdirectory becomes a submodule named after it; subtrees without any
    PNG file are left out.
    """

    directory = Path(directory)
    if not directory.is_dir():
        raise SpriteIOError(f"Not a directory: {directory}")
    name = _module_name(directory)
    listing = list_directory(directory)
    submodules: List[Module] = []
    for child in listing.directories:
        submodule = build_sprite_modules_tree(child)
        if submodule.is_empty():
            logger.debug("skip empty directory %s", child)
            continue
        submodules.append(submodule)
    logger.debug(
        "scanned %s sprites=%s submodules=%s",
        directory,
        len(listing.sprite_paths),
        len(submodules),
    )
    return Module(name, listing.sprite_paths, submodules)


def collect_sprite_files(directories: Sequence[Path]) -> Tuple[Path, ...]:
    """Return every sprite below ``directories`` in tree order."""

    paths: List[Path] = []
    for directory in directories:
        paths.extend(build_sprite_modules_tree(directory).iter_sprite_paths())
    return tuple(paths)
