from __future__ import annotations

from pathlib import Path

import pytest

from helpers import CHECKER_ROWS, write_indexed_png


@pytest.fixture
def sprite_dir(tmp_path: Path) -> Path:
    """A ``sprites`` folder with nested characters and tiles."""

    root = tmp_path / "sprites"
    for relative in (
        "characters/player.png",
        "characters/npcs/blacksmith.png",
        "characters/npcs/vendor.png",
        "characters/bosses/dragon.png",
        "characters/bosses/behemoth.png",
        "tiles/forest.png",
        "tiles/town.png",
        "tiles/desert.png",
    ):
        write_indexed_png(root / relative, CHECKER_ROWS)
    (root / "docs").mkdir()
    (root / "docs" / "readme.txt").write_text("not a sprite", encoding="utf-8")
    (root / "docs" / "empty").mkdir()
    return root
