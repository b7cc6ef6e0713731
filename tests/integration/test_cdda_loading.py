import os
from pathlib import Path

import pytest

from cata_tilecov.__main__ import generate_reports
from cata_tilecov.game_data import JsonFileTree
from cata_tilecov.tilesets import Tileset

CDDA_PATH = os.environ.get("CDDA_PATH") or "D:/CDDA"


@pytest.mark.skipif(not Path(CDDA_PATH).exists(), reason="CDDA repo not found")
def test_items_tree():
    tree = JsonFileTree(Path(CDDA_PATH) / "data" / "json", "items")
    assert len(tree) > 0, "no item files loaded"
    assert "gloves_light" in tree.get_object_ids()


@pytest.mark.skipif(not Path(CDDA_PATH).exists(), reason="CDDA repo not found")
def test_every_tileset_loads():
    gfx_dir = Path(CDDA_PATH) / "gfx"
    for tileset_dir in sorted(p for p in gfx_dir.iterdir() if p.is_dir()):
        tileset = Tileset.load(tileset_dir)
        assert tileset.get_tile_ids(), f"{tileset.name} has no tiles"


@pytest.mark.skipif(not Path(CDDA_PATH).exists(), reason="CDDA repo not found")
def test_generate_reports(tmp_path):
    written = generate_reports(Path(CDDA_PATH), tmp_path)
    assert written, "no reports written"
    assert all(path.stat().st_size > 0 for path in written)
