"""Shared fixtures: a small game directory with data files and tilesets."""

import logging
from pathlib import Path
from typing import Any, Iterator

import orjson
import pytest

FURNITURE = [
    {"type": "furniture", "id": "", "name": "nothing"},
    {
        "type": "furniture",
        "id": "f_floor_lamp",
        "name": {"str": "floor lamp"},
        "description": "A tall standing lamp.",
        "color": "white",
        "bgcolor": ["i_white", "i_white", "i_brown", "i_white"],
        "looks_like": "f_lamp",
    },
    {
        "type": "furniture",
        "id": "f_floor_lamp_off",
        "copy-from": "f_floor_lamp",
        "name": {"str_sp": "floor lamp (off)"},
        "color": ["yellow"],
    },
    {
        "type": "furniture",
        "id": "f_floor_lamp_on",
        "looks_like": "f_floor_lamp",
        "description": {"str": "A lit lamp."},
    },
]

FLUFF = [
    {"type": "GENERIC", "id": "magic_8_ball", "name": {"str": "Magic 8-Ball"}, "color": "blue"},
    {
        "type": "GENERIC",
        "id": "deck_of_cards",
        "name": {"str": "deck of cards", "str_pl": "decks of cards"},
        "looks_like": "magic_8_ball",
    },
    {"type": "GENERIC", "id": "coin_quarter", "name": "quarter", "looks_like": "coin_penny"},
    {"type": "GENERIC", "id": "family_photo", "name": {"str": "family photo"}},
]

GUNS = [
    {"type": "GUN", "id": "calico", "name": {"str": "Calico M960"}},
    {"type": "GUN", "id": "ar15", "name": {"str": "AR-15"}},
    {"type": "GUN", "id": "cx4", "name": {"str": "Beretta Cx4 Storm"}},
    {"type": "GUN", "id": "90two", "name": {"str": "Beretta 90-Two"}, "looks_like": "cx4"},
    {"type": "GUN", "id": "glock_19", "name": {"str": "Glock 19"}, "looks_like": "90two"},
    {"type": "GUN", "id": "sniper_rifle", "name": {"str": "sniper rifle"}},
]

OVERLAYS = [
    {"type": "ARMOR", "id": "_overlay_test_hat", "looks_like": "hat"},
    {"type": "ARMOR", "id": "hat", "name": "hat"},
]

SLUGS = [
    {"type": "MONSTER", "id": "mon_sludge_crawler", "name": {"str": "sludge crawler"}},
    {
        "type": "MONSTER",
        "id": "mon_slug_giant",
        "name": {"str": "giant slug"},
        "looks_like": "mon_sludge_crawler",
    },
]

# Never decodable, must be skipped by the file tree blacklist
MONSTER_GOALS = [{"type": "monster_goal", "id": {"not": "a string"}}]

VEHICLES = [
    {"type": "vehicle", "id": "custom", "name": "Custom Vehicle"},
    {"type": "vehicle", "id": "none", "name": "None"},
]

DATA_FILES = {
    "furniture_and_terrain/furniture.json": FURNITURE,
    "items/fluff.json": FLUFF,
    "items/guns.json": GUNS,
    "items/overlays.json": OVERLAYS,
    "monsters/slugs.json": SLUGS,
    "monsters/monster_goals.json": MONSTER_GOALS,
    "vehicles/vehicles.json": VEHICLES,
}

SAMPLE_TILESET_TXT = """\
#Sample tileset for tests
NAME: sample_tileset
VIEW: SampleTileset
JSON: tile_config.json
TILESET: tiles.png
"""

SAMPLE_TILE_CONFIG = {
    "tile_info": [{"pixelscale": 2, "width": 32, "height": 32}],
    "tiles-new": [
        {
            "file": "tiles.png",
            "tiles": [
                {"id": "10mm", "fg": 1, "bg": 2},
                {"id": ["t_wall", "t_wall_half"], "fg": [3, 4]},
                {
                    "id": "vp_atomic_lamp",
                    "fg": [{"weight": 2, "sprite": 5}, {"weight": 1, "sprite": [6, 7]}],
                },
                {"id": "overlay_mutation_tail", "fg": 8},
                {"id": "_overlay_worn_hat", "fg": 9},
            ],
        },
        {
            "file": "moretiles.png",
            "sprite_width": 64,
            "sprite_height": 64,
            "sprite_offset_x": -16,
            "sprite_offset_y": -32,
            "tiles": [
                {"id": "t_dirt", "fg": 10},
                {"id": ["xxx", "yyy"], "fg": 11},
            ],
        },
    ],
}

RED_TILESET_TXT = """\
! Written with '=' separators
NAME=red_tileset
VIEW=RedTileset
JSON=config/tile_config.json
"""

RED_TILE_CONFIG = {
    "tile_info": {"width": 16, "height": 16},
    "tiles-new": [
        {
            "file": "red.png",
            "tiles": [
                {"id": "calico", "fg": 0},
                {"id": "ar15", "fg": 1},
                {"id": "cx4", "fg": 2},
                {"id": "magic_8_ball", "fg": 3},
                {"id": "mon_sludge_crawler", "fg": 4},
                {"id": "hat", "fg": 5},
                {"id": "_overlay_test_hat", "fg": 6},
            ],
        }
    ],
}

BLUE_TILESET_TXT = """\
NAME: blue_tileset
VIEW: BlueTileset
JSON: tile_config.json
"""

BLUE_TILE_CONFIG = {
    "tile_info": [{"width": 10, "height": 10, "pixelscale": 0, "iso": True}],
    "tiles-new": [
        {"file": "blue.png", "tiles": [{"id": "f_floor_lamp", "fg": 0}, {"id": "custom", "fg": 1}]}
    ],
}

TILESETS = {
    "sample_tileset": (SAMPLE_TILESET_TXT, "tile_config.json", SAMPLE_TILE_CONFIG),
    "red_tileset": (RED_TILESET_TXT, "config/tile_config.json", RED_TILE_CONFIG),
    "blue_tileset": (BLUE_TILESET_TXT, "tile_config.json", BLUE_TILE_CONFIG),
}


def write_json(path: Path, value: Any) -> Path:
    """Write `value` as JSON to `path`, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(value, option=orjson.OPT_INDENT_2))
    return path


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """Game directory with ``data/json`` files and three tilesets in ``gfx``."""
    root = tmp_path / "game"
    for relative, records in DATA_FILES.items():
        write_json(root / "data" / "json" / relative, records)

    for name, (metadata, config_name, config) in TILESETS.items():
        tileset_dir = root / "gfx" / name
        tileset_dir.mkdir(parents=True)
        (tileset_dir / "tileset.txt").write_text(metadata, encoding="utf-8")
        write_json(tileset_dir / config_name, config)

    return root


@pytest.fixture
def json_dir(game_dir: Path) -> Path:
    return game_dir / "data" / "json"


@pytest.fixture
def gfx_dir(game_dir: Path) -> Path:
    return game_dir / "gfx"


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore root logger handlers and level replaced by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
