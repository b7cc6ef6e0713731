"""
Data models for tile-config files.

A tileset's tile-config JSON (``tile_config.json``) looks like:

    {
      "tile_info": [{"width": 32, "height": 32, "pixelscale": 1}],
      "tiles-new": [
        {"file": "tiles.png", "tiles": [{"id": "t_dirt", "fg": 1, "bg": [2, 3]}]}
      ]
    }

The shapes below mirror that layout; `TileConfigDecoder` and
`TileAtlasDecoder` route the nested keys to the right shapes.
"""

from dataclasses import dataclass
from typing import Any

from ..decoding import RecordDecoder, list_like, nested, plain
from ..decoding.fields import FieldSpec
from ..errors import MissingNestedValueError


def weighted_sprite(value: Any) -> Any:
    """Reduce a weighted sprite entry to its sprite index.

    ``{"weight": 2, "sprite": 17}`` becomes ``17`` and
    ``{"weight": 1, "sprite": [1, 2]}`` becomes ``1``. Other values are
    returned unchanged.
    """
    if isinstance(value, dict):
        sprite = value.get("sprite")
        if isinstance(sprite, list):
            return sprite[0] if sprite else None
        return sprite
    return value


@dataclass(frozen=True)
class TileInfo:
    """Tile grid metadata from ``tile_info``."""
    width: int = 0
    height: int = 0
    pixelscale: int = 1
    iso: bool = False

    def __post_init__(self):
        if not self.pixelscale:
            object.__setattr__(self, "pixelscale", 1)


@dataclass(frozen=True)
class TileEntry:
    """One entry of an atlas ``tiles`` list."""
    ids: tuple[str, ...] = list_like("id")
    foreground: tuple[str, ...] = list_like("fg", element=weighted_sprite)
    background: tuple[str, ...] = list_like("bg", element=weighted_sprite)


@dataclass(frozen=True)
class TileAtlas:
    """One sprite sheet of a tileset and the tiles drawn from it."""
    filename: str = plain("file", default="")
    sprite_width: int = 0
    sprite_height: int = 0
    sprite_offset_x: int = 0
    sprite_offset_y: int = 0
    tiles: tuple[TileEntry, ...] = nested(default=())


@dataclass(frozen=True)
class TileConfig:
    """Decoded tile-config file."""
    tile_info: TileInfo = nested(default=TileInfo())
    atlases: tuple[TileAtlas, ...] = nested("tiles-new", default=())


class TileAtlasDecoder(RecordDecoder[TileAtlas]):
    """Decode atlases, routing ``tiles`` to a list of `TileEntry`."""

    def resolve_nested(self, spec: FieldSpec, value: Any, source: str) -> Any:
        if spec.json_key == "tiles":
            return tuple(self.build_nested(spec, TileEntry, value, source, many=True))
        return super().resolve_nested(spec, value, source)


class TileConfigDecoder(RecordDecoder[TileConfig]):
    """Decode tile-config files.

    ``tile_info`` is routed to a single `TileInfo`; CDDA writes it as an
    array holding one object, in which case the first element is used.
    ``tiles-new`` is routed to a list of `TileAtlas`.
    """

    def resolve_nested(self, spec: FieldSpec, value: Any, source: str) -> Any:
        if spec.json_key == "tile_info":
            if isinstance(value, list):
                if not value:
                    raise MissingNestedValueError(self.shape, spec.json_key)
                value = value[0]
            return self.build_nested(spec, TileInfo, value, source)
        if spec.json_key == "tiles-new":
            atlases = self.build_nested(
                spec, TileAtlas, value, source, many=True, decoder=TileAtlasDecoder
            )
            return tuple(atlases)
        return super().resolve_nested(spec, value, source)
