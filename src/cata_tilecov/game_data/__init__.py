"""
Game data records.

Provides the decoded form of game object definitions, identifier filters and
the JSON file tree that loads a whole data directory.
"""

from .models import (
    OVERLAY_PREFIX,
    GameObjectRecord,
    Identifiable,
    IdentifiableFilter,
    excluded_by,
    index_by_primary_id,
    resolve_looks_like,
)
from .file_tree import MAX_DEPTH, PATH_BLACKLIST, JsonFileTree

__all__ = [
    # Records
    "GameObjectRecord",
    "Identifiable",
    "IdentifiableFilter",
    "excluded_by",
    "index_by_primary_id",
    "resolve_looks_like",
    "OVERLAY_PREFIX",
    # File tree
    "JsonFileTree",
    "MAX_DEPTH",
    "PATH_BLACKLIST",
]
