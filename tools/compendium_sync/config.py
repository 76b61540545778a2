"""Configuration constants for compendium pack synchronization.

This module centralizes the locations, markers and formatting choices used
across the CLI. Changing where packs live or how source files are written
requires updating only this file (or passing the matching CLI option).
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, FrozenSet, Mapping

# -----------------------------------------------------------------------------
# Locations
# -----------------------------------------------------------------------------

PACK_DEST: Final[Path] = Path("packs")
"""Folder where compiled packs are located relative to the module folder."""

PACK_SRC: Final[Path] = Path("packs/_source")
"""Folder where source YAML files are located relative to the module folder."""

MODULE_MANIFEST: Final[Path] = Path("module.json")
"""Module manifest listing the packs as {name, path} entries."""


# -----------------------------------------------------------------------------
# Source Files
# -----------------------------------------------------------------------------

SOURCE_EXTENSIONS: Final[FrozenSet[str]] = frozenset({".yml", ".yaml"})
"""File extensions treated as source documents."""

SOURCE_SUFFIX: Final[str] = ".yml"
"""Extension given to files written by the extractor."""

FOLDER_FILENAME: Final[str] = "_folder.yml"
"""Marker file holding a folder document inside its own directory."""

SOURCE_FILE_MODE: Final[int] = 0o664
"""Permissions applied to every written source file."""

YAML_WIDTH: Final[int] = 4096
"""Line width for dumped YAML; long scalars stay on one line for clean diffs."""


# -----------------------------------------------------------------------------
# Documents
# -----------------------------------------------------------------------------

FOLDER_KEY_PREFIX: Final[str] = "!folders"
"""Storage key prefix identifying folder documents."""

DEFAULT_OWNERSHIP: Final[int] = 0
"""Ownership level written in place of per-user permissions (0 = none)."""

LAST_MODIFIED_BY: Final[str] = "ghPackBuilder0000"
"""Sentinel actor id replacing _stats.lastModifiedBy."""

TRANSIENT_FLAGS: Final[tuple[str, ...]] = ("importSource", "exportSource")
"""Flag namespaces removed from every document at any depth."""

EMBEDDED_FIELDS: Final[tuple[str, ...]] = ("effects", "items")
"""Sub-document sequences normalized recursively, in this order."""


# -----------------------------------------------------------------------------
# Codecs
# -----------------------------------------------------------------------------

CODEC_FORMATS: Final[FrozenSet[str]] = frozenset({"leveldb", "jsonl"})
"""Pack storage formats selectable with --format."""

DEFAULT_CODEC: Final[str] = "leveldb"

JSONL_SUFFIX: Final[str] = ".db"
"""Extension of line-delimited JSON pack files."""

EMBEDDED_COLLECTIONS: Final[Mapping[str, tuple[str, ...]]] = {
    "actors": ("items", "effects"),
    "actors.items": ("effects",),
    "items": ("effects",),
    "cards": ("cards",),
    "combats": ("combatants",),
    "journal": ("pages",),
    "playlists": ("sounds",),
    "tables": ("results",),
}
"""Embedded sub-document fields stored under their own LevelDB sublevel.

Keys are collection names as they appear in storage keys; an embedded field
F of collection C is stored under the collection "C.F".
"""
