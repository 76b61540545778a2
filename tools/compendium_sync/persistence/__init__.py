"""Persistence layer for compendium source trees.

This module exports file I/O and layout components:
- YAML parsing and atomic, fixed-permission writes
- Source tree traversal
- Folder path resolution
- PackPaths and module manifest resolution
"""

from compendium_sync.persistence.folder_tree import build_folder_path, resolve_folder_paths
from compendium_sync.persistence.pack_paths import (
    PackPaths,
    list_source_packs,
    load_manifest,
    select_manifest_packs,
)
from compendium_sync.persistence.walker import walk_source_files
from compendium_sync.persistence.yaml_io import (
    dump_document,
    load_document,
    parse_source_file,
    write_source_file,
)

__all__ = [
    # YAML I/O
    "dump_document",
    "load_document",
    "parse_source_file",
    "write_source_file",
    # Traversal
    "walk_source_files",
    # Folders
    "build_folder_path",
    "resolve_folder_paths",
    # Pack Paths
    "PackPaths",
    "list_source_packs",
    "load_manifest",
    "select_manifest_packs",
]
