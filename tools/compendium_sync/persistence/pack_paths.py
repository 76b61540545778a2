"""Pack location resolution.

This module locates the pieces a command works on:
- The source root holding one subdirectory per pack
- The destination root holding compiled packs
- The module manifest declaring pack names and storage paths
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from compendium_sync.config import MODULE_MANIFEST, PACK_DEST, PACK_SRC
from compendium_sync.errors import (
    ManifestError,
    PackNotFoundError,
    SourceRootNotFoundError,
)
from compendium_sync.models import PackEntry


@dataclass(frozen=True, slots=True)
class PackPaths:
    """Resolved roots for one CLI invocation.

    Invariants:
        - Paths are not checked for existence here; each command checks
          what it needs before touching any pack
    """
    source_root: Path = PACK_SRC
    dest_root: Path = PACK_DEST
    manifest: Path = MODULE_MANIFEST

    def source_dir(self, pack_name: str) -> Path:
        """Source subtree of a pack."""
        return self.source_root / pack_name


def list_source_packs(paths: PackPaths, pack_name: str | None = None) -> list[str]:
    """List the packs present in the source tree.

    Args:
        paths: Resolved roots
        pack_name: Restrict the result to this pack

    Returns:
        Sorted pack names (subdirectory names of the source root)

    Raises:
        SourceRootNotFoundError: If the source root is not a directory
        PackNotFoundError: If pack_name has no source subdirectory
    """
    if not paths.source_root.is_dir():
        raise SourceRootNotFoundError(str(paths.source_root))
    names = sorted(entry.name for entry in paths.source_root.iterdir() if entry.is_dir())
    if pack_name is None:
        return names
    if pack_name not in names:
        raise PackNotFoundError(pack_name, str(paths.source_root))
    return [pack_name]


def load_manifest(path: Path) -> list[PackEntry]:
    """Read the packs declared by the module manifest.

    Args:
        path: Path to module.json

    Returns:
        PackEntry list in manifest order, paths resolved against the
        manifest's directory

    Raises:
        ManifestError: If the file is missing, not JSON or lacks a packs list
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestError(str(path), "file not found") from exc
    try:
        manifest = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ManifestError(str(path), str(exc)) from exc

    if not isinstance(manifest, dict):
        raise ManifestError(str(path), "root must be an object")
    packs = manifest.get("packs", [])
    if not isinstance(packs, list):
        raise ManifestError(str(path), "packs must be a list")
    return [PackEntry.from_dict(entry, path.parent, str(path)) for entry in packs]


def select_manifest_packs(paths: PackPaths, pack_name: str | None = None) -> list[PackEntry]:
    """Load the manifest and keep the requested pack, or all of them.

    Raises:
        ManifestError: If the manifest cannot be read
        PackNotFoundError: If pack_name is not declared
    """
    entries = load_manifest(paths.manifest)
    if pack_name is None:
        return entries
    selected = [entry for entry in entries if entry.name == pack_name]
    if not selected:
        raise PackNotFoundError(pack_name, str(paths.manifest))
    return selected
