"""Domain models for the module manifest."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from compendium_sync.errors import ManifestError


@dataclass(frozen=True, slots=True)
class PackEntry:
    """One pack declared by the module manifest.

    Attributes:
        name: Pack name, also the name of its source subdirectory
        path: Location of the pack storage, resolved against the manifest folder
    """
    name: str
    path: Path

    @classmethod
    def from_dict(cls, data: Any, base_dir: Path, manifest: str) -> "PackEntry":
        """Create a PackEntry from a raw manifest entry.

        Args:
            data: Entry from the manifest's "packs" list
            base_dir: Directory the entry path is relative to
            manifest: Manifest path used in error messages

        Raises:
            ManifestError: If name or path is missing or not a string
        """
        if not isinstance(data, dict):
            raise ManifestError(manifest, "pack entries must be objects")
        name = data.get("name")
        path = data.get("path")
        if not isinstance(name, str) or not name:
            raise ManifestError(manifest, f"pack entry without a name: {data!r}")
        if not isinstance(path, str) or not path:
            raise ManifestError(manifest, f"pack '{name}' has no path")
        return cls(name=name, path=base_dir / path)
