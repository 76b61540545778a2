"""Folder path resolution.

Builds the relative directory of every folder in a pack by walking parent
references up to the root. Used by the extractor to place documents in a
directory tree mirroring the pack's folders.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from compendium_sync.errors import FolderCycleError
from compendium_sync.models import DocumentId, FolderNode


def build_folder_path(folders: Mapping[str, FolderNode], folder_id: str) -> Path:
    """Compute the relative path of one folder.

    Args:
        folders: All folders of the pack by id
        folder_id: Id of the folder to resolve

    Returns:
        Path made of the ancestors' slugs, root-most first, ending with the
        folder's own slug. A parent id missing from folders ends the walk.

    Raises:
        FolderCycleError: If the parent chain revisits a folder
        KeyError: If folder_id itself is not in folders
    """
    node = folders[folder_id]
    path = Path(node.slug)
    seen: list[str] = [folder_id]
    parent_id: DocumentId | None = node.parent
    while parent_id is not None and parent_id in folders:
        if parent_id in seen:
            cycle = seen[seen.index(parent_id):] + [parent_id]
            raise FolderCycleError(cycle)
        seen.append(parent_id)
        parent = folders[parent_id]
        path = Path(parent.slug) / path
        parent_id = parent.parent
    return path


def resolve_folder_paths(folders: Mapping[str, FolderNode]) -> dict[str, Path]:
    """Compute the relative path of every folder.

    Raises:
        FolderCycleError: If any parent chain contains a cycle
    """
    return {folder_id: build_folder_path(folders, folder_id) for folder_id in folders}
