"""Source tree traversal."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from compendium_sync.config import SOURCE_EXTENSIONS
from compendium_sync.errors import SourceAccessError


def walk_source_files(directory: Path) -> Iterator[Path]:
    """Yield every YAML source file below a directory.

    Traversal is depth-first with entries visited in name order, so two walks
    over an unchanged tree yield the same sequence. Each call starts a fresh
    traversal. Symlinked directories are not followed.

    Args:
        directory: Root of the tree to walk

    Yields:
        Paths of files whose suffix is one of SOURCE_EXTENSIONS

    Raises:
        SourceAccessError: If a directory cannot be listed
    """
    try:
        entries = sorted(directory.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        raise SourceAccessError(str(directory), str(exc)) from exc
    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            yield from walk_source_files(entry)
        elif entry.is_file() and entry.suffix in SOURCE_EXTENSIONS:
            yield entry
