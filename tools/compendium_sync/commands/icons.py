"""Icons command: list the image paths referenced by source packs.

Prints every distinct ``img`` value found anywhere in the documents,
nested sub-documents included, one per line and sorted. Useful to check
content against the set of icons known to exist in the host application.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from compendium_sync.commands.common import finish, run_per_pack
from compendium_sync.errors import PackReport
from compendium_sync.persistence import (
    PackPaths,
    list_source_packs,
    parse_source_file,
    walk_source_files,
)


def _collect_images(value: Any, found: set[str]) -> None:
    if isinstance(value, dict):
        image = value.get("img")
        if isinstance(image, str) and image:
            found.add(image)
        for child in value.values():
            _collect_images(child, found)
    elif isinstance(value, list):
        for child in value:
            _collect_images(child, found)


def collect_icon_paths(source_dir: Path) -> list[str]:
    """Sorted distinct img values of every source file under source_dir.

    Raises:
        SourceParseError: If a file is not valid YAML
    """
    found: set[str] = set()
    for path in walk_source_files(source_dir):
        _collect_images(parse_source_file(path), found)
    return sorted(found)


def cmd_icons(paths: PackPaths, args: argparse.Namespace) -> int:
    """Print the image paths used by one or all source packs."""
    names = list_source_packs(paths, args.pack_name)
    icons: set[str] = set()

    def _collect(name: str) -> PackReport:
        found = collect_icon_paths(paths.source_dir(name))
        icons.update(found)
        return PackReport(pack=name, processed=len(found))

    results = run_per_pack(names, _collect)
    for icon in sorted(icons):
        print(icon)
    return finish(results)
