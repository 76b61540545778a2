"""Clean command: canonicalize source files in place.

Re-parses every source file of a pack, normalizes it and rewrites it with
the standard YAML formatting. Running it on already clean files, including
freshly extracted ones, leaves them byte-identical.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from compendium_sync.commands.common import finish, print_report, run_per_pack
from compendium_sync.config import DEFAULT_OWNERSHIP
from compendium_sync.errors import InvalidDocumentError, PackReport
from compendium_sync.models import Document
from compendium_sync.normalization import clean_pack_entry
from compendium_sync.persistence import (
    PackPaths,
    list_source_packs,
    parse_source_file,
    walk_source_files,
    write_source_file,
)


def clean_source_tree(
    source_dir: Path,
    *,
    ownership: int = DEFAULT_OWNERSHIP,
    pack_name: str | None = None,
) -> PackReport:
    """Normalize and rewrite every source file of one pack.

    Files without _id or _key are reported as skipped and left untouched.
    Rewrites are not transactional across files: a failure part way leaves
    earlier files rewritten, and running the command again completes the job.

    Raises:
        SourceParseError: If a file is not valid YAML
    """
    report = PackReport(pack=pack_name or source_dir.name)
    for path in walk_source_files(source_dir):
        data = parse_source_file(path)
        try:
            Document.from_mapping(data, str(path))
        except InvalidDocumentError as error:
            report.skip(error.source, error.reason)
            continue
        clean_pack_entry(data, ownership=ownership)
        write_source_file(path, data)
        report.processed += 1
    return report


def cmd_clean(paths: PackPaths, args: argparse.Namespace) -> int:
    """Clean one or all source packs.

    Returns:
        0 if every pack was cleaned, 1 if any failed
    """
    names = list_source_packs(paths, args.pack_name)

    def _clean(name: str) -> PackReport:
        print(f"Cleaning pack {name}")
        report = clean_source_tree(paths.source_dir(name), ownership=args.ownership, pack_name=name)
        print_report(report, "Cleaned")
        return report

    return finish(run_per_pack(names, _clean))
