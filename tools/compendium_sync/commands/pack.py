"""Pack command: compile source trees into packs.

Reads every YAML file of a pack's source tree, normalizes each document and
hands the whole set to the codec. A parse error aborts that pack before
anything is written, so no partial pack is produced.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

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
)
from compendium_sync.storage import PackCodec, get_codec


def read_source_documents(source_dir: Path, report: PackReport) -> list[dict[str, Any]]:
    """Parse every source file under source_dir.

    Files holding no _id or _key are recorded as skipped on report.

    Raises:
        SourceParseError: On the first file that is not valid YAML
    """
    documents: list[dict[str, Any]] = []
    for path in walk_source_files(source_dir):
        data = parse_source_file(path)
        try:
            Document.from_mapping(data, str(path))
        except InvalidDocumentError as error:
            report.skip(error.source, error.reason)
            continue
        documents.append(data)
    return documents


def compile_pack(
    codec: PackCodec,
    source_dir: Path,
    pack_path: Path,
    *,
    ownership: int = DEFAULT_OWNERSHIP,
    pack_name: str | None = None,
) -> PackReport:
    """Compile one source tree into a pack.

    Args:
        codec: Storage codec writing the pack
        source_dir: Root of the pack's source tree
        pack_path: Pack storage location
        ownership: Default ownership level written into documents
        pack_name: Name used in the report (defaults to the directory name)

    Returns:
        PackReport counting the stored documents

    Raises:
        SourceParseError: If any source file cannot be parsed
        CodecError: If the codec cannot store the pack
    """
    report = PackReport(pack=pack_name or source_dir.name)
    documents = read_source_documents(source_dir, report)
    for data in documents:
        clean_pack_entry(data, ownership=ownership)
    report.processed = codec.write_documents(pack_path, documents)
    return report


def cmd_pack(paths: PackPaths, args: argparse.Namespace) -> int:
    """Compile one or all source packs.

    Returns:
        0 if every pack compiled, 1 if any failed
    """
    codec = get_codec(args.format)
    names = list_source_packs(paths, args.pack_name)

    def _compile(name: str) -> PackReport:
        print(f"Compiling pack {name}")
        report = compile_pack(
            codec,
            paths.source_dir(name),
            codec.pack_location(paths.dest_root, name),
            ownership=args.ownership,
            pack_name=name,
        )
        print_report(report, "Compiled")
        return report

    return finish(run_per_pack(names, _compile))
