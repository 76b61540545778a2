"""Unpack command: extract packs into source trees.

Extraction reads the pack twice. The first pass only discovers folders and
returns them; their directory paths are resolved once that pass has
finished. The second pass normalizes every document and writes it to a file
whose location follows the folder tree:

    <folder path>/_folder.yml          for a folder
    <folder path>/<slug of name>.yml   for any other document
    <slug of name>.yml                 when the folder is absent or unknown
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping

from compendium_sync.commands.common import finish, print_report, run_per_pack
from compendium_sync.config import DEFAULT_OWNERSHIP, FOLDER_FILENAME, SOURCE_SUFFIX
from compendium_sync.errors import InvalidDocumentError, PackReport, SourceAccessError
from compendium_sync.models import Document, FolderNode, PackEntry
from compendium_sync.normalization import clean_pack_entry, clean_string, slugify
from compendium_sync.persistence import (
    PackPaths,
    resolve_folder_paths,
    select_manifest_packs,
    walk_source_files,
    write_source_file,
)
from compendium_sync.storage import PackCodec, get_codec


def file_stem(document: Document) -> str:
    """Slug of the document's canonical name, or its id when that is empty."""
    return slugify(clean_string(document.name)) or document.id


def discover_folders(codec: PackCodec, pack_path: Path) -> dict[str, FolderNode]:
    """Collect every folder of a pack without writing anything.

    Args:
        codec: Storage codec reading the pack
        pack_path: Pack storage location

    Returns:
        FolderNode by folder id

    Raises:
        CodecError: If the pack cannot be read
    """
    folders: dict[str, FolderNode] = {}
    for data in codec.read_documents(pack_path):
        try:
            document = Document.from_mapping(data, str(pack_path))
        except InvalidDocumentError:
            continue
        if document.is_folder:
            folders[document.id] = FolderNode(slug=file_stem(document), parent=document.folder)
    return folders


def document_path(document: Document, folder_paths: Mapping[str, Path]) -> Path:
    """Relative source path of a document.

    Args:
        document: Normalized document
        folder_paths: Resolved folder paths by folder id

    Returns:
        Path relative to the pack's source directory
    """
    if document.id in folder_paths:
        return folder_paths[document.id] / FOLDER_FILENAME
    filename = f"{file_stem(document)}{SOURCE_SUFFIX}"
    parent = folder_paths.get(document.folder) if document.folder else None
    return parent / filename if parent is not None else Path(filename)


def _describe(data: Mapping[str, Any], pack: str) -> str:
    name = data.get("name")
    return f"{pack}: {name!r}" if isinstance(name, str) and name else f"{pack}: <unnamed>"


def prune_source_tree(dest: Path) -> None:
    """Delete existing source files and the directories they leave empty.

    Raises:
        SourceAccessError: If a file or directory cannot be removed
    """
    if not dest.is_dir():
        return
    try:
        for path in list(walk_source_files(dest)):
            path.unlink()
        directories = [path for path in dest.rglob("*") if path.is_dir() and not path.is_symlink()]
        for directory in sorted(directories, key=lambda path: len(path.parts), reverse=True):
            if not any(directory.iterdir()):
                directory.rmdir()
    except OSError as exc:
        raise SourceAccessError(str(dest), str(exc)) from exc


def extract_pack(
    codec: PackCodec,
    pack_path: Path,
    dest: Path,
    *,
    ownership: int = DEFAULT_OWNERSHIP,
    prune: bool = False,
    pack_name: str | None = None,
) -> PackReport:
    """Extract one pack into a source tree.

    Args:
        codec: Storage codec reading the pack
        pack_path: Pack storage location
        dest: Source directory of the pack
        ownership: Default ownership level written into documents
        prune: Remove existing source files before writing
        pack_name: Name used in the report (defaults to the directory name)

    Returns:
        PackReport counting written files; documents without _id/_key are
        skipped, and two documents landing on the same file are reported as
        a warning (the later one is kept)

    Raises:
        CodecError: If the pack cannot be read
        FolderCycleError: If folder parents form a cycle
        SourceAccessError: If a source file cannot be written or removed
    """
    name = pack_name or dest.name
    report = PackReport(pack=name)
    folder_paths = resolve_folder_paths(discover_folders(codec, pack_path))

    if prune:
        prune_source_tree(dest)

    written: dict[Path, str] = {}
    for data in codec.read_documents(pack_path):
        try:
            document = Document.from_mapping(data, _describe(data, name))
        except InvalidDocumentError as error:
            report.skip(error.source, error.reason)
            continue
        clean_pack_entry(document.data, ownership=ownership)
        relative = document_path(document, folder_paths)
        if relative in written:
            report.warn(f"{relative} written by both {written[relative]} and {document.id}")
        written[relative] = document.id
        write_source_file(dest / relative, document.data)
        report.processed += 1
    return report


def cmd_unpack(paths: PackPaths, args: argparse.Namespace) -> int:
    """Extract one or all packs declared by the module manifest.

    Returns:
        0 if every pack extracted, 1 if any failed
    """
    codec = get_codec(args.format)
    entries = select_manifest_packs(paths, args.pack_name)

    def _extract(entry: PackEntry) -> PackReport:
        print(f"Extracting pack {entry.name}")
        report = extract_pack(
            codec,
            entry.path,
            paths.source_dir(entry.name),
            ownership=args.ownership,
            prune=args.prune,
            pack_name=entry.name,
        )
        print_report(report, "Extracted")
        return report

    return finish(run_per_pack(entries, _extract))
