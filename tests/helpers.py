"""Shared test doubles and document builders."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from compendium_sync.errors import CodecError


class MemoryCodec:
    """In-memory pack codec recording how often packs are read."""

    name = "memory"

    def __init__(self, packs: Mapping[Path, list[dict[str, Any]]] | None = None) -> None:
        self.packs: dict[Path, list[dict[str, Any]]] = {
            Path(path): list(documents) for path, documents in (packs or {}).items()
        }
        self.reads = 0

    def pack_location(self, dest_root: Path, pack_name: str) -> Path:
        return dest_root / pack_name

    def read_documents(self, pack_path: Path) -> Iterator[dict[str, Any]]:
        self.reads += 1
        if pack_path not in self.packs:
            raise CodecError(str(pack_path), "pack not found")
        for document in self.packs[pack_path]:
            yield copy.deepcopy(document)

    def write_documents(self, pack_path: Path, documents: Iterable[Mapping[str, Any]]) -> int:
        self.packs[pack_path] = [copy.deepcopy(dict(document)) for document in documents]
        return len(self.packs[pack_path])


def make_folder(doc_id: str, name: str, parent: str | None = None) -> dict[str, Any]:
    return {
        "_id": doc_id,
        "_key": f"!folders!{doc_id}",
        "name": name,
        "type": "Item",
        "folder": parent,
        "flags": {},
    }


def make_item(doc_id: str, name: str, folder: str | None = None, **extra: Any) -> dict[str, Any]:
    document: dict[str, Any] = {
        "_id": doc_id,
        "_key": f"!items!{doc_id}",
        "name": name,
        "type": "spell",
        "folder": folder,
        "img": f"icons/{doc_id}.webp",
    }
    document.update(extra)
    return document


def read_tree(root: Path) -> dict[str, bytes]:
    """Map every file below root (relative posix path) to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def write_jsonl(path: Path, documents: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(json.dumps(document) + "\n" for document in documents), encoding="utf-8")

