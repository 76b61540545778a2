"""Line-delimited JSON pack codec.

The classic pack file format: one JSON document per line in a single
``<name>.db`` file. Documents keep their ``_key`` field verbatim and embedded
sub-documents stay inline.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from compendium_sync.config import JSONL_SUFFIX
from compendium_sync.errors import CodecError


class JsonLinesCodec:
    """Pack codec for single-file JSON lines packs."""

    name = "jsonl"

    def pack_location(self, dest_root: Path, pack_name: str) -> Path:
        return dest_root / f"{pack_name}{JSONL_SUFFIX}"

    def read_documents(self, pack_path: Path) -> Iterator[dict[str, Any]]:
        """Yield each line of the pack file as a document.

        Raises:
            CodecError: If the file is missing or a line is not a JSON object
        """
        try:
            handle = pack_path.open(encoding="utf-8")
        except OSError as exc:
            raise CodecError(str(pack_path), str(exc)) from exc
        with handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    document = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise CodecError(str(pack_path), f"line {line_number}: {exc}") from exc
                if not isinstance(document, dict):
                    raise CodecError(str(pack_path), f"line {line_number}: not an object")
                yield document

    def write_documents(self, pack_path: Path, documents: Iterable[Mapping[str, Any]]) -> int:
        """Write documents one per line, replacing the file atomically.

        Raises:
            CodecError: If a document is not JSON serializable or the write fails
        """
        try:
            lines = [
                json.dumps(document, ensure_ascii=False, separators=(",", ":"))
                for document in documents
            ]
        except (TypeError, ValueError) as exc:
            raise CodecError(str(pack_path), str(exc)) from exc

        temp_path = pack_path.with_suffix(f"{pack_path.suffix}.tmp")
        try:
            pack_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
            temp_path.replace(pack_path)
        except OSError as exc:
            raise CodecError(str(pack_path), str(exc)) from exc
        return len(lines)
