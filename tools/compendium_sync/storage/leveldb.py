"""LevelDB pack codec.

Packs are LevelDB directories. Every primary document is stored under
``!<collection>!<id>``; embedded sub-documents (an actor's items, an item's
effects ...) are stored under their own sublevel, ``!<collection>.<field>!
<parentId>.<id>``, and the parent keeps only the list of their ids.

Reading reassembles that structure and sets ``_key`` on every document and
sub-document; writing takes it apart again. The database format itself is
handled by plyvel, an optional dependency imported on first use.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from compendium_sync.config import EMBEDDED_COLLECTIONS
from compendium_sync.errors import CodecError, CodecUnavailableError


def _plyvel() -> Any:
    """Import plyvel, reporting a missing install as a CLI error."""
    try:
        import plyvel  # type: ignore[import-untyped]
    except ModuleNotFoundError as exc:
        raise CodecUnavailableError("leveldb", "plyvel") from exc
    return plyvel


def split_key(key: str) -> tuple[str, str]:
    """Split a storage key into (collection, id path).

    Raises:
        ValueError: If the key is not of the form !collection!id
    """
    parts = key.split("!")
    if len(parts) != 3 or parts[0] or not parts[1] or not parts[2]:
        raise ValueError(f"malformed storage key {key!r}")
    return parts[1], parts[2]


class LevelDbCodec:
    """Pack codec for LevelDB pack directories."""

    name = "leveldb"

    def pack_location(self, dest_root: Path, pack_name: str) -> Path:
        return dest_root / pack_name

    def read_documents(self, pack_path: Path) -> Iterator[dict[str, Any]]:
        """Yield every primary document with embedded documents expanded.

        Raises:
            CodecError: If the pack is missing, unreadable or inconsistent
        """
        plyvel = _plyvel()
        if not pack_path.is_dir():
            raise CodecError(str(pack_path), "pack directory not found")
        try:
            db = plyvel.DB(str(pack_path), create_if_missing=False)
            try:
                records = {key.decode("utf-8"): json.loads(value) for key, value in db}
            finally:
                db.close()
        except (plyvel.Error, ValueError) as exc:
            raise CodecError(str(pack_path), str(exc)) from exc

        for key in sorted(records):
            try:
                collection, doc_id = split_key(key)
                if "." in collection:
                    continue
                document = self._expand(records, key, collection, doc_id, str(pack_path))
            except (TypeError, ValueError) as exc:
                raise CodecError(str(pack_path), str(exc)) from exc
            yield document

    def write_documents(self, pack_path: Path, documents: Iterable[Mapping[str, Any]]) -> int:
        """Replace the pack content with documents.

        Every document must carry a valid _key; embedded documents must carry
        an _id. Existing keys are deleted in the same batch.

        Raises:
            CodecError: If a document cannot be stored
        """
        plyvel = _plyvel()
        records: dict[str, str] = {}
        count = 0
        try:
            for document in documents:
                key = document.get("_key")
                if not isinstance(key, str):
                    raise ValueError(f"document {document.get('_id')!r} has no _key")
                collection, doc_id = split_key(key)
                self._flatten(records, document, key, collection, doc_id)
                count += 1
        except (TypeError, ValueError) as exc:
            raise CodecError(str(pack_path), str(exc)) from exc

        try:
            pack_path.mkdir(parents=True, exist_ok=True)
            db = plyvel.DB(str(pack_path), create_if_missing=True)
            try:
                with db.write_batch() as batch:
                    for stale in db.iterator(include_value=False):
                        batch.delete(stale)
                    for key, value in records.items():
                        batch.put(key.encode("utf-8"), value.encode("utf-8"))
            finally:
                db.close()
        except (plyvel.Error, OSError) as exc:
            raise CodecError(str(pack_path), str(exc)) from exc
        return count

    def _expand(
        self,
        records: Mapping[str, Any],
        key: str,
        collection: str,
        id_path: str,
        pack: str,
    ) -> dict[str, Any]:
        """Rebuild one stored document and its embedded documents."""
        document = dict(records[key])
        for field in EMBEDDED_COLLECTIONS.get(collection, ()):
            child_ids = document.get(field)
            if not isinstance(child_ids, list):
                continue
            sublevel = f"{collection}.{field}"
            children: list[Any] = []
            for child_id in child_ids:
                if not isinstance(child_id, str):
                    children.append(child_id)
                    continue
                child_path = f"{id_path}.{child_id}"
                child_key = f"!{sublevel}!{child_path}"
                if child_key not in records:
                    raise CodecError(pack, f"missing embedded document {child_key}")
                children.append(self._expand(records, child_key, sublevel, child_path, pack))
            document[field] = children
        document["_key"] = key
        return document

    def _flatten(
        self,
        records: dict[str, str],
        document: Mapping[str, Any],
        key: str,
        collection: str,
        id_path: str,
    ) -> None:
        """Store one document, moving embedded documents to their sublevel."""
        stored = {name: value for name, value in document.items() if name != "_key"}
        for field in EMBEDDED_COLLECTIONS.get(collection, ()):
            children = stored.get(field)
            if not isinstance(children, list):
                continue
            sublevel = f"{collection}.{field}"
            child_ids: list[Any] = []
            for child in children:
                if not isinstance(child, Mapping):
                    child_ids.append(child)
                    continue
                child_id = child.get("_id")
                if not isinstance(child_id, str) or not child_id:
                    raise ValueError(f"embedded {field} entry of {key} has no _id")
                child_path = f"{id_path}.{child_id}"
                self._flatten(records, child, f"!{sublevel}!{child_path}", sublevel, child_path)
                child_ids.append(child_id)
            stored[field] = child_ids
        records[key] = json.dumps(stored, ensure_ascii=False, separators=(",", ":"))
