from __future__ import annotations

import stat
from pathlib import Path
from typing import Any

from compendium_sync.commands.clean import clean_source_tree
from compendium_sync.commands.unpack import extract_pack
from compendium_sync.persistence import parse_source_file
from tests.helpers import MemoryCodec, read_tree

PACK = Path("packs/spells")

HAND_EDITED = """\
_id: i1
_key: '!items!i1'
name: "Tasha’s Laughter"
ownership:
  default: 3
  someone000000001: 3
flags:
  importSource:
    path: foo.json
system:
  description:
    value: "<p>A “funny” spell</p>"
"""


def test_clean_rewrites_documents(tmp_path: Path) -> None:
    path = tmp_path / "tashas-laughter.yml"
    path.write_text(HAND_EDITED, encoding="utf-8")
    path.chmod(0o600)

    report = clean_source_tree(tmp_path)

    assert report.processed == 1
    data = parse_source_file(path)
    assert data["name"] == "Tasha's Laughter"
    assert data["ownership"] == {"default": 0}
    assert data["flags"] == {}
    assert data["system"]["description"]["value"] == '<p>A "funny" spell</p>'
    assert stat.S_IMODE(path.stat().st_mode) == 0o664


def test_invalid_file_is_left_untouched(tmp_path: Path) -> None:
    path = tmp_path / "notes.yml"
    original = b"name: Scratch\nownership:\n  default: 3\n"
    path.write_bytes(original)

    report = clean_source_tree(tmp_path, pack_name="spells")

    assert report.processed == 0
    assert len(report.skipped) == 1
    assert report.skipped[0].source == str(path)
    assert path.read_bytes() == original


def test_clean_is_noop_on_extracted_tree(tmp_path: Path, sample_pack: list[dict[str, Any]]) -> None:
    extract_pack(MemoryCodec({PACK: sample_pack}), PACK, tmp_path)
    before = read_tree(tmp_path)

    clean_source_tree(tmp_path)

    assert read_tree(tmp_path) == before


def test_clean_twice_is_byte_identical(tmp_path: Path) -> None:
    (tmp_path / "a.yml").write_text(HAND_EDITED, encoding="utf-8")
    (tmp_path / "b.yml").write_text(
        "_id: i2\n_key: '!items!i2'\nname: Wish\nflags: {core: {sourceId: Item.x}}\n",
        encoding="utf-8",
    )
    clean_source_tree(tmp_path)
    once = read_tree(tmp_path)

    clean_source_tree(tmp_path)

    assert read_tree(tmp_path) == once


def test_clean_keeps_item_in_folder_layout(tmp_path: Path) -> None:
    nested = tmp_path / "arcane" / "wish.yml"
    nested.parent.mkdir()
    nested.write_text("_id: i1\n_key: '!items!i1'\nname: Wish\n", encoding="utf-8")

    clean_source_tree(tmp_path)

    assert sorted(read_tree(tmp_path)) == ["arcane/wish.yml"]
    assert parse_source_file(nested) == {
        "_id": "i1",
        "_key": "!items!i1",
        "name": "Wish",
        "flags": {},
    }
