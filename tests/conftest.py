from __future__ import annotations

from typing import Any

import pytest

from tests.helpers import MemoryCodec, make_folder, make_item


@pytest.fixture
def memory_codec() -> MemoryCodec:
    return MemoryCodec()


@pytest.fixture
def sample_pack() -> list[dict[str, Any]]:
    """Folders A > B > C, documents at several depths and one orphan."""
    return [
        make_folder("fldA", "Arcane Spells"),
        make_folder("fldB", "Level 1", parent="fldA"),
        make_folder("fldC", "Enchantment", parent="fldB"),
        make_item(
            "itm1",
            "Tasha's Hideous Laughter",
            folder="fldC",
            ownership={"default": 0, "user0000000001": 3},
            _stats={"compendiumSource": "Compendium.dnd5e.spells.abc", "lastModifiedBy": "user0000000001"},
            flags={"core": {"sourceId": "Compendium.dnd5e.spells.abc"}, "importSource": {"path": "x"}},
            system={"description": {"value": "<p>It laughs.</p>"}},
        ),
        make_item("itm2", "Magic Missile", folder="fldB"),
        make_item("itm3", "Wish", folder="missing0000001"),
        make_item(
            "itm4",
            "Wand of Wonder",
            effects=[{"_id": "eff1", "name": "Charged", "flags": {"exportSource": {"world": "w"}}}],
        ),
    ]
