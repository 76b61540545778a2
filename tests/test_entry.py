from __future__ import annotations

import copy
from typing import Any

from hypothesis import given, settings, strategies as st

from compendium_sync.config import LAST_MODIFIED_BY
from compendium_sync.normalization import clean_pack_entry

# -----------------------------------------------------------------------------
# Strategies
# -----------------------------------------------------------------------------

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(max_size=8),
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=6), children, max_size=3),
    max_leaves=12,
)

display_text = st.text(alphabet="ab '\"-\u2018\u2019\u201c\u201d\u2060", max_size=12)

flag_namespaces = st.dictionaries(
    st.sampled_from(["core", "dnd5e", "importSource", "exportSource", "babele"]),
    st.dictionaries(st.sampled_from(["sourceId", "path", "x"]), st.text(max_size=4), max_size=2),
    max_size=4,
)


@st.composite
def documents(draw: Any, depth: int = 2) -> dict[str, Any]:
    document: dict[str, Any] = {"_id": draw(st.text(min_size=1, max_size=6)), "_key": "!items!x"}
    if draw(st.booleans()):
        document["name"] = draw(display_text)
    if draw(st.booleans()):
        document["label"] = draw(display_text)
    if draw(st.booleans()):
        document["ownership"] = draw(st.dictionaries(st.text(max_size=4), st.integers(0, 3), max_size=3))
    if draw(st.booleans()):
        document["flags"] = draw(flag_namespaces)
    if draw(st.booleans()):
        document["_stats"] = {
            "compendiumSource": draw(st.none() | st.text(max_size=4)),
            "lastModifiedBy": draw(st.none() | st.text(max_size=4)),
        }
    if draw(st.booleans()):
        document["system"] = {"description": {"value": draw(display_text)}}
    if depth > 0:
        for field in ("items", "effects"):
            if draw(st.booleans()):
                document[field] = draw(st.lists(documents(depth - 1), max_size=2))
    return document


malformed_documents = st.dictionaries(
    st.sampled_from(["ownership", "flags", "_stats", "items", "effects", "system", "name", "label"]),
    json_values,
    max_size=6,
)


def _cleaned(document: dict[str, Any], **options: Any) -> dict[str, Any]:
    result = copy.deepcopy(document)
    clean_pack_entry(result, **options)
    return result


# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------

@settings(max_examples=200)
@given(documents())
def test_normalization_is_idempotent(document: dict[str, Any]) -> None:
    once = _cleaned(document)
    assert _cleaned(once) == once


@given(malformed_documents)
def test_malformed_documents_are_normalized_without_errors(document: dict[str, Any]) -> None:
    once = _cleaned(document)
    assert _cleaned(once) == once


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------

def test_ownership_reset_to_single_default_entry() -> None:
    document = {"ownership": {"default": 2, "abcdefgh12345678": 3}}
    assert _cleaned(document)["ownership"] == {"default": 0}
    assert _cleaned(document, ownership=2)["ownership"] == {"default": 2}


def test_empty_ownership_map_is_reset() -> None:
    assert _cleaned({"ownership": {}}, ownership=2)["ownership"] == {"default": 2}


def test_missing_ownership_is_not_added() -> None:
    assert "ownership" not in _cleaned({"name": "Wish"})
    assert _cleaned({"ownership": None})["ownership"] is None


def test_top_level_provenance_is_removed() -> None:
    document = {
        "_stats": {"compendiumSource": "Compendium.x", "duplicateSource": None},
        "flags": {"core": {"sourceId": "Compendium.x", "sheetClass": "a"}},
    }
    cleaned = _cleaned(document)
    assert cleaned["_stats"] == {"duplicateSource": None}
    assert cleaned["flags"] == {"core": {"sheetClass": "a"}}


def test_clear_source_id_can_be_disabled() -> None:
    document = {"_stats": {"compendiumSource": "Compendium.x"}, "flags": {"core": {"sourceId": "y"}}}
    cleaned = _cleaned(document, clear_source_id=False)
    assert cleaned["_stats"]["compendiumSource"] == "Compendium.x"
    assert cleaned["flags"]["core"]["sourceId"] == "y"


def test_transient_flags_and_empty_namespaces_are_removed() -> None:
    document = {
        "flags": {
            "core": {"sourceId": "x"},
            "dnd5e": {},
            "importSource": {"path": "a"},
            "exportSource": {"world": "b"},
            "other": {"kept": 1},
        }
    }
    assert _cleaned(document)["flags"] == {"other": {"kept": 1}}


def test_flags_mapping_is_always_present() -> None:
    assert _cleaned({"name": "Wish"})["flags"] == {}
    assert _cleaned({"flags": None})["flags"] == {}


def test_last_modified_by_replaced_with_sentinel() -> None:
    cleaned = _cleaned({"_stats": {"lastModifiedBy": "user0000000001", "modifiedTime": 5}})
    assert cleaned["_stats"] == {"lastModifiedBy": LAST_MODIFIED_BY, "modifiedTime": 5}


def test_unset_last_modified_by_is_left_alone() -> None:
    assert _cleaned({"_stats": {"lastModifiedBy": None}})["_stats"] == {"lastModifiedBy": None}


def test_nested_documents_keep_provenance_but_lose_transient_markers() -> None:
    document = {
        "_stats": {"compendiumSource": "Compendium.top"},
        "items": [
            {
                "name": "Inner\u2019s",
                "ownership": {"default": 3, "someone": 1},
                "_stats": {"compendiumSource": "Compendium.inner", "lastModifiedBy": "abc"},
                "flags": {"core": {"sourceId": "Compendium.inner"}, "importSource": {"a": 1}},
                "items": [
                    {
                        "label": "\u201cDeep\u201d",
                        "_stats": {"compendiumSource": "Compendium.deep", "lastModifiedBy": "def"},
                        "flags": {"exportSource": {"b": 2}, "empty": {}},
                    }
                ],
            }
        ],
        "effects": [{"flags": {"importSource": {}}, "_stats": {"lastModifiedBy": "ghi"}}],
    }
    cleaned = _cleaned(document)

    assert "compendiumSource" not in cleaned["_stats"]
    inner = cleaned["items"][0]
    assert inner["name"] == "Inner's"
    assert inner["ownership"] == {"default": 0}
    assert inner["_stats"] == {"compendiumSource": "Compendium.inner", "lastModifiedBy": LAST_MODIFIED_BY}
    assert inner["flags"] == {"core": {"sourceId": "Compendium.inner"}}

    deep = inner["items"][0]
    assert deep["label"] == '"Deep"'
    assert deep["_stats"] == {"compendiumSource": "Compendium.deep", "lastModifiedBy": LAST_MODIFIED_BY}
    assert deep["flags"] == {}

    assert cleaned["effects"][0] == {"flags": {}, "_stats": {"lastModifiedBy": LAST_MODIFIED_BY}}


def test_text_fields_are_canonicalized() -> None:
    document = {
        "name": "Tasha\u2019s",
        "label": "\u2060Label",
        "system": {"description": {"value": "<p>\u201cHi\u201d</p>", "chat": "\u2019"}},
    }
    cleaned = _cleaned(document)
    assert cleaned["name"] == "Tasha's"
    assert cleaned["label"] == "Label"
    assert cleaned["system"]["description"] == {"value": '<p>"Hi"</p>', "chat": "\u2019"}


def test_wrong_typed_fields_are_ignored() -> None:
    document = {
        "name": 42,
        "system": ["not", "a", "mapping"],
        "items": "nope",
        "effects": [1, None, {"name": "ok"}],
        "_stats": "x",
        "flags": ["kept"],
    }
    cleaned = _cleaned(document)
    assert cleaned["name"] == 42
    assert cleaned["system"] == ["not", "a", "mapping"]
    assert cleaned["items"] == "nope"
    assert cleaned["effects"] == [1, None, {"name": "ok", "flags": {}}]
    assert cleaned["flags"] == ["kept"]
