"""Entry normalization for pack documents.

Removes unwanted flags, permissions and audit data from documents before
they are extracted to source files or compiled into a pack, so exports made
by different authors on different machines are byte-identical.

All rules tolerate missing or wrong-typed fields: normalization never raises
on malformed documents, it only skips what is not there.
"""

from __future__ import annotations

from typing import Any, MutableMapping

from compendium_sync.config import (
    DEFAULT_OWNERSHIP,
    EMBEDDED_FIELDS,
    LAST_MODIFIED_BY,
    TRANSIENT_FLAGS,
)
from compendium_sync.normalization.text import clean_string


def clean_pack_entry(
    data: MutableMapping[str, Any],
    *,
    clear_source_id: bool = True,
    ownership: int = DEFAULT_OWNERSHIP,
) -> None:
    """Normalize a single document in place.

    Args:
        data: Document mapping to clean
        clear_source_id: Whether provenance markers (_stats.compendiumSource
            and flags.core.sourceId) are deleted. Embedded sub-documents are
            always cleaned with this disabled.
        ownership: Value the default ownership level is reset to

    Invariants:
        - Applying it twice leaves the document as applying it once
        - data["flags"] is a mapping afterwards unless it held a non-mapping
          truthy value
    """
    if data.get("ownership") is not None:
        data["ownership"] = {"default": ownership}

    stats = data.get("_stats")
    flags = data.get("flags")

    if clear_source_id:
        if isinstance(stats, MutableMapping):
            stats.pop("compendiumSource", None)
        if isinstance(flags, MutableMapping):
            core = flags.get("core")
            if isinstance(core, MutableMapping):
                core.pop("sourceId", None)

    if isinstance(flags, MutableMapping):
        for namespace in TRANSIENT_FLAGS:
            flags.pop(namespace, None)

    if isinstance(stats, MutableMapping) and stats.get("lastModifiedBy"):
        stats["lastModifiedBy"] = LAST_MODIFIED_BY

    _prune_empty_flags(data)

    for embedded_field in EMBEDDED_FIELDS:
        embedded = data.get(embedded_field)
        if not isinstance(embedded, list):
            continue
        for child in embedded:
            if isinstance(child, MutableMapping):
                clean_pack_entry(child, clear_source_id=False, ownership=ownership)

    _clean_text_fields(data)


def _prune_empty_flags(data: MutableMapping[str, Any]) -> None:
    """Ensure flags exists and drop namespaces left without any entries."""
    if not data.get("flags"):
        data["flags"] = {}
    flags = data["flags"]
    if not isinstance(flags, MutableMapping):
        return
    for namespace in list(flags):
        contents = flags[namespace]
        if isinstance(contents, MutableMapping) and not contents:
            del flags[namespace]


def _clean_text_fields(data: MutableMapping[str, Any]) -> None:
    """Canonicalize the description, label and name strings."""
    system = data.get("system")
    description = system.get("description") if isinstance(system, MutableMapping) else None
    if isinstance(description, MutableMapping):
        value = description.get("value")
        if isinstance(value, str) and value:
            description["value"] = clean_string(value)

    for text_field in ("label", "name"):
        value = data.get(text_field)
        if isinstance(value, str) and value:
            data[text_field] = clean_string(value)
