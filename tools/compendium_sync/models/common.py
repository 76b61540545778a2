"""Common types shared across domain models.

This module defines the identifier types used by documents and folders.
"""

from __future__ import annotations

from typing import Any, NewType

from compendium_sync.config import FOLDER_KEY_PREFIX

# -----------------------------------------------------------------------------
# Identifier Types
# -----------------------------------------------------------------------------

DocumentId = NewType("DocumentId", str)
"""Stable document identifier (the ``_id`` field)."""

StorageKey = NewType("StorageKey", str)
"""Storage key (the ``_key`` field), e.g. ``!items!abc123``.

The segment between the first two ``!`` names the collection; embedded
collections use dotted names such as ``!actors.items!actorId.itemId``.
"""


def validate_document_id(value: Any) -> DocumentId | None:
    """Return the value as a DocumentId when it is a non-empty string."""
    if isinstance(value, str) and value:
        return DocumentId(value)
    return None


def validate_storage_key(value: Any) -> StorageKey | None:
    """Return the value as a StorageKey when it is a non-empty string."""
    if isinstance(value, str) and value:
        return StorageKey(value)
    return None


def is_folder_key(key: str) -> bool:
    """Check whether a storage key belongs to the folders collection."""
    return key.startswith(FOLDER_KEY_PREFIX)
